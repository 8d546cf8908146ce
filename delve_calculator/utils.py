"""Utility functions for formatting and display."""
from .models import OVERFLOW_FLOOR, OVERFLOW_TEXT


def format_count(count: int) -> str:
    """Format a kill count with K/M suffix."""
    if count >= 1_000_000:
        return f"{count / 1_000_000:.1f}M"
    if count >= 10_000:
        return f"{count / 1_000:.1f}K"
    return str(count)


def format_rate(probability: float) -> str:
    """Format a probability as 1/N, or '-' when it cannot drop."""
    if probability <= 0:
        return "-"
    return f"1/{round(1 / probability):,}"


def format_luck(value: float) -> str:
    """Signed luck with two decimals, e.g. +0.42 or -1.10."""
    return f"{value:+.2f}"


def floor_label(floor: int) -> str:
    """Display label for a drop-table floor (9 is 8+)."""
    return OVERFLOW_TEXT if floor == OVERFLOW_FLOOR else str(floor)


def luck_bar(normalized: float, width: int = 20) -> str:
    """Centred text bar for a normalized luck value in [-1, 1]."""
    half = width // 2
    filled = min(half, round(abs(normalized) * half))
    if normalized < 0:
        return " " * (half - filled) + "#" * filled + "|" + " " * half
    return " " * half + "|" + "#" * filled + " " * (half - filled)
