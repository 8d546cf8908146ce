"""Shared TUI screens for the Delve calculator."""

from .display_settings import DisplaySettingsScreen

__all__ = [
    "DisplaySettingsScreen",
]
