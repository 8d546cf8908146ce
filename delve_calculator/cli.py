"""Command-line interface for the Delve calculator."""
import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from .config import DEFAULT_GAME_MODE, UNIQUE_ITEMS
from .drop_table import DEFAULT_TABLE
from .events import find_unique
from .logger import setup_logger
from .models import (
    FLOOR_MAX,
    FLOOR_MIN,
    OVERFLOW_FLOOR,
    Floor,
    InvalidFloorError,
    RewardDisplayMode,
    StatMode,
    View,
)
from .profile import Profile
from .settings import TrackerSettings
from .tracker import DelveTracker
from .utils import floor_label, format_count, format_luck, format_rate, luck_bar


def resolve_item(text: str) -> int:
    """Item id from an id, an item name or a display label."""
    text = text.strip()
    if text.isdigit():
        return int(text)
    item = find_unique(text)
    if item is None:
        for candidate in UNIQUE_ITEMS:
            if candidate.label.lower() == text.lower():
                item = candidate
                break
    if item is None:
        raise ValueError(f"Unknown item: {text!r}")
    return item.item_id


def parse_kill_sync(text: str) -> tuple[dict[int, int], int]:
    """Parse "1=10,2=4,8+=3" into floor kills and waves past 8."""
    level_kills: dict[int, int] = {}
    waves_past_8 = 0
    for part in text.split(","):
        if not part.strip():
            continue
        floor_text, sep, kills_text = part.partition("=")
        if not sep or not kills_text.strip().isdigit():
            raise ValueError(f"Expected FLOOR=KILLS, got {part.strip()!r}")
        floor = Floor.parse(floor_text)
        if floor.is_overflow:
            waves_past_8 = int(kills_text)
        else:
            level_kills[floor.level] = int(kills_text)
    return level_kills, waves_past_8


def print_rate_table() -> None:
    """Print the per-floor unique drop rate table."""
    items = DEFAULT_TABLE.items
    print("\n" + "=" * 78)
    print("  Unique Drop Rates by Floor")
    print("=" * 78)
    print(f"{'Floor':<7}" + "".join(f"{item.label:<18}" for item in items))
    print("-" * 78)
    for floor in DEFAULT_TABLE.floors():
        row = f"{floor_label(floor):<7}"
        for item in items:
            row += f"{format_rate(DEFAULT_TABLE.rate(floor, item.item_id)):<18}"
        print(row)
    print("=" * 78)
    print("Note: 8+ applies to every wave cleared past floor 8")
    print()


def print_kills(profile: Profile) -> None:
    print(f"\nTotal kills: {format_count(profile.total_kills())}")
    cells = [
        f"{floor_label(floor)}: {profile.kills_for_floor(floor)}"
        for floor in list(range(FLOOR_MIN, FLOOR_MAX + 1)) + [OVERFLOW_FLOOR]
    ]
    print("  " + "  ".join(cells))


def print_expected(tracker: DelveTracker, profile: Profile) -> None:
    print("\n" + "-" * 60)
    print("  EXPECTED DROPS")
    print("-" * 60)
    print(f"  {'Item':<18} {'Expected':>9} {'By rate':>8} {'Next':>6} {'Obtained':>9}")
    for progress in tracker.get_progress(profile):
        if progress.item_id is None:
            obtained = sum(
                profile.obtained(item.item_id) for item in tracker.table.items
                if tracker.settings.counts_toward_any(item.item_id)
            )
        elif tracker.settings.display_mode(progress.item_id) is RewardDisplayMode.HIDE:
            continue
        else:
            obtained = profile.obtained(progress.item_id)
        print(
            f"  {progress.label:<18} {progress.expected:>9.3f} {progress.whole:>8} "
            f"{progress.percent:>5}% {obtained:>9}"
        )


def print_luck(tracker: DelveTracker, profile: Profile) -> None:
    report = tracker.get_luck(profile)
    print("\n" + "-" * 60)
    print("  LUCK (obtained - expected)")
    print("-" * 60)
    for row in list(report.items) + [report.any_unique]:
        if row.item_id is not None and tracker.settings.display_mode(row.item_id) is RewardDisplayMode.HIDE:
            continue
        print(f"  {row.label:<18} {format_luck(row.luck):>7}  [{luck_bar(row.normalized)}]")
    print(f"\n  Scale: ±{report.scale:.2f}")


def report_dict(tracker: DelveTracker, game_mode: str, view: View) -> dict:
    profile = tracker.get_profile(game_mode, view)
    luck = tracker.get_luck(profile)
    return {
        "game_mode": game_mode,
        "view": view.name,
        "profile": profile.to_dict(),
        "total_kills": profile.total_kills(),
        "expected": {str(item_id): value for item_id, value in tracker.get_expected_drops(profile).items()},
        "any_expected": tracker.get_any_expected(profile),
        "luck": {str(row.item_id): row.luck for row in luck.items},
        "any_luck": luck.any_unique.luck,
        "luck_scale": luck.scale,
    }


def print_report(tracker: DelveTracker, game_mode: str, view: View, mode: StatMode) -> None:
    """Pretty print one profile."""
    profile = tracker.get_profile(game_mode, view)
    print("\n" + "=" * 60)
    print(f"  Delve Calculator: {game_mode} ({profile.name})")
    print("=" * 60)
    print_kills(profile)
    if mode is StatMode.LUCK:
        print_luck(tracker, profile)
    else:
        print_expected(tracker, profile)
    print("\n" + "=" * 60)


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Delve kill-count and unique-drop calculator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                               # Show all-time expected drops
  %(prog)s --floor 6 --floor 8+          # Record two completions
  %(prog)s --drop "Avernic treads"       # Record a unique
  %(prog)s --sync-kills 1=10,2=4,8+=3    # Overwrite all-time kill counts
  %(prog)s --view manual --mode luck     # Luck on the resettable profile
  %(prog)s --show-rates                  # Show the drop rate table
        """,
    )

    parser.add_argument(
        "--game-mode", "-g",
        default=DEFAULT_GAME_MODE,
        help=f"Game mode key (default: {DEFAULT_GAME_MODE})",
    )
    parser.add_argument(
        "--floor", "-f",
        action="append",
        default=[],
        help="Record a completed floor (1-8 or 8+); repeatable",
    )
    parser.add_argument(
        "--drop", "-d",
        action="append",
        default=[],
        help="Record an obtained unique by id or name; repeatable",
    )
    parser.add_argument(
        "--sync-kills",
        metavar="FLOOR=KILLS,...",
        help="Overwrite all-time kill counts, e.g. 1=10,2=4,8+=3",
    )
    parser.add_argument(
        "--reset-manual",
        action="store_true",
        help="Reset the manual profile before anything else",
    )
    parser.add_argument(
        "--view",
        choices=[view.value for view in View],
        help="Profile to report (default: last used)",
    )
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in StatMode],
        help="Report expected drops or luck (default: last used)",
    )
    parser.add_argument(
        "--show-rates",
        action="store_true",
        help="Show the unique drop rate table",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output the report as JSON",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory holding profiles and settings",
    )

    args = parser.parse_args(argv)

    if args.show_rates:
        print_rate_table()
        return 0

    settings = TrackerSettings.load(args.data_dir)
    setup_logger(settings.log_level)

    try:
        floors = [Floor.parse(text) for text in args.floor]
        drops = [resolve_item(text) for text in args.drop]
        kill_sync = parse_kill_sync(args.sync_kills) if args.sync_kills else None
    except (InvalidFloorError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    tracker = DelveTracker.open(settings)
    game_mode = args.game_mode

    if args.reset_manual:
        tracker.reset_manual(game_mode)
    if kill_sync is not None:
        tracker.on_authoritative_kill_sync(game_mode, *kill_sync)
    for floor in floors:
        tracker.on_floor_completed(game_mode, floor)
    for item_id in drops:
        tracker.on_drop_obtained(game_mode, item_id)

    view = View(args.view) if args.view else settings.active_view
    mode = StatMode(args.mode) if args.mode else settings.active_mode

    if args.json:
        print(json.dumps(report_dict(tracker, game_mode, view), indent=2))
    else:
        print_report(tracker, game_mode, view, mode)
    return 0


if __name__ == "__main__":
    sys.exit(main())
