"""Turning what the game shows into tracker events.

Everything here works on text the host has already read out of the client:
chat lines, scoreboard cells, collection-log entries and loot names. Floors
are validated here, through Floor.parse, before they reach any profile.
"""
import re
from typing import Iterable, NamedTuple, Optional, Sequence

from .config import DEFAULT_GAME_MODE, PET_ITEM_IDS, UNIQUE_ITEMS
from .models import FLOOR_MAX, Floor, InvalidFloorError, UniqueItem

COMPLETION_MARKERS = ("Delve level:", "duration:")

PET_MESSAGES = frozenset({
    "You have a funny feeling like you're being followed.",
    "You feel something weird sneaking into your backpack.",
    "You have a funny feeling like you would have been followed...",
})

SCOREBOARD_CELLS = FLOOR_MAX + 1  # floors 1-8, then 8+

_TAG_RE = re.compile(r"<[^>]*>")
_NON_DIGITS_RE = re.compile(r"[^0-9]")


class CollectionLogEntry(NamedTuple):
    name: str
    quantity: int
    obtained: bool = True


def strip_tags(message: str) -> str:
    """Remove client markup such as <col=ff0000>...</col>."""
    return _TAG_RE.sub("", message or "")


def game_mode_key(world_types: Optional[Iterable[str]] = None) -> str:
    """Profile key for a set of active world types.

    All active types are sorted and joined, so any new combination gets
    its own key without code changes.
    """
    names = sorted(str(getattr(t, "name", t)) for t in (world_types or ()))
    if not names:
        return DEFAULT_GAME_MODE
    return "_".join(names)


def find_unique(name: str, items: Iterable[UniqueItem] = UNIQUE_ITEMS) -> Optional[UniqueItem]:
    """Tracked unique with this name, case-insensitively."""
    wanted = (name or "").strip().lower()
    for item in items:
        if item.name.lower() == wanted:
            return item
    return None


def parse_completion_message(message: str) -> Optional[Floor]:
    """Floor reported by a delve completion chat message.

    Returns None for any other message, or when the floor token is not a
    floor (the game never sends one, so it is not worth an error).
    """
    text = strip_tags(message)
    if not all(marker in text for marker in COMPLETION_MARKERS):
        return None
    parts = text.split(" ")
    for i, part in enumerate(parts[:-1]):
        if part == "level:":
            try:
                return Floor.parse(parts[i + 1])
            except InvalidFloorError:
                return None
    return None


def is_pet_message(message: str) -> bool:
    return strip_tags(message).strip() in PET_MESSAGES


def parse_scoreboard(cells: Sequence[Optional[str]]) -> tuple[dict[int, int], int]:
    """Kill counts from the scoreboard's per-floor cells.

    Cells are floors 1-8 followed by 8+. Digits are pulled out of each
    cell's text; empty or digitless cells are left out.
    """
    level_kills: dict[int, int] = {}
    waves_past_8 = 0
    for index, cell in enumerate(list(cells)[:SCOREBOARD_CELLS]):
        digits = _NON_DIGITS_RE.sub("", cell or "")
        if not digits:
            continue
        kills = int(digits)
        if index == FLOOR_MAX:
            waves_past_8 = kills
        else:
            level_kills[index + 1] = kills
    return level_kills, waves_past_8


def parse_collection_log(entries: Iterable[CollectionLogEntry]) -> Optional[dict[int, int]]:
    """Obtained counts from a collection-log page.

    Returns None when the page lists none of the tracked uniques. Entries
    the player has not obtained yet count as 0.
    """
    found: dict[int, int] = {}
    for entry in entries:
        item = find_unique(entry.name)
        if item is None:
            continue
        found[item.item_id] = int(entry.quantity) if entry.obtained else 0
    return found or None


def uniques_in_loot(names: Iterable[str]) -> list[int]:
    """Tracked uniques among claimable loot; pets arrive by chat instead."""
    drops = []
    for name in names:
        item = find_unique(name)
        if item is not None and item.item_id not in PET_ITEM_IDS:
            drops.append(item.item_id)
    return drops
