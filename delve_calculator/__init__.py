"""Delve kill-count and unique-drop tracker.

Turns per-floor completion counts into expected unique drops and luck, and
keeps all-time, manual and session ledgers per game mode.
"""

from .drop_table import DEFAULT_TABLE, DropRateTable
from .luck import ItemLuck, LuckEngine, LuckReport, luck, max_magnitude
from .models import (
    DropRates,
    Floor,
    InvalidFloorError,
    RewardDisplayMode,
    StatMode,
    UniqueItem,
    View,
)
from .profile import Profile
from .progress import ItemProgress, ProgressCalculator, any_unique_expected, expected_drops
from .settings import TrackerSettings
from .store import ProfileStore
from .tracker import DelveTracker

__all__ = [
    # Tables
    "DEFAULT_TABLE",
    "DropRateTable",
    "DropRates",
    "UniqueItem",
    # Ledger
    "Floor",
    "InvalidFloorError",
    "Profile",
    "ProfileStore",
    "View",
    # Statistics
    "ItemProgress",
    "ProgressCalculator",
    "expected_drops",
    "any_unique_expected",
    "ItemLuck",
    "LuckEngine",
    "LuckReport",
    "luck",
    "max_magnitude",
    # Collaborator API
    "DelveTracker",
    "RewardDisplayMode",
    "StatMode",
    "TrackerSettings",
]
