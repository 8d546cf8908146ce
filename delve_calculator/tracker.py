"""DelveTracker: the API front-ends and host glue talk to."""
import logging
from typing import Iterable, Mapping, Optional, Sequence, Union

from .config import DEFAULT_GAME_MODE, DOM
from .drop_table import DEFAULT_TABLE, DropRateTable
from .events import (
    CollectionLogEntry,
    is_pet_message,
    parse_collection_log,
    parse_completion_message,
    parse_scoreboard,
    uniques_in_loot,
)
from .luck import LuckEngine, LuckReport
from .models import Floor, InvalidFloorError, ItemKey, View
from .persistence import ProfileFile, load_legacy_properties
from .profile import Profile
from .progress import ItemProgress, ProgressCalculator
from .settings import TrackerSettings
from .store import ProfileStore

logger = logging.getLogger(__name__)


class DelveTracker:
    """Routes game events into a ProfileStore and computes statistics.

    Floors arrive in whatever form the host has; ones that do not parse
    are logged and dropped rather than raised into the caller.
    """

    def __init__(
        self,
        store: Optional[ProfileStore] = None,
        table: DropRateTable = DEFAULT_TABLE,
        settings: Optional[TrackerSettings] = None,
    ):
        self.store = store or ProfileStore()
        self.table = table
        self.settings = settings or TrackerSettings()
        self.calculator = ProgressCalculator(table, counted=self.settings.counts_toward_any)
        self.luck_engine = LuckEngine(self.calculator)

    @classmethod
    def open(cls, settings: Optional[TrackerSettings] = None) -> "DelveTracker":
        """A tracker whose profiles are saved under settings.data_dir.

        When no profile document exists yet but the first plugin version's
        properties file does, its counts seed the STANDARD all-time profile.
        """
        settings = settings or TrackerSettings.load()
        profile_file = ProfileFile(settings.profiles_path)
        store = ProfileStore()
        blob = profile_file.load()
        store.deserialize(blob)
        store.on_commit = profile_file.save

        tracker = cls(store=store, settings=settings)
        if blob is None:
            tracker._import_legacy()
        return tracker

    def _import_legacy(self) -> None:
        legacy = load_legacy_properties(self.settings.legacy_path)
        if legacy is None:
            return
        level_kills, waves_past_8 = legacy
        level_kills = {floor: kills for floor, kills in level_kills.items() if kills}
        if not level_kills and not waves_past_8:
            return
        logger.info("Importing legacy kill counts from %s", self.settings.legacy_path)
        self.store.sync_authoritative(DEFAULT_GAME_MODE, level_kills, waves_past_8)

    # Inbound events

    def on_floor_completed(self, game_mode: str, floor: Union[Floor, int, str]) -> bool:
        try:
            parsed = Floor.parse(floor)
        except InvalidFloorError as e:
            logger.warning("Ignoring completion for %s: %s", game_mode, e)
            return False
        self.store.record_floor_completion(game_mode, parsed)
        return True

    def on_drop_obtained(self, game_mode: str, item_id: ItemKey) -> None:
        self.store.record_drop(game_mode, item_id)

    def on_authoritative_kill_sync(
        self,
        game_mode: str,
        level_kills: Mapping[int, int],
        waves_past_8: int,
    ) -> None:
        self.store.sync_authoritative(game_mode, level_kills, waves_past_8)

    def on_authoritative_drop_sync(self, game_mode: str, obtained_counts: Mapping[ItemKey, int]) -> None:
        self.store.sync_obtained_drops(game_mode, obtained_counts)

    def reset_manual(self, game_mode: str) -> None:
        self.store.reset_manual(game_mode)

    # Text the host read out of the client

    def handle_chat_message(self, game_mode: str, message: str, in_region: bool = True) -> bool:
        """Record whatever a chat line announces. Returns True if it was recorded.

        Pet messages only count inside the delve: the same lines are used
        by every other pet in the game.
        """
        floor = parse_completion_message(message)
        if floor is not None:
            return self.on_floor_completed(game_mode, floor)
        if in_region and is_pet_message(message):
            self.on_drop_obtained(game_mode, DOM)
            return True
        return False

    def handle_loot(self, game_mode: str, item_names: Iterable[str]) -> list[int]:
        drops = uniques_in_loot(item_names)
        for item_id in drops:
            self.on_drop_obtained(game_mode, item_id)
        return drops

    def handle_scoreboard(self, game_mode: str, cells: Sequence[Optional[str]]) -> None:
        level_kills, waves_past_8 = parse_scoreboard(cells)
        self.on_authoritative_kill_sync(game_mode, level_kills, waves_past_8)

    def handle_collection_log(self, game_mode: str, entries: Iterable[CollectionLogEntry]) -> bool:
        found = parse_collection_log(entries)
        if found is None:
            return False
        self.on_authoritative_drop_sync(game_mode, found)
        return True

    # Outbound queries

    def get_profile(self, game_mode: str, view: View) -> Profile:
        return self.store.get_profile(game_mode, view)

    def get_expected_drops(self, profile: Profile) -> dict[int, float]:
        return self.calculator.expected_drops(profile)

    def get_any_expected(self, profile: Profile) -> float:
        return self.calculator.any_unique_expected(profile)

    def get_progress(self, profile: Profile) -> list[ItemProgress]:
        return self.calculator.progress(profile) + [self.calculator.any_progress(profile)]

    def get_luck(self, profile: Profile) -> LuckReport:
        return self.luck_engine.report(profile)
