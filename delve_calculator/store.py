"""ProfileStore: every profile of every game mode, and how events reach them."""
import json
import logging
from typing import Any, Callable, Mapping, Optional

from .config import (
    ALL_PROFILE_NAME,
    MANUAL_KEY_SUFFIX,
    MANUAL_PROFILE_NAME,
    SESSION_PROFILE_NAME,
)
from .models import Floor, ItemKey, View
from .profile import Profile, item_key

logger = logging.getLogger(__name__)

PROFILE_NAMES = {
    View.ALL: ALL_PROFILE_NAME,
    View.MANUAL: MANUAL_PROFILE_NAME,
    View.SESSION: SESSION_PROFILE_NAME,
}

FAN_OUT_VIEWS = (View.ALL, View.MANUAL, View.SESSION)


def profile_key(game_mode: str, view: View) -> str:
    """Key of a profile in the persisted set (or the session set)."""
    if view is View.MANUAL:
        return game_mode + MANUAL_KEY_SUFFIX
    return game_mode


class ProfileStore:
    """Owns the persisted profiles and the session profiles.

    Persisted profiles are keyed "{game_mode}" (ALL) and
    "{game_mode}:MANUAL" (MANUAL). Session profiles live in their own map,
    keyed by game mode, and are never serialized.

    Args:
        on_commit: Called with the serialized document after every
            mutation of the persisted set.
    """

    def __init__(self, on_commit: Optional[Callable[[str], None]] = None):
        self.profiles: dict[str, Profile] = {}
        self.session_profiles: dict[str, Profile] = {}
        self.on_commit = on_commit
        self._extra: dict[str, Any] = {}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProfileStore):
            return NotImplemented
        return self.profiles == other.profiles and self._extra == other._extra

    def _bucket(self, view: View) -> dict[str, Profile]:
        return self.session_profiles if view is View.SESSION else self.profiles

    def get_profile(self, game_mode: str, view: View) -> Profile:
        """The profile for a mode and view.

        Queries never create entries: a mode with no events yet gets a
        detached empty profile.
        """
        existing = self._bucket(view).get(profile_key(game_mode, view))
        if existing is not None:
            return existing
        return Profile(PROFILE_NAMES[view])

    def has_profile(self, game_mode: str, view: View) -> bool:
        return profile_key(game_mode, view) in self._bucket(view)

    def game_modes(self) -> list[str]:
        modes = {key[: -len(MANUAL_KEY_SUFFIX)] if key.endswith(MANUAL_KEY_SUFFIX) else key
                 for key in self.profiles}
        modes.update(self.session_profiles)
        return sorted(modes)

    def _apply(self, game_mode: str, action: Callable[[Profile], None], views=FAN_OUT_VIEWS) -> None:
        """Apply an action to several profiles of a mode as one update.

        The action runs against copies; the copies replace the live
        profiles only once every one of them succeeded. Persistence runs
        once at the end, and only if a persisted view was touched.
        """
        staged = []
        for view in views:
            key = profile_key(game_mode, view)
            current = self._bucket(view).get(key)
            updated = current.copy() if current is not None else Profile(PROFILE_NAMES[view])
            action(updated)
            staged.append((view, key, updated))

        for view, key, updated in staged:
            self._bucket(view)[key] = updated

        if any(view is not View.SESSION for view in views):
            self._commit()

    def record_floor_completion(self, game_mode: str, floor: Floor) -> None:
        floor = Floor.parse(floor)
        if floor.is_overflow:
            self._apply(game_mode, lambda profile: profile.add_wave_8())
        else:
            self._apply(game_mode, lambda profile: profile.add_kills(floor.level, 1))
        logger.debug("Recorded floor %s completion for %s", floor, game_mode)

    def record_drop(self, game_mode: str, item_id: ItemKey) -> None:
        self._apply(game_mode, lambda profile: profile.add_drop(item_id))
        logger.info("Recorded drop %s for %s", item_id, game_mode)

    def sync_authoritative(
        self,
        game_mode: str,
        level_kills: Mapping[int, int],
        waves_past_8: int,
    ) -> None:
        """Overwrite the ALL profile's kill counts with the game's own."""
        snapshot = {int(floor): int(kills) for floor, kills in level_kills.items()}
        waves = int(waves_past_8)

        def overwrite(profile: Profile) -> None:
            profile.level_kills = dict(snapshot)
            profile.waves_past_8 = waves

        self._apply(game_mode, overwrite, views=(View.ALL,))
        logger.info("Synced kill counts for %s: %s floors, %s waves past 8", game_mode, len(snapshot), waves)

    def sync_obtained_drops(self, game_mode: str, obtained_counts: Mapping[ItemKey, int]) -> None:
        """Overwrite the ALL profile's obtained counts with the game's own."""
        snapshot = {item_key(item_id): int(count) for item_id, count in obtained_counts.items()}

        def overwrite(profile: Profile) -> None:
            profile.obtained_uniques = dict(snapshot)

        self._apply(game_mode, overwrite, views=(View.ALL,))
        logger.info("Synced obtained uniques for %s: %s", game_mode, snapshot)

    def reset_manual(self, game_mode: str) -> None:
        self._apply(game_mode, lambda profile: profile.reset(), views=(View.MANUAL,))
        logger.info("Reset manual profile for %s", game_mode)

    def serialize(self) -> str:
        document = dict(self._extra)
        document["profiles"] = {key: profile.to_dict() for key, profile in self.profiles.items()}
        return json.dumps(document, indent=2, sort_keys=True)

    def deserialize(self, blob: Optional[str]) -> None:
        """Replace the persisted profiles with those in a document.

        The document is user-editable, so an absent or malformed one leaves
        the store empty instead of raising. Session profiles are kept.
        """
        profiles: dict[str, Profile] = {}
        extra: dict[str, Any] = {}
        if blob:
            try:
                document = json.loads(blob)
                if not isinstance(document, dict):
                    raise TypeError(f"Expected a JSON object, got {type(document).__name__}")
                raw_profiles = document.get("profiles") or {}
                if not isinstance(raw_profiles, dict):
                    raise TypeError("'profiles' must be a JSON object")
                profiles = {str(key): Profile.from_dict(data) for key, data in raw_profiles.items()}
                extra = {key: value for key, value in document.items() if key != "profiles"}
            except (ValueError, TypeError, OverflowError, RecursionError) as e:
                logger.warning("Discarding unreadable profile data: %s", e)
                profiles, extra = {}, {}

        self.profiles = profiles
        self._extra = extra
        logger.debug("Loaded %s profiles", len(profiles))

    def _commit(self) -> None:
        if self.on_commit is not None:
            self.on_commit(self.serialize())
