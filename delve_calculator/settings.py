"""User settings: data location, reward display modes and the last tabs."""
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .config import (
    DATA_DIR_ENV,
    DATA_FOLDER_NAME,
    LEGACY_PROPERTIES_FILE_NAME,
    LOG_FILE_NAME,
    LOG_LEVEL_ENV,
    PROFILES_FILE_NAME,
    SETTINGS_FILE_NAME,
    UNIQUE_ITEMS,
)
from .models import RewardDisplayMode, StatMode, View

logger = logging.getLogger(__name__)


def default_data_dir() -> Path:
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".runelite" / DATA_FOLDER_NAME


def _default_display_modes() -> dict[int, RewardDisplayMode]:
    return {item.item_id: RewardDisplayMode.SHOW for item in UNIQUE_ITEMS}


@dataclass
class TrackerSettings:
    """Settings for a tracker and its front-ends."""
    data_dir: Path = field(default_factory=default_data_dir)
    display_modes: dict[int, RewardDisplayMode] = field(default_factory=_default_display_modes)
    active_view: View = View.ALL
    active_mode: StatMode = StatMode.EXPECTED
    log_level: str = field(default_factory=lambda: os.environ.get(LOG_LEVEL_ENV, "INFO"))

    @property
    def profiles_path(self) -> Path:
        return self.data_dir / PROFILES_FILE_NAME

    @property
    def settings_path(self) -> Path:
        return self.data_dir / SETTINGS_FILE_NAME

    @property
    def legacy_path(self) -> Path:
        return self.data_dir / LEGACY_PROPERTIES_FILE_NAME

    @property
    def log_path(self) -> Path:
        return self.data_dir / LOG_FILE_NAME

    def display_mode(self, item_id: int) -> RewardDisplayMode:
        return self.display_modes.get(item_id, RewardDisplayMode.SHOW)

    def counts_toward_any(self, item_id: int) -> bool:
        """Whether an item is part of the 'any unique' aggregate."""
        return self.display_mode(item_id).counts_toward_any()

    def to_dict(self) -> dict:
        return {
            "displayModes": {str(item_id): mode.name for item_id, mode in self.display_modes.items()},
            "activeViewTab": self.active_view.name,
            "activeModeTab": self.active_mode.name,
            "logLevel": self.log_level,
        }

    def apply_dict(self, data: dict) -> None:
        """Take every recognised value from a settings document.

        Unknown names are skipped, so older and newer files both load.
        """
        for item_id, mode in (data.get("displayModes") or {}).items():
            if mode in RewardDisplayMode.__members__:
                self.display_modes[int(item_id)] = RewardDisplayMode[mode]
        if data.get("activeViewTab") in View.__members__:
            self.active_view = View[data["activeViewTab"]]
        if data.get("activeModeTab") in StatMode.__members__:
            self.active_mode = StatMode[data["activeModeTab"]]
        if isinstance(data.get("logLevel"), str):
            self.log_level = data["logLevel"]

    @classmethod
    def load(cls, data_dir: Optional[Path] = None) -> "TrackerSettings":
        """Settings from data_dir, falling back to defaults."""
        settings = cls(data_dir=Path(data_dir)) if data_dir else cls()
        path = settings.settings_path
        if not path.exists():
            return settings
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise TypeError("settings must be a JSON object")
            settings.apply_dict(data)
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Ignoring unreadable settings %s: %s", path, e)
        return settings

    def save(self) -> bool:
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            self.settings_path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        except OSError as e:
            logger.error("Failed to save settings to %s: %s", self.settings_path, e)
            return False
        return True
