"""On-disk storage of the profile document."""
import logging
import os
from pathlib import Path
from typing import Optional

from .models import FLOOR_MAX, FLOOR_MIN, OVERFLOW_TEXT

logger = logging.getLogger(__name__)


class ProfileFile:
    """The profile document on disk.

    Reads return None when there is nothing usable; writes go through a
    temporary file so a crash never leaves a half-written document.
    Failures are logged and swallowed: losing a save must not take the
    tracker down with it.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s: %s", self.path, e)
            return None

    def save(self, blob: str) -> bool:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, mode="w", encoding="utf-8", newline="\n") as f:
                f.write(blob)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error("Failed to save profile data to %s: %s", self.path, e, exc_info=True)
            return False
        logger.debug("Profile data saved to %s", self.path)
        return True


def parse_legacy_properties(text: str) -> tuple[dict[int, int], int]:
    """Kill counts from the first plugin version's properties file.

    That file held one "levelN=count" line per floor and "level8+=count"
    for the waves past 8. Unparseable values count as 0.
    """
    values: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line[0] in "#!":
            continue
        for sep in ("=", ":"):
            if sep in line:
                key, _, value = line.partition(sep)
                values[key.strip()] = value.strip()
                break

    level_kills: dict[int, int] = {}
    for level in range(FLOOR_MIN, FLOOR_MAX + 1):
        value = values.get(f"level{level}", "0")
        level_kills[level] = int(value) if value.isdigit() else 0
    waves = values.get(f"level{OVERFLOW_TEXT}", "0")
    return level_kills, int(waves) if waves.isdigit() else 0


def load_legacy_properties(path: Path) -> Optional[tuple[dict[int, int], int]]:
    path = Path(path)
    if not path.exists():
        return None
    try:
        text = path.read_text(encoding="latin-1")
    except OSError as e:
        logger.warning("Could not read legacy data %s: %s", path, e)
        return None
    return parse_legacy_properties(text)
