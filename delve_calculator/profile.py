"""Profile: a named ledger of floor completions and obtained uniques."""
import math
from dataclasses import dataclass, field
from typing import Any, Mapping

from .models import OVERFLOW_FLOOR, ItemKey


def item_key(key: Any) -> ItemKey:
    """Item ids are ints; digit strings become ints, anything else stays text."""
    if isinstance(key, int) and not isinstance(key, bool):
        return key
    text = str(key)
    try:
        return int(text)
    except ValueError:
        return text


def _count(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Count must be a number, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"Count must be finite, got {value!r}")
    if value < 0 or int(value) != value:
        raise ValueError(f"Count must be a non-negative integer, got {value!r}")
    return int(value)


@dataclass
class Profile:
    """Kill and drop counts accumulated under one name.

    Counts only ever grow, except through reset().
    """
    name: str
    level_kills: dict[int, int] = field(default_factory=dict)
    waves_past_8: int = 0
    obtained_uniques: dict[ItemKey, int] = field(default_factory=dict)

    def add_kills(self, floor: int, count: int) -> None:
        """Add completions for a floor.

        Bounds are not checked here; the overflow floor belongs in
        waves_past_8 and is routed there at ingestion.
        """
        self.level_kills[floor] = self.level_kills.get(floor, 0) + count

    def add_wave_8(self) -> None:
        self.waves_past_8 += 1

    def add_drop(self, item_id: ItemKey) -> None:
        key = item_key(item_id)
        self.obtained_uniques[key] = self.obtained_uniques.get(key, 0) + 1

    def reset(self) -> None:
        self.level_kills.clear()
        self.waves_past_8 = 0
        self.obtained_uniques.clear()

    def kills_for_floor(self, floor: int) -> int:
        """Completions counted toward a drop-table floor (9 is 8+)."""
        if floor == OVERFLOW_FLOOR:
            return self.waves_past_8
        return self.level_kills.get(floor, 0)

    def total_kills(self) -> int:
        return sum(self.level_kills.values()) + self.waves_past_8

    def obtained(self, item_id: ItemKey) -> int:
        return self.obtained_uniques.get(item_key(item_id), 0)

    def is_empty(self) -> bool:
        return not self.total_kills() and not any(self.obtained_uniques.values())

    def copy(self) -> "Profile":
        return Profile(
            name=self.name,
            level_kills=dict(self.level_kills),
            waves_past_8=self.waves_past_8,
            obtained_uniques=dict(self.obtained_uniques),
        )

    def to_dict(self) -> dict:
        """Document form, keyed the way the plugin's saved data is."""
        return {
            "name": self.name,
            "levelKills": {str(floor): kills for floor, kills in sorted(self.level_kills.items())},
            "wavesPast8": self.waves_past_8,
            "obtainedUniques": {str(item): count for item, count in self.obtained_uniques.items()},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Profile":
        """Build a profile from its document form.

        Raises:
            TypeError: if a field has the wrong shape
            ValueError: if a count is negative or a floor is not an integer
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"Profile must be an object, got {type(data).__name__}")
        level_kills = data.get("levelKills") or {}
        obtained = data.get("obtainedUniques") or {}
        if not isinstance(level_kills, Mapping) or not isinstance(obtained, Mapping):
            raise TypeError("levelKills and obtainedUniques must be objects")
        return cls(
            name=str(data.get("name") or ""),
            level_kills={int(floor): _count(kills) for floor, kills in level_kills.items()},
            waves_past_8=_count(data.get("wavesPast8", 0) or 0),
            obtained_uniques={item_key(item): _count(count) for item, count in obtained.items()},
        )
