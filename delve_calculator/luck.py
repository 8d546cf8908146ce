"""Luck: how far actual drops are ahead of or behind the rate."""
from dataclasses import dataclass
from typing import Iterable, Optional

from .profile import Profile
from .progress import ANY_UNIQUE_LABEL, ProgressCalculator

MIN_SCALE: float = 1.0


def luck(expected: float, actual: int) -> float:
    """Positive when ahead of rate, negative when behind."""
    return actual - expected


def max_magnitude(luck_values: Iterable[float]) -> float:
    """Largest absolute luck, never below 1.0.

    The floor keeps a shared scale meaningful when every item sits at or
    near zero luck.
    """
    return max([MIN_SCALE] + [abs(value) for value in luck_values])


@dataclass(frozen=True)
class ItemLuck:
    item_id: Optional[int]  # None for the 'any unique' row
    label: str
    expected: float
    actual: int
    scale: float = MIN_SCALE

    @property
    def luck(self) -> float:
        return luck(self.expected, self.actual)

    @property
    def normalized(self) -> float:
        """Luck relative to the report's scale, within [-1, 1]."""
        return self.luck / self.scale


@dataclass(frozen=True)
class LuckReport:
    items: tuple[ItemLuck, ...]
    any_unique: ItemLuck
    scale: float

    def for_item(self, item_id: int) -> Optional[ItemLuck]:
        for row in self.items:
            if row.item_id == item_id:
                return row
        return None


class LuckEngine:
    """Builds luck reports on top of a ProgressCalculator."""

    def __init__(self, calculator: Optional[ProgressCalculator] = None):
        self.calculator = calculator or ProgressCalculator()

    def report(self, profile: Profile) -> LuckReport:
        expected = self.calculator.expected_drops(profile)
        rows = [
            (item.item_id, item.label, expected[item.item_id], profile.obtained(item.item_id))
            for item in self.calculator.table.items
        ]
        any_expected = sum(e for item_id, _, e, _ in rows if self.calculator.is_counted(item_id))
        any_actual = sum(a for item_id, _, _, a in rows if self.calculator.is_counted(item_id))
        rows.append((None, ANY_UNIQUE_LABEL, any_expected, any_actual))

        scale = max_magnitude(luck(e, a) for _, _, e, a in rows)
        lucks = [ItemLuck(item_id, label, e, a, scale) for item_id, label, e, a in rows]
        return LuckReport(items=tuple(lucks[:-1]), any_unique=lucks[-1], scale=scale)
