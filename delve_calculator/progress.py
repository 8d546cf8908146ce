"""Expected-drop calculation over a profile's floor completions."""
import math
from dataclasses import dataclass
from typing import Callable, Collection, Mapping, Optional, Union

from .drop_table import DEFAULT_TABLE, DropRateTable
from .profile import Profile

ANY_UNIQUE_LABEL = "Any Unique"

CountedItems = Optional[Union[Callable[[int], bool], Collection[int]]]


def _as_predicate(counted: CountedItems) -> Callable[[int], bool]:
    if counted is None:
        return lambda item_id: True
    if callable(counted):
        return counted
    members = frozenset(counted)
    return lambda item_id: item_id in members


def expected_drops(profile: Profile, table: DropRateTable = DEFAULT_TABLE) -> dict[int, float]:
    """Expected number of each tracked unique for a profile's kills.

    Sums kills(floor) * rate(floor, item) over every floor in the table,
    where floor 9 takes its kills from waves_past_8. Nothing is rounded.
    """
    expected = {item.item_id: 0.0 for item in table.items}
    for floor in table.floors():
        kills = profile.kills_for_floor(floor)
        if kills <= 0:
            continue
        for item in table.items:
            expected[item.item_id] += kills * table.rate(floor, item.item_id)
    return expected


def any_unique_expected(expected: Mapping[int, float], counted: CountedItems = None) -> float:
    """Sum of the expectations of every item that counts toward 'any'."""
    is_counted = _as_predicate(counted)
    return sum(value for item_id, value in expected.items() if is_counted(item_id))


@dataclass(frozen=True)
class ItemProgress:
    """Expected count of one item, split for display.

    whole is the number of drops the rate says should have happened by now;
    remainder is the progress toward the next one.
    """
    item_id: Optional[int]  # None for the 'any unique' aggregate
    label: str
    expected: float

    @property
    def whole(self) -> int:
        return int(math.floor(self.expected))

    @property
    def remainder(self) -> float:
        return self.expected - math.floor(self.expected)

    @property
    def percent(self) -> int:
        return min(100, max(0, int(self.remainder * 100)))


class ProgressCalculator:
    """Binds a drop table and an 'any unique' policy."""

    def __init__(self, table: DropRateTable = DEFAULT_TABLE, counted: CountedItems = None):
        self.table = table
        self.counted = counted

    def expected_drops(self, profile: Profile) -> dict[int, float]:
        return expected_drops(profile, self.table)

    def any_unique_expected(self, profile: Profile) -> float:
        return any_unique_expected(self.expected_drops(profile), self.counted)

    def progress(self, profile: Profile) -> list[ItemProgress]:
        expected = self.expected_drops(profile)
        return [
            ItemProgress(item.item_id, item.label, expected[item.item_id])
            for item in self.table.items
        ]

    def any_progress(self, profile: Profile) -> ItemProgress:
        return ItemProgress(None, ANY_UNIQUE_LABEL, self.any_unique_expected(profile))

    def is_counted(self, item_id: int) -> bool:
        return _as_predicate(self.counted)(item_id)
