"""Read-only lookup of per-floor unique drop rates."""
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from .config import DROP_RATES_BY_FLOOR, UNIQUE_ITEMS
from .models import DropRates, UniqueItem


class DropRateTable:
    """Immutable table of DropRates keyed by floor.

    A missing floor means no unique can drop there; lookups never fail.
    """

    def __init__(
        self,
        rates: Mapping[int, DropRates],
        items: Iterable[UniqueItem] = UNIQUE_ITEMS,
    ):
        self._rates = MappingProxyType(dict(rates))
        self._items = tuple(items)
        self._items_by_id = MappingProxyType({item.item_id: item for item in self._items})

    @property
    def items(self) -> tuple[UniqueItem, ...]:
        """Tracked uniques in display order."""
        return self._items

    def item(self, item_id: int) -> Optional[UniqueItem]:
        return self._items_by_id.get(item_id)

    def floors(self) -> tuple[int, ...]:
        """Floors with a drop table, ascending."""
        return tuple(sorted(self._rates))

    def rates_for_floor(self, floor: int) -> Optional[DropRates]:
        return self._rates.get(floor)

    def rate(self, floor: int, item_id: int) -> float:
        """Drop probability of an item on a floor, 0.0 for any miss."""
        rates = self._rates.get(floor)
        item = self._items_by_id.get(item_id)
        if rates is None or item is None:
            return 0.0
        return rates.rate_for(item)


DEFAULT_TABLE = DropRateTable(DROP_RATES_BY_FLOOR)
