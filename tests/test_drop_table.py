from __future__ import annotations

import dataclasses

import pytest

from delve_calculator.config import AVERNIC_TREADS, DOM, EYE_OF_AYAK_UNCHARGED, MOKHAIOTL_CLOTH
from delve_calculator.drop_table import DEFAULT_TABLE, DropRateTable
from delve_calculator.models import DropRates


def test_table_covers_floors_two_through_overflow():
    assert DEFAULT_TABLE.floors() == (2, 3, 4, 5, 6, 7, 8, 9)


@pytest.mark.parametrize("floor", [-1, 0, 1, 10])
def test_floors_without_table_are_a_miss_not_an_error(floor):
    assert DEFAULT_TABLE.rates_for_floor(floor) is None
    assert DEFAULT_TABLE.rate(floor, MOKHAIOTL_CLOTH) == 0.0


def test_published_rates():
    assert DEFAULT_TABLE.rate(2, MOKHAIOTL_CLOTH) == 1.0 / 2500
    assert DEFAULT_TABLE.rate(2, EYE_OF_AYAK_UNCHARGED) == 0.0
    assert DEFAULT_TABLE.rate(4, AVERNIC_TREADS) == 1.0 / 1350
    assert DEFAULT_TABLE.rate(8, DOM) == 1.0 / 500
    assert DEFAULT_TABLE.rate(9, DOM) == 1.0 / 250
    assert DEFAULT_TABLE.rates_for_floor(3).overall_chance == 1.0 / 1000


def test_unknown_item_has_no_rate():
    assert DEFAULT_TABLE.rate(8, 12345) == 0.0
    assert DEFAULT_TABLE.item(12345) is None


def test_items_are_in_display_order():
    assert [item.item_id for item in DEFAULT_TABLE.items] == [
        MOKHAIOTL_CLOTH,
        EYE_OF_AYAK_UNCHARGED,
        AVERNIC_TREADS,
        DOM,
    ]


def test_rates_cannot_be_mutated():
    rates = DEFAULT_TABLE.rates_for_floor(2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        rates.dom = 1.0


def test_table_does_not_follow_source_mapping():
    source = {2: DropRates(0.5, 0.5, 0.0, 0.0, 0.0)}
    table = DropRateTable(source)
    source[3] = DropRates(1.0, 1.0, 1.0, 1.0, 1.0)
    assert table.floors() == (2,)
