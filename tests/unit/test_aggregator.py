from __future__ import annotations

import pytest

from inventory_consolidator.models import AggregatedItem, ColumnMapping, ValidatedItem
from inventory_consolidator.services.aggregator import aggregate, normalize_key
from inventory_consolidator.services.normalizer import normalize


@pytest.mark.parametrize(
    "description, key",
    [
        ("Steel  Bolt ", "steel bolt"),
        ("  Steel Bolt  ", "steel bolt"),
        ("steel\t\nbolt", "steel bolt"),
        ("HEX NUT", "hex nut"),
        ("   ", ""),
    ],
)
def test_normalize_key(description, key):
    assert normalize_key(description) == key


@pytest.mark.parametrize("s", ["  A  b\tC ", "x", "", "  Foo Bar ", "MiXeD   case"])
def test_normalize_key_idempotent(s):
    assert normalize_key(normalize_key(s)) == normalize_key(s)


def test_aggregate_scenario_bolts_and_nuts():
    records = [
        {"item": "Bolt", "qty": "5"},
        {"item": "bolt ", "qty": 3},
        {"item": "Nut", "qty": 10},
    ]
    mapping = ColumnMapping(description_col="item", quantity_col="qty", unit_col="none")
    result = aggregate(normalize(records, mapping))
    assert result == [
        AggregatedItem(id="bolt", description="Bolt", total_quantity=8, unit="", occurrence_count=2),
        AggregatedItem(id="nut", description="Nut", total_quantity=10, unit="", occurrence_count=1),
    ]


def test_aggregate_displays_first_seen_trimmed_description():
    items = [
        ValidatedItem(description="  Steel Bolt  ", quantity=1),
        ValidatedItem(description="steel   bolt", quantity=2),
    ]
    result = aggregate(items)
    assert len(result) == 1
    assert result[0].description == "Steel Bolt"
    assert result[0].id == "steel bolt"
    assert result[0].total_quantity == 3


def test_aggregate_no_plural_folding():
    items = [
        ValidatedItem(description="Steel Bolt", quantity=1),
        ValidatedItem(description="Steel Bolts", quantity=1),
    ]
    assert [a.id for a in aggregate(items)] == ["steel bolt", "steel bolts"]


def test_aggregate_first_non_empty_unit_wins():
    items = [
        ValidatedItem(description="Flour", quantity=1, unit=None),
        ValidatedItem(description="flour", quantity=2, unit="kg"),
        ValidatedItem(description="FLOUR", quantity=3, unit="lb"),
    ]
    (flour,) = aggregate(items)
    assert flour.unit == "kg"
    assert flour.total_quantity == 6
    assert flour.occurrence_count == 3


def test_aggregate_preserves_first_seen_order():
    items = [
        ValidatedItem(description=d, quantity=1)
        for d in ["Nut", "bolt", "Washer", "NUT", "Bolt", "screw"]
    ]
    assert [a.id for a in aggregate(items)] == ["nut", "bolt", "washer", "screw"]


def test_aggregate_conserves_quantity_and_count():
    quantities = [5, 2.5, 1, 10, 0.25, -1]
    items = [
        ValidatedItem(description=d, quantity=q)
        for d, q in zip(["a", "B", "a ", "c", "b", "C"], quantities)
    ]
    result = aggregate(items)
    assert sum(a.total_quantity for a in result) == pytest.approx(sum(quantities))
    assert sum(a.occurrence_count for a in result) == len(items)


def test_aggregate_empty_input():
    assert aggregate([]) == []


def test_aggregate_does_not_modify_inputs():
    items = [ValidatedItem(description=" Bolt", quantity=1), ValidatedItem(description="bolt", quantity=2)]
    aggregate(items)
    assert items[0] == ValidatedItem(description=" Bolt", quantity=1)
