from __future__ import annotations

import math

import pytest

from inventory_consolidator.services.coercion import (
    format_number,
    is_truthy,
    parse_float_prefix,
    to_number,
    to_text,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("12", 12.0),
        ("12abc", 12.0),
        ("  3.5kg", 3.5),
        ("-.5 boxes", -0.5),
        ("1e3x", 1000.0),
        ("1e", 1.0),
        (7, 7.0),
        (2.25, 2.25),
    ],
)
def test_parse_float_prefix_accepts_numeric_prefix(value, expected):
    assert parse_float_prefix(value) == expected


@pytest.mark.parametrize("value", ["abc", "N/A", "", "   ", ".", "-", None, True, False])
def test_parse_float_prefix_rejects_non_numeric(value):
    assert parse_float_prefix(value) is None


def test_parse_float_prefix_infinity():
    assert parse_float_prefix("Infinity and beyond") == math.inf
    assert parse_float_prefix("-Infinity") == -math.inf
    # Python spellings are not numeric literals here
    assert parse_float_prefix("inf") is None


def test_to_number_is_strict_for_strings():
    assert to_number("12") == 12.0
    assert to_number(" 4.5 ") == 4.5
    assert math.isnan(to_number("12abc"))
    assert math.isnan(to_number("1_000"))
    assert math.isnan(to_number("nan"))
    assert math.isnan(to_number("inf"))


def test_to_number_special_literals():
    assert to_number("") == 0
    assert to_number("   ") == 0
    assert to_number("0x1A") == 26.0
    assert to_number("0b101") == 5.0
    assert to_number("-Infinity") == -math.inf


def test_to_number_passes_numbers_through():
    assert to_number(5) == 5
    assert isinstance(to_number(5), int)
    assert to_number(2.5) == 2.5


@pytest.mark.parametrize(
    "value, expected",
    [
        (8, "8"),
        (8.0, "8"),
        (-3.0, "-3"),
        (2.5, "2.5"),
        (0.1 + 0.2, "0.30000000000000004"),
        (1e-07, "1e-7"),
        (1e22, "1e+22"),
        (0.00001, "0.00001"),
        (1e-6, "0.000001"),
        (-0.0, "0"),
        (123.456, "123.456"),
        (1.2345678901234568e20, "123456789012345680000"),
        (1e21, "1e+21"),
        (1.5e-10, "1.5e-10"),
        (math.nan, "NaN"),
        (math.inf, "Infinity"),
        (-math.inf, "-Infinity"),
    ],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_to_text():
    assert to_text("Bolt") == "Bolt"
    assert to_text(5.0) == "5"
    assert to_text(12) == "12"
    assert to_text(True) == "true"
    assert to_text(None) == ""


@pytest.mark.parametrize(
    "value, expected",
    [
        ("Bolt", True),
        ("   ", True),
        ("0", True),
        (1, True),
        ("", False),
        (None, False),
        (0, False),
        (0.0, False),
        (math.nan, False),
        (False, False),
    ],
)
def test_is_truthy(value, expected):
    assert is_truthy(value) is expected
