from __future__ import annotations

import re
from datetime import datetime, timezone

from inventory_consolidator.models import AggregatedItem, ColumnMapping, ConsolidationResult
from inventory_consolidator.services.summary import render_summary_line

"""Unit tests for SUMMARY line rendering."""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+file=(\S+)\s+rows=([0-9]+)\s+valid=([0-9]+)\s+unique=([0-9]+)\s+"
    r"dropped=([0-9]+)\s+elapsed_sec=([0-9]+\.?[0-9]*)$"
)


def _result(elapsed: float, items: int = 2, validated: int = 3, raw: int = 5) -> ConsolidationResult:
    start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
    return ConsolidationResult(
        file_name="stock.xlsx",
        items=[AggregatedItem(id=str(i), description=str(i), total_quantity=1) for i in range(items)],
        validated_count=validated,
        raw_row_count=raw,
        mapping=ColumnMapping("item", "qty"),
        start_time=start,
        end_time=start,
        elapsed_seconds=elapsed,
    )


def test_render_summary_line_fields():
    line = render_summary_line(_result(2.0))
    match = SUMMARY_PATTERN.match(line)
    assert match, f"SUMMARY line should match regex: {line}"
    assert match.group(1) == "stock.xlsx"
    assert match.group(2) == "5"  # rows
    assert match.group(3) == "3"  # valid
    assert match.group(4) == "2"  # unique
    assert match.group(5) == "2"  # dropped
    assert match.group(6) == "2"  # integer elapsed without decimal


def test_render_summary_line_small_elapsed():
    line = render_summary_line(_result(0.000123))
    assert line.endswith("elapsed_sec=0.000123")
    assert SUMMARY_PATTERN.match(line)


def test_render_summary_line_rounds_elapsed():
    assert render_summary_line(_result(1.23456)).endswith("elapsed_sec=1.235")


def test_render_summary_line_zero_elapsed():
    assert render_summary_line(_result(0.0)).endswith("elapsed_sec=0")
