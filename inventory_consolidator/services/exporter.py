from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from ..models.items import AggregatedItem
from .coercion import format_number

'''Presentation and export of aggregated items.

Both text formats are pasted into spreadsheets by users, so they are produced
byte-for-byte:

CSV (download):
    Description,Total Quantity,Unit,Occurrences
    "Widget ""A""",2,pcs,1

TSV (clipboard):
    Item Description<TAB>Total Quantity<TAB>Unit<TAB>Occurrences
    Widget "A"<TAB>2<TAB>pcs<TAB>1

Lines are joined with "\\n" and there is no trailing newline. Only the CSV
description is quoted; the unit is written verbatim in both formats.
'''

__all__ = [
    "CSV_HEADERS",
    "TSV_HEADERS",
    "DEFAULT_CSV_FILE_NAME",
    "EMPTY_UNIT_PLACEHOLDER",
    "to_csv",
    "to_tsv",
    "to_table_frame",
    "render_table",
    "write_export",
]

logger = logging.getLogger(__name__)

CSV_HEADERS = ["Description", "Total Quantity", "Unit", "Occurrences"]
TSV_HEADERS = ["Item Description", "Total Quantity", "Unit", "Occurrences"]
DEFAULT_CSV_FILE_NAME = "aggregated_inventory.csv"
EMPTY_UNIT_PLACEHOLDER = "-"


def _quote(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


def to_csv(items: Sequence[AggregatedItem]) -> str:
    """Serialize aggregated items to the CSV download format."""
    lines = [",".join(CSV_HEADERS)]
    for item in items:
        lines.append(
            ",".join(
                [
                    _quote(item.description),
                    format_number(item.total_quantity),
                    item.unit,
                    str(item.occurrence_count),
                ]
            )
        )
    return "\n".join(lines)


def to_tsv(items: Sequence[AggregatedItem]) -> str:
    """Serialize aggregated items to tab-separated clipboard text."""
    lines = ["\t".join(TSV_HEADERS)]
    for item in items:
        lines.append(
            f"{item.description}\t{format_number(item.total_quantity)}\t"
            f"{item.unit or ''}\t{item.occurrence_count}"
        )
    return "\n".join(lines)


def to_table_frame(items: Sequence[AggregatedItem]) -> pd.DataFrame:
    """Build the on-screen table: empty units shown as '-', counts as '<n>x'."""
    return pd.DataFrame(
        {
            "Description": [i.description for i in items],
            "Total Quantity": [format_number(i.total_quantity) for i in items],
            "Unit": [i.unit or EMPTY_UNIT_PLACEHOLDER for i in items],
            "Occurrences": [f"{i.occurrence_count}x" for i in items],
        },
        columns=CSV_HEADERS,
    )


def render_table(items: Sequence[AggregatedItem]) -> str:
    """Render the table view as plain text."""
    if not items:
        return "(no items)"
    return to_table_frame(items).to_string(index=False)


def write_export(content: str, path: Path) -> Path:
    """Write export text to disk (UTF-8, no newline translation)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(content)
    logger.info(f"export written: {path}")
    return path
