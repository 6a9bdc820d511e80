from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from ..models.items import ColumnMapping, RawRecord, ValidatedItem
from .coercion import is_number, is_truthy, parse_float_prefix, to_number, to_text

"""Item normalization: mapped raw records -> validated items.

Rows without a usable description or quantity are dropped silently; only an
entirely empty outcome is an error.
"""

__all__ = [
    "EmptyResultError",
    "EMPTY_RESULT_MESSAGE",
    "is_valid_quantity",
    "normalize",
]

logger = logging.getLogger(__name__)

EMPTY_RESULT_MESSAGE = "Could not extract any valid items using the selected columns."


class EmptyResultError(Exception):
    """Raised when no record yields a valid description + quantity pair."""


def is_valid_quantity(value: Any) -> bool:
    """A quantity cell is valid when it is a number or has a numeric prefix."""
    if is_number(value):
        return True
    return parse_float_prefix(value) is not None


def normalize(records: Iterable[RawRecord], mapping: ColumnMapping) -> list[ValidatedItem]:
    """Extract validated items from raw records using the column mapping.

    Output keeps input order with invalid rows omitted. The stored quantity uses
    strict conversion, so a cell like "12abc" passes validation but is stored
    as NaN.

    Raises:
        EmptyResultError: If no record produced a validated item
    """
    items: list[ValidatedItem] = []
    seen = 0
    for record in records:
        seen += 1
        desc_raw = record.get(mapping.description_col)
        qty_raw = record.get(mapping.quantity_col)
        unit_raw = record.get(mapping.unit_col) if mapping.has_unit else None

        if not is_truthy(desc_raw) or not is_valid_quantity(qty_raw):
            continue

        items.append(
            ValidatedItem(
                description=to_text(desc_raw),
                quantity=to_number(qty_raw),
                unit=to_text(unit_raw) if is_truthy(unit_raw) else None,
            )
        )

    logger.debug(f"normalize: records={seen} valid={len(items)} dropped={seen - len(items)}")
    if not items:
        raise EmptyResultError(EMPTY_RESULT_MESSAGE)
    return items
