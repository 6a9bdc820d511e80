from __future__ import annotations

from collections.abc import Mapping, Sequence

from ..models.items import NO_UNIT_COLUMN, ColumnMapping

"""Column role mapping: default guesses from header names and validation.

Guessing is a best-effort substring match on lower-cased headers. The user (or
the CLI flags) can always override it.
"""

__all__ = [
    "DEFAULT_COLUMN_HINTS",
    "MappingError",
    "guess_mapping",
    "validate_mapping",
]

DEFAULT_COLUMN_HINTS: dict[str, list[str]] = {
    "description": ["desc", "item", "name", "product"],
    "quantity": ["qty", "quantity", "count", "amount"],
    "unit": ["unit", "uom"],
}


class MappingError(Exception):
    """Raised when a mapping references headers the sheet does not have."""


def _find_header(headers: Sequence[str], hints: Sequence[str]) -> str | None:
    for header in headers:
        lowered = header.lower()
        if any(h in lowered for h in hints):
            return header
    return None


def guess_mapping(
    headers: Sequence[str], hints: Mapping[str, Sequence[str]] | None = None
) -> ColumnMapping:
    """Guess a column mapping from header names.

    Falls back to the first header for description, the second for quantity,
    and no unit column.

    Raises:
        MappingError: If headers is empty
    """
    if not headers:
        raise MappingError("no columns available to map")
    hints = {**DEFAULT_COLUMN_HINTS, **(hints or {})}

    description = _find_header(headers, hints["description"]) or headers[0]
    quantity = _find_header(headers, hints["quantity"])
    if quantity is None:
        # 1 列しかない場合は description と同じ列を使う
        quantity = headers[1] if len(headers) > 1 else headers[0]
    unit = _find_header(headers, hints["unit"]) or NO_UNIT_COLUMN
    return ColumnMapping(description_col=description, quantity_col=quantity, unit_col=unit)


def validate_mapping(mapping: ColumnMapping, headers: Sequence[str]) -> None:
    """Check every selected role references an existing header.

    Raises:
        MappingError: On a missing required role or an unknown header
    """
    if not mapping.description_col or not mapping.quantity_col:
        raise MappingError("description and quantity columns are required")
    known = set(headers)
    missing = [
        col
        for col in (mapping.description_col, mapping.quantity_col)
        if col not in known
    ]
    if mapping.has_unit and mapping.unit_col not in known:
        missing.append(mapping.unit_col)
    if missing:
        raise MappingError(f"unknown column(s): {missing}; available: {list(headers)}")
