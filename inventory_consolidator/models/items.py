from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""Item models flowing through normalization and aggregation.

A RawRecord is one decoded row (header -> cell value). The Item Normalizer turns
records into ValidatedItem instances using a ColumnMapping, and the Aggregation
Engine folds those into AggregatedItem instances keyed by normalized description.
"""

__all__ = [
    "NO_UNIT_COLUMN",
    "RawRecord",
    "ColumnMapping",
    "ValidatedItem",
    "AggregatedItem",
]

# Sentinel used in place of a header name when the sheet has no unit column
NO_UNIT_COLUMN = "none"

RawRecord = dict[str, Any]


@dataclass(frozen=True)
class ColumnMapping:
    """User-selected roles for the decoded headers.

    description_col and quantity_col are required. unit_col may be the
    NO_UNIT_COLUMN sentinel.
    """
    description_col: str
    quantity_col: str
    unit_col: str = NO_UNIT_COLUMN

    @property
    def has_unit(self) -> bool:
        return self.unit_col != NO_UNIT_COLUMN


@dataclass(frozen=True)
class ValidatedItem:
    """One row that passed description/quantity validation."""
    description: str
    quantity: int | float  # may be NaN, see services.coercion.to_number
    unit: str | None = None


@dataclass
class AggregatedItem:
    """Consolidated record for one normalized description key.

    Mutated only by the aggregation pass that created it.
    """
    id: str  # normalized key
    description: str  # first-seen trimmed description, original casing
    total_quantity: int | float
    unit: str = ""
    occurrence_count: int = 1
