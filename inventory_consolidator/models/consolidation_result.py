from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .items import AggregatedItem, ColumnMapping

"""Result model returned by a successful consolidation run."""


@dataclass(frozen=True)
class ConsolidationResult:
    """Aggregated items plus the counters shown in the SUMMARY line."""
    file_name: str
    items: list[AggregatedItem]
    validated_count: int  # rows that yielded a ValidatedItem
    raw_row_count: int  # decoded rows before validation
    mapping: ColumnMapping
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float

    @property
    def unique_count(self) -> int:
        return len(self.items)

    @property
    def dropped_count(self) -> int:
        return self.raw_row_count - self.validated_count
