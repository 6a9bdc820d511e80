"""Domain models for the inventory consolidator.

This package contains the data classes shared by the decoder, the
normalization/aggregation services and the export layer.
"""

from .consolidation_result import ConsolidationResult
from .error_record import ErrorRecord
from .items import AggregatedItem, ColumnMapping, NO_UNIT_COLUMN, RawRecord, ValidatedItem
from .run_status import RunStatus
from .sheet_data import SheetData

__all__ = [
    # Input models
    "RawRecord",
    "SheetData",
    "ColumnMapping",
    "NO_UNIT_COLUMN",
    # Processing models
    "ValidatedItem",
    "AggregatedItem",
    "ConsolidationResult",
    "RunStatus",
    "ErrorRecord",
]
