from __future__ import annotations

from ..models.consolidation_result import ConsolidationResult

"""Summary line rendering for a consolidation run.

Format:
SUMMARY file={name} rows={raw} valid={validated} unique={aggregated}
dropped={raw - validated} elapsed_sec={elapsed}
"""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # Format very small numbers to avoid scientific notation
        return f"{seconds:.6f}".rstrip('0').rstrip('.')
    return str(round(seconds, 3))


def render_summary_line(result: ConsolidationResult) -> str:
    """Render a SUMMARY line from a ConsolidationResult.

    Examples:
        >>> from datetime import datetime, timezone
        >>> from inventory_consolidator.models import ColumnMapping
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> result = ConsolidationResult(
        ...     file_name="stock.xlsx", items=[], validated_count=3, raw_row_count=4,
        ...     mapping=ColumnMapping("item", "qty"), start_time=t, end_time=t,
        ...     elapsed_seconds=0.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY file=stock.xlsx rows=4 valid=3 unique=0 dropped=1 elapsed_sec=0'
    """
    return (
        f"SUMMARY file={result.file_name} "
        f"rows={result.raw_row_count} "
        f"valid={result.validated_count} "
        f"unique={result.unique_count} "
        f"dropped={result.dropped_count} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
