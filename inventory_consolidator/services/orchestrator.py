from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from datetime import UTC, datetime
from pathlib import Path

from ..excel.reader import PASTED_FILE_NAME, DecodeFailure, read_bytes, read_table, read_text
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.consolidation_result import ConsolidationResult
from ..models.items import ColumnMapping
from ..models.run_status import RunStatus
from ..models.sheet_data import SheetData
from .aggregator import aggregate
from .column_mapper import MappingError, guess_mapping, validate_mapping
from .normalizer import EmptyResultError, normalize

logger = logging.getLogger(__name__)

"""Run orchestration for one user session.

A session holds at most one decoded sheet and one result. Flow:

1. load_*()       decode a file/bytes/text            (IDLE -> MAPPING)
2. apply_mapping() normalize + aggregate synchronously (MAPPING -> PROCESSING -> SUCCESS)
3. reset()        discard everything                  (any -> IDLE)

Any failure moves the session to ERROR, is appended to the error log and is
re-raised unchanged so the caller can surface the message verbatim. After a
mapping or empty-result failure the sheet stays loaded and apply_mapping() may
be called again with another mapping (ERROR -> PROCESSING). Loading a
new source always discards the previous sheet and result first.
"""

RUN_ERRORS = (DecodeFailure, MappingError, EmptyResultError)

_ERROR_TYPES: dict[type[Exception], str] = {
    DecodeFailure: "DECODE_FAILURE",
    MappingError: "INVALID_MAPPING",
    EmptyResultError: "EMPTY_RESULT",
}


class ProcessingError(Exception):
    """Raised when a session operation is called in the wrong state."""


class ConsolidationSession:
    """Stateful wrapper around decode -> normalize -> aggregate."""

    def __init__(
        self,
        *,
        error_log: ErrorLogBuffer | None = None,
        column_hints: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        self.error_log = error_log if error_log is not None else ErrorLogBuffer()
        self.column_hints = column_hints
        self.status = RunStatus.IDLE
        self.sheet: SheetData | None = None
        self.result: ConsolidationResult | None = None
        self.error: str | None = None

    def reset(self) -> None:
        self.status = RunStatus.IDLE
        self.sheet = None
        self.result = None
        self.error = None

    def _fail(self, exc: Exception, file_name: str) -> None:
        self.status = RunStatus.ERROR
        self.error = str(exc)
        error_type = _ERROR_TYPES.get(type(exc), "UNKNOWN")
        self.error_log.append(ErrorRecord.create(file=file_name, error_type=error_type, message=str(exc)))
        logger.debug(f"run failed: type={error_type} file={file_name}")

    def _load(self, decode: Callable[[], SheetData], file_name: str) -> SheetData:
        self.reset()
        self.status = RunStatus.MAPPING
        try:
            sheet = decode()
        except DecodeFailure as e:
            self._fail(e, file_name)
            raise
        self.sheet = sheet
        logger.info(f"loaded {sheet.file_name}: columns={len(sheet.headers)} rows={sheet.row_count}")
        return sheet

    def load_file(self, path: Path) -> SheetData:
        return self._load(lambda: read_table(path), path.name)

    def load_bytes(self, data: bytes, file_name: str) -> SheetData:
        return self._load(lambda: read_bytes(data, file_name), file_name)

    def load_text(self, text: str, file_name: str = PASTED_FILE_NAME) -> SheetData:
        return self._load(lambda: read_text(text, file_name), file_name)

    def suggested_mapping(self) -> ColumnMapping:
        """Best-effort default mapping for the loaded sheet."""
        if self.sheet is None:
            raise ProcessingError("no sheet loaded")
        return guess_mapping(self.sheet.headers, self.column_hints)

    def apply_mapping(self, mapping: ColumnMapping) -> ConsolidationResult:
        """Normalize and aggregate the loaded sheet with the given mapping.

        Raises:
            ProcessingError: If no sheet is loaded or the run already succeeded
            MappingError: If the mapping references unknown headers
            EmptyResultError: If no row yields a valid item
        """
        # ERROR からの再マッピングは同じシートを再利用する
        if self.sheet is None or self.status not in (RunStatus.MAPPING, RunStatus.ERROR):
            raise ProcessingError(f"cannot apply mapping in status {self.status.value}")
        sheet = self.sheet
        self.status = RunStatus.PROCESSING
        start_time = datetime.now(UTC)
        try:
            validate_mapping(mapping, sheet.headers)
            items = normalize(sheet.rows, mapping)
        except (MappingError, EmptyResultError) as e:
            self._fail(e, sheet.file_name)
            raise

        aggregated = aggregate(items)
        end_time = datetime.now(UTC)
        self.result = ConsolidationResult(
            file_name=sheet.file_name,
            items=aggregated,
            validated_count=len(items),
            raw_row_count=sheet.row_count,
            mapping=mapping,
            start_time=start_time,
            end_time=end_time,
            elapsed_seconds=(end_time - start_time).total_seconds(),
        )
        self.status = RunStatus.SUCCESS
        self.error = None
        return self.result


def consolidate_file(
    path: Path,
    mapping: ColumnMapping | None = None,
    *,
    error_log: ErrorLogBuffer | None = None,
) -> ConsolidationResult:
    """One-shot helper: decode a file and consolidate it (guessing the mapping if omitted)."""
    session = ConsolidationSession(error_log=error_log)
    session.load_file(path)
    return session.apply_mapping(mapping or session.suggested_mapping())
