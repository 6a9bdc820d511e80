from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from ..models.sheet_data import SheetData

"""Row decoder: Excel / CSV / pasted text -> headers + row records.

- Only the first sheet of a workbook is read.
- The first row is the header row; later rows are data rows.
- Blank cells become "" and rows blank in every column are skipped.
- Text sources (.csv, .txt, pasted text) keep every cell as text and take the delimiter
  from the header line, so tab-separated data copied from a spreadsheet works.
- Ragged text rows are padded to the widest row; extra cells get __EMPTY headers.
"""

__all__ = [
    "DecodeFailure",
    "EXCEL_SUFFIXES",
    "read_table",
    "read_bytes",
    "read_text",
    "read_first_sheet",
    "detect_delimiter",
    "normalize_sheet",
]

EXCEL_SUFFIXES = {".xlsx", ".xls"}
PASTED_FILE_NAME = "pasted_data.txt"
# Candidate delimiters for text sources, in tie-break order
TEXT_DELIMITERS = ("\t", ",", ";")

PARSE_FAILED_MESSAGE = "Failed to parse file. Please ensure it is a valid Excel or CSV file."
READ_FAILED_MESSAGE = "Error reading file."
EMPTY_FILE_MESSAGE = "The file appears to be empty."


class DecodeFailure(Exception):
    """Raised when a source cannot be decoded into a non-empty table."""


def _read_excel_frame(source: Any) -> pd.DataFrame:
    with pd.ExcelFile(source) as xls:
        if not xls.sheet_names:
            raise DecodeFailure(EMPTY_FILE_MESSAGE)
        # ヘッダなしで生読み (1行目を後でヘッダとして適用)
        return xls.parse(xls.sheet_names[0], header=None, keep_default_na=False)


def detect_delimiter(text: str) -> str:
    """Pick the delimiter splitting the first non-blank line into the most fields.

    Quoted fields are respected, so a comma inside "Bolt, M8" does not count.
    """
    first_line = next((line for line in text.splitlines() if line.strip()), "")
    widths = {delim: len(next(csv.reader([first_line], delimiter=delim), [])) for delim in TEXT_DELIMITERS}
    best = max(widths, key=lambda d: widths[d])
    return best if widths[best] > 1 else ","


def _read_text_frame(text: str) -> pd.DataFrame:
    sep = detect_delimiter(text)
    # 行ごとに列数が違っても読めるよう、最大列数で列名を固定する
    width = max((len(row) for row in csv.reader(io.StringIO(text), delimiter=sep)), default=0)
    if width == 0:
        return pd.DataFrame()
    return pd.read_csv(
        io.StringIO(text),
        sep=sep,
        header=None,
        names=list(range(width)),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
    )


def read_first_sheet(source: Any, file_name: str) -> pd.DataFrame:
    """Read the first sheet (or the whole text table) as a raw DataFrame.

    Parameters
    ----------
    source: path, binary stream or str holding the file contents
    file_name: used to choose between the Excel and text readers

    Raises
    ------
    DecodeFailure: unreadable file or unsupported content
    """
    is_excel = Path(file_name).suffix.lower() in EXCEL_SUFFIXES
    try:
        if is_excel:
            return _read_excel_frame(source)
        if isinstance(source, str):
            text = source
        elif isinstance(source, (bytes, bytearray)):
            text = bytes(source).decode("utf-8-sig")
        else:
            text = Path(source).read_text(encoding="utf-8-sig")
        return _read_text_frame(text)
    except DecodeFailure:
        raise
    except pd.errors.EmptyDataError:
        return pd.DataFrame()
    except OSError as e:
        raise DecodeFailure(READ_FAILED_MESSAGE) from e
    except Exception as e:
        raise DecodeFailure(PARSE_FAILED_MESSAGE) from e


def _cell(value: Any) -> Any:
    """Convert a pandas cell into a plain Python value ("" for blanks)."""
    if value is None:
        return ""
    if isinstance(value, float) and np.isnan(value):
        return ""
    if value is pd.NaT:
        return ""
    if isinstance(value, np.generic):
        value = value.item()
        if isinstance(value, float) and np.isnan(value):
            return ""
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return value


def _header_names(raw_headers: list[Any]) -> list[str]:
    """Stringify headers; blanks become __EMPTY and duplicates get _1, _2 ..."""
    names: list[str] = []
    seen: dict[str, int] = {}
    for raw in raw_headers:
        cell = _cell(raw)
        if isinstance(cell, float) and cell.is_integer():
            cell = int(cell)
        name = str(cell).strip() or "__EMPTY"
        if name in seen:
            seen[name] += 1
            candidate = f"{name}_{seen[name]}"
            while candidate in seen:
                seen[name] += 1
                candidate = f"{name}_{seen[name]}"
            name = candidate
        seen.setdefault(name, 0)
        names.append(name)
    return names


def normalize_sheet(df: pd.DataFrame, file_name: str) -> SheetData:
    """Normalize a raw DataFrame using the first row as header.

    Steps:
    1. Extract header from the first row
    2. Remaining rows become data rows; rows blank in every column are skipped
    3. Fail when no data row remains

    Raises:
        DecodeFailure: If the sheet has no data rows
    """
    if df.shape[0] < 2:
        raise DecodeFailure(EMPTY_FILE_MESSAGE)
    headers = _header_names(df.iloc[0].tolist())
    rows: list[dict[str, Any]] = []
    for raw in df.iloc[1:].itertuples(index=False, name=None):
        values = [_cell(v) for v in raw]
        if all(v == "" for v in values):
            continue
        rows.append(dict(zip(headers, values, strict=False)))

    if not rows:
        raise DecodeFailure(EMPTY_FILE_MESSAGE)
    return SheetData(file_name=file_name, headers=headers, rows=rows)


def read_table(path: Path) -> SheetData:
    """Decode a file on disk."""
    if not path.is_file():
        raise DecodeFailure(READ_FAILED_MESSAGE)
    df = read_first_sheet(path, path.name)
    return normalize_sheet(df, path.name)


def read_bytes(data: bytes, file_name: str) -> SheetData:
    """Decode an uploaded byte stream; file_name selects the reader."""
    source: Any = io.BytesIO(data) if Path(file_name).suffix.lower() in EXCEL_SUFFIXES else data
    df = read_first_sheet(source, file_name)
    return normalize_sheet(df, file_name)


def read_text(text: str, file_name: str = PASTED_FILE_NAME) -> SheetData:
    """Decode pasted delimited text (tab, comma or semicolon separated)."""
    if not text.strip():
        raise DecodeFailure(EMPTY_FILE_MESSAGE)
    df = read_first_sheet(text, file_name)
    return normalize_sheet(df, file_name)
