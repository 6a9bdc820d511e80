from __future__ import annotations

from dataclasses import dataclass, field

from .items import RawRecord

__all__ = [
    "SheetData",
]


@dataclass(frozen=True)
class SheetData:
    """Decoded first sheet of an uploaded file.

    headers keeps the column order of the source; every row carries every
    header (blank cells are "").
    """
    file_name: str
    headers: list[str]
    rows: list[RawRecord] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)
