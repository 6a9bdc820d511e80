# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pandas as pd
import pytest

from inventory_consolidator.logging.init import reset_logging


@pytest.fixture(autouse=True)
def _fresh_logging():
    # handler は sys.stdout を保持するため capsys ごとに作り直す
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    monkeypatch.delenv("CONSOLIDATOR_CONFIG", raising=False)
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """column_hints:
  description: [article]
  quantity: [stock]
export:
  directory: ./exports
  csv_file_name: consolidated.csv
logs_directory: ./run-logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "consolidate.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def sample_csv_text() -> str:
    return (
        "Item Description,Qty,Unit\n"
        "Steel Bolt,5,pcs\n"
        "steel  bolt ,3,\n"
        "Hex Nut,10,pcs\n"
        "Washer,N/A,pcs\n"
    )


@pytest.fixture()
def write_csv(temp_workdir: Path, sample_csv_text: str) -> Path:
    f = temp_workdir / "inventory.csv"
    f.write_text(sample_csv_text, encoding="utf-8")
    return f


def make_excel(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
    """Write rows to an .xlsx file, one list of rows per sheet (no index/header added)."""
    with pd.ExcelWriter(path) as writer:
        for sheet, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
    return path


@pytest.fixture()
def excel_factory(tmp_path: Path):
    def _factory(name: str, sheets: dict[str, list[list[object]]]) -> Path:
        return make_excel(tmp_path / name, sheets)
    return _factory
