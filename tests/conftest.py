# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
import pandas as pd
import pytest

from src.excel.document import ListDocument


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def data_document() -> ListDocument:
    return ListDocument(["Data1", "Data2", "Summary"])


@pytest.fixture()
def make_workbook():
    def _make(path: Path, sheets: list[str]) -> Path:
        with pd.ExcelWriter(path) as writer:
            for sheet in sheets:
                pd.DataFrame([["title"], ["id"], [1]]).to_excel(
                    writer, sheet_name=sheet, header=False, index=False
                )
        return path
    return _make


@pytest.fixture()
def sample_config_yaml() -> str:
    return """workbook: ./data/book.xlsx
bindings:
  Orders:
    regex: 'Data\\d'
    sheet_name_field: sheet_name
  Summary:
    name: Summary
  First:
    index: 0
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "bindings.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def workbook_file(temp_workdir: Path, make_workbook) -> Path:
    return make_workbook(temp_workdir / "data" / "book.xlsx", ["Data1", "Data2", "Summary"])
