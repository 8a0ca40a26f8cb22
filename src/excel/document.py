from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import pandas as pd

"""Document model adapters.

The resolver only needs a narrow view of a workbook: how many sheets it has,
the sheet at a position, and the sheet with a given name. This module defines
that view (Document / SheetHandle protocols) and adapters over the workbook
libraries in use:

- ListDocument: plain ordered list of names (tests, callers without a file)
- PandasExcelDocument: pandas.ExcelFile, as used for reading workbooks
- OpenpyxlDocument: openpyxl.Workbook, for callers that write with openpyxl

Adapters are read-only; they never create or modify sheets.
"""

__all__ = [
    "SheetHandle",
    "Document",
    "SheetRef",
    "ListDocument",
    "PandasExcelDocument",
    "OpenpyxlDocument",
    "open_document",
    "sheet_names",
]


@runtime_checkable
class SheetHandle(Protocol):
    def name(self) -> str: ...


@runtime_checkable
class Document(Protocol):
    def sheet_count(self) -> int: ...

    def sheet_at(self, index: int) -> SheetHandle: ...

    def sheet_by_name(self, name: str) -> SheetHandle | None: ...


@dataclass(frozen=True)
class SheetRef:
    """Sheet handle returned by the adapters.

    ``worksheet`` holds the library object when one exists (openpyxl), and is
    excluded from equality so handles compare by title and position only.
    """
    title: str
    position: int
    worksheet: Any = field(default=None, compare=False, repr=False)

    def name(self) -> str:
        return self.title


class _NamedSheets:
    """Shared implementation over an ordered list of unique sheet names."""

    def __init__(self, names: list[str]) -> None:
        seen: set[str] = set()
        for n in names:
            if n in seen:
                raise ValueError(f"duplicate sheet name: {n!r}")
            seen.add(n)
        self._names = list(names)
        self._positions = {n: i for i, n in enumerate(self._names)}

    def _worksheet(self, index: int) -> Any:
        return None

    def sheet_count(self) -> int:
        return len(self._names)

    def sheet_at(self, index: int) -> SheetRef:
        if index < 0 or index >= len(self._names):
            raise IndexError(f"sheet index out of range: {index}")
        return SheetRef(self._names[index], index, self._worksheet(index))

    def sheet_by_name(self, name: str) -> SheetRef | None:
        pos = self._positions.get(name)
        if pos is None:
            return None
        return self.sheet_at(pos)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._names!r})"


class ListDocument(_NamedSheets):
    """In-memory document built from an ordered list of sheet names."""


class PandasExcelDocument(_NamedSheets):
    """Adapter over ``pandas.ExcelFile`` (sheet names only, no cell data)."""

    def __init__(self, xls: pd.ExcelFile) -> None:
        self.xls = xls
        super().__init__([str(n) for n in xls.sheet_names])

    def close(self) -> None:
        self.xls.close()

    def __enter__(self) -> PandasExcelDocument:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


class OpenpyxlDocument(_NamedSheets):
    """Adapter over an ``openpyxl.Workbook``; handles expose the Worksheet."""

    def __init__(self, workbook: Any) -> None:
        self.workbook = workbook
        super().__init__(list(workbook.sheetnames))

    def _worksheet(self, index: int) -> Any:
        return self.workbook.worksheets[index]


def open_document(path: Path) -> PandasExcelDocument:
    """Open an Excel workbook for sheet resolution.

    Raises:
        FileNotFoundError: the workbook does not exist
    """
    if not path.exists():
        raise FileNotFoundError(f"workbook not found: {path}")
    return PandasExcelDocument(pd.ExcelFile(path))


def sheet_names(document: Document) -> list[str]:
    return [document.sheet_at(i).name() for i in range(document.sheet_count())]
