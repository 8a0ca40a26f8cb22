from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..excel.document import SheetHandle

"""Resolution result model.

A ResolutionResult is the successful outcome of one resolve call: an ordered,
never-empty tuple of sheet handles. Multi-match results keep document order;
name and index rules always yield a single sheet.
"""

__all__ = [
    "ResolveMode",
    "ResolutionResult",
]


class ResolveMode(Enum):
    """Direction of the bind operation.

    - LOAD: read an existing document, every matching sheet is returned
    - SAVE: write to a document, the remembered sheet name disambiguates
    """
    LOAD = "load"
    SAVE = "save"


@dataclass(frozen=True)
class ResolutionResult:
    sheets: tuple[SheetHandle, ...]
    mode: ResolveMode

    def __post_init__(self) -> None:
        if not self.sheets:
            raise ValueError("resolution result must contain at least one sheet")

    @property
    def names(self) -> list[str]:
        return [s.name() for s in self.sheets]

    @property
    def first(self) -> SheetHandle:
        return self.sheets[0]

    def __iter__(self) -> Iterator[SheetHandle]:
        return iter(self.sheets)

    def __len__(self) -> int:
        return len(self.sheets)
