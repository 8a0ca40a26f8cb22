from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..resolver.errors import InvalidRuleError

"""Selection rule models.

A binding rule names its target sheet by exactly one of a literal name, a
zero-based index or a full-match regular expression.

SheetRule is the raw form, as read from config or built by callers: all three
fields may be populated and are checked in the fixed priority
name -> index -> pattern. SheetSelector is the tagged union the resolver works
on; once built it always carries exactly one selector.
"""

__all__ = [
    "ByName",
    "ByIndex",
    "ByPattern",
    "SheetSelector",
    "SheetRule",
    "as_selector",
]

MISSING_SELECTOR_MESSAGE = "sheet rule requires name or index or regex parameter."


@dataclass(frozen=True)
class ByName:
    name: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("sheet name must not be empty")


@dataclass(frozen=True)
class ByIndex:
    index: int

    def __post_init__(self) -> None:
        if type(self.index) is not int or self.index < 0:
            raise ValueError(f"sheet index must be a non-negative int: {self.index!r}")


@dataclass(frozen=True)
class ByPattern:
    pattern: str

    def __post_init__(self) -> None:
        if not self.pattern:
            raise ValueError("sheet pattern must not be empty")


SheetSelector = Union[ByName, ByIndex, ByPattern]


@dataclass(frozen=True)
class SheetRule:
    """Raw selection rule: name, index or regex.

    Unset values: ``name=""``, ``index=-1``, ``pattern=""``.
    """
    name: str = ""
    index: int = -1
    pattern: str = ""

    @property
    def is_set(self) -> bool:
        return bool(self.name) or self.index >= 0 or bool(self.pattern)

    def selector(self, target: str = "<unknown>") -> SheetSelector:
        """Convert to the tagged union using the priority name, index, pattern.

        Raises:
            InvalidRuleError: none of the three selectors is set, or the
                index is not an int
        """
        if self.name:
            return ByName(self.name)
        if self.index >= 0:
            if type(self.index) is not int:
                raise InvalidRuleError(target, f"sheet index must be an int: {self.index!r}")
            return ByIndex(self.index)
        if self.pattern:
            return ByPattern(self.pattern)
        raise InvalidRuleError(target, MISSING_SELECTOR_MESSAGE)


def as_selector(rule: SheetRule | SheetSelector, target: str = "<unknown>") -> SheetSelector:
    if isinstance(rule, SheetRule):
        return rule.selector(target)
    if isinstance(rule, (ByName, ByIndex, ByPattern)):
        return rule
    raise InvalidRuleError(target, f"unsupported sheet rule type: {type(rule).__name__}")
