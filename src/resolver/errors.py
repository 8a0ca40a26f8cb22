from __future__ import annotations

from enum import Enum

"""Error taxonomy for sheet resolution.

Two kinds of failure are reported to callers:
- InvalidRuleError: the selection rule itself cannot be used (no selector set,
  or a pattern that does not compile).
- SheetNotFoundError: the rule is valid but no sheet satisfies it. The
  ``reason`` attribute tells which selector strategy failed.

Nothing here is retried; the document is static for the duration of a call.
"""

__all__ = [
    "NotFoundReason",
    "SheetResolutionError",
    "InvalidRuleError",
    "SheetNotFoundError",
]

MULTIPLE_MATCH_PREFIX = "multiple sheets matched: "


class NotFoundReason(Enum):
    """Which selector strategy failed to find a sheet."""
    BY_NAME = "by_name"
    BY_INDEX = "by_index"
    BY_PATTERN = "by_pattern"
    BY_REMEMBERED_NAME = "by_remembered_name"


class SheetResolutionError(Exception):
    """Base class for every resolution failure."""


class InvalidRuleError(SheetResolutionError):
    """Raised when a selection rule carries no usable selector."""

    def __init__(self, target: str, message: str) -> None:
        self.target = target
        self.message = message
        super().__init__(f"With '{target}', {message}")


class SheetNotFoundError(SheetResolutionError):
    """Raised when no sheet (or no single sheet) satisfies the rule.

    Attributes:
        reason: NotFoundReason discriminant
        value: requested name / index / pattern / remembered name
        total: sheet count of the document (index lookups only)
        candidates: ambiguous candidate names in document order (save mode only)
        detail: optional human readable detail
    """

    def __init__(
        self,
        reason: NotFoundReason,
        value: str | int,
        *,
        total: int | None = None,
        candidates: tuple[str, ...] = (),
        detail: str | None = None,
    ) -> None:
        self.reason = reason
        self.value = value
        self.total = total
        self.candidates = candidates
        self.detail = detail
        super().__init__(self._render())

    @classmethod
    def by_name(cls, name: str) -> SheetNotFoundError:
        return cls(NotFoundReason.BY_NAME, name)

    @classmethod
    def by_index(cls, index: int, total: int) -> SheetNotFoundError:
        return cls(NotFoundReason.BY_INDEX, index, total=total)

    @classmethod
    def by_pattern(cls, pattern: str, candidates: tuple[str, ...] = ()) -> SheetNotFoundError:
        detail = MULTIPLE_MATCH_PREFIX + ",".join(candidates) if candidates else None
        return cls(NotFoundReason.BY_PATTERN, pattern, candidates=candidates, detail=detail)

    @classmethod
    def by_remembered_name(cls, name: str) -> SheetNotFoundError:
        return cls(NotFoundReason.BY_REMEMBERED_NAME, name)

    @property
    def ambiguous(self) -> bool:
        return bool(self.candidates)

    def _render(self) -> str:
        if self.reason is NotFoundReason.BY_INDEX:
            msg = f"sheet not found: index={self.value} (total {self.total} sheets)"
        elif self.reason is NotFoundReason.BY_PATTERN:
            msg = f"sheet not found: pattern='{self.value}'"
        elif self.reason is NotFoundReason.BY_REMEMBERED_NAME:
            msg = f"sheet not found: remembered name='{self.value}'"
        else:
            msg = f"sheet not found: name='{self.value}'"
        if self.detail:
            msg += f" ({self.detail})"
        return msg
