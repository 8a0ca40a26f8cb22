from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ..binding.sheet_name import SheetNameAccessor
from ..config.loader import SheetBinding
from ..excel.document import Document
from ..models.resolution import ResolutionResult
from ..resolver.errors import SheetResolutionError
from ..resolver.sheet_resolver import resolve_for_load, resolve_for_save

"""Batch resolution of configured bindings.

Resolves every binding of a config against one document in load mode. A
failing target is recorded and the remaining targets are still resolved; the
caller decides what a failure means (the CLI maps it to exit code 2).

resolve_binding_for_save() applies a binding in save mode, reading the
remembered sheet name through the configured sheet_name_field.
"""

__all__ = [
    "TargetOutcome",
    "ResolveReport",
    "resolve_bindings",
    "resolve_binding_for_save",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TargetOutcome:
    target: str
    sheets: tuple[str, ...] = ()
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ResolveReport:
    outcomes: list[TargetOutcome] = field(default_factory=list)

    @property
    def resolved(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if not o.ok)

    @property
    def matched_sheets(self) -> int:
        return sum(len(o.sheets) for o in self.outcomes)


def resolve_bindings(document: Document, bindings: dict[str, SheetBinding]) -> ResolveReport:
    report = ResolveReport()
    for target, binding in bindings.items():
        try:
            result = resolve_for_load(document, binding.rule, target)
        except SheetResolutionError as e:
            logger.warning("target=%s unresolved: %s", target, e)
            report.outcomes.append(TargetOutcome(target=target, error=str(e)))
            continue
        report.outcomes.append(TargetOutcome(target=target, sheets=tuple(result.names)))
    return report


def resolve_binding_for_save(
    document: Document, binding: SheetBinding, bean: Any
) -> ResolutionResult:
    """Resolve the sheet to save ``bean`` to under a configured binding.

    A configured ``sheet_name_field`` names the remembered sheet name
    attribute; otherwise the bean type's tagged member is used.
    """
    accessor = SheetNameAccessor.for_type(type(bean), binding.sheet_name_field)
    return resolve_for_save(document, binding.rule, bean, accessor)
