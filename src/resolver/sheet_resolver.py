from __future__ import annotations

import logging
import re
from typing import Any

from ..binding.sheet_name import SheetNameAccessor
from ..excel.document import Document, SheetHandle
from ..models.resolution import ResolutionResult, ResolveMode
from ..models.selection_rule import ByIndex, ByName, ByPattern, SheetRule, SheetSelector, as_selector
from .errors import InvalidRuleError, SheetNotFoundError

"""Sheet resolution for load and save.

Load mode returns every sheet matching the rule. Save mode additionally reads
the remembered sheet name from the bean being saved and uses it to pick a
single sheet among the pattern matches:

- an exact remembered-name hit wins immediately, whatever else matched
- a remembered name that no pattern match carries is an error
- without a remembered name, more than one match is an error

Both entry points are pure functions of their inputs. Patterns are compiled
per call and must match the whole sheet name.
"""

__all__ = [
    "resolve",
    "resolve_for_load",
    "resolve_for_save",
]

logger = logging.getLogger(__name__)


def _type_name(target: Any) -> str:
    if target is None:
        return "<unknown>"
    if isinstance(target, str):
        return target
    if isinstance(target, type):
        return f"{target.__module__}.{target.__qualname__}"
    return _type_name(type(target))


def _compile(pattern: str, target: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidRuleError(target, f"invalid sheet regex '{pattern}': {e}") from e


def _resolve_fixed(document: Document, selector: ByName | ByIndex) -> SheetHandle:
    # name / index handling is identical for load and save
    if isinstance(selector, ByName):
        sheet = document.sheet_by_name(selector.name)
        if sheet is None:
            raise SheetNotFoundError.by_name(selector.name)
        return sheet
    total = document.sheet_count()
    if selector.index >= total:
        raise SheetNotFoundError.by_index(selector.index, total)
    return document.sheet_at(selector.index)


def _scan(document: Document, compiled: re.Pattern[str]):
    for i in range(document.sheet_count()):
        sheet = document.sheet_at(i)
        if compiled.fullmatch(sheet.name()):
            yield sheet


def resolve_for_load(
    document: Document, rule: SheetRule | SheetSelector, target: Any = None
) -> ResolutionResult:
    """Resolve the sheet(s) to read.

    Parameters
    ----------
    document: workbook view
    rule: raw SheetRule or a SheetSelector
    target: bean type (or its name) for diagnostics

    Raises
    ------
    InvalidRuleError: no selector set, or the regex does not compile
    SheetNotFoundError: nothing matched
    """
    target_name = _type_name(target)
    selector = as_selector(rule, target_name)
    if not isinstance(selector, ByPattern):
        sheet = _resolve_fixed(document, selector)
        logger.debug("load target=%s selector=%s -> %s", target_name, selector, sheet.name())
        return ResolutionResult((sheet,), ResolveMode.LOAD)

    compiled = _compile(selector.pattern, target_name)
    matches = tuple(_scan(document, compiled))
    if not matches:
        raise SheetNotFoundError.by_pattern(selector.pattern)
    logger.debug(
        "load target=%s pattern=%s -> %s",
        target_name, selector.pattern, ",".join(s.name() for s in matches),
    )
    return ResolutionResult(matches, ResolveMode.LOAD)


def resolve_for_save(
    document: Document,
    rule: SheetRule | SheetSelector,
    bean: Any,
    accessor: SheetNameAccessor | None = None,
) -> ResolutionResult:
    """Resolve the single sheet to write ``bean`` to.

    ``accessor`` reads the remembered sheet name from the bean; when omitted it
    is built for ``type(bean)``. The remembered name is only consulted for
    pattern rules.

    Raises
    ------
    InvalidRuleError: no selector set, or the regex does not compile
    SheetNotFoundError: nothing matched, the remembered name was not among
        the matches, or several sheets matched with nothing to pick one
    """
    target_name = _type_name(bean)
    selector = as_selector(rule, target_name)
    if not isinstance(selector, ByPattern):
        sheet = _resolve_fixed(document, selector)
        logger.debug("save target=%s selector=%s -> %s", target_name, selector, sheet.name())
        return ResolutionResult((sheet,), ResolveMode.SAVE)

    if accessor is None:
        accessor = SheetNameAccessor.for_type(type(bean))
    remembered = accessor.read(bean)
    compiled = _compile(selector.pattern, target_name)

    # fold over the matches carrying (hit, candidates); stop on an exact hit
    hit: SheetHandle | None = None
    candidates: list[SheetHandle] = []
    for sheet in _scan(document, compiled):
        if remembered and sheet.name() == remembered:
            hit = sheet
            break
        candidates.append(sheet)

    if hit is not None:
        logger.debug("save target=%s remembered=%s -> exact hit", target_name, remembered)
        return ResolutionResult((hit,), ResolveMode.SAVE)
    if remembered and candidates:
        raise SheetNotFoundError.by_remembered_name(remembered)
    if not candidates:
        raise SheetNotFoundError.by_pattern(selector.pattern)
    if len(candidates) > 1:
        raise SheetNotFoundError.by_pattern(
            selector.pattern, tuple(s.name() for s in candidates)
        )
    logger.debug("save target=%s pattern=%s -> %s", target_name, selector.pattern, candidates[0].name())
    return ResolutionResult((candidates[0],), ResolveMode.SAVE)


def resolve(
    mode: ResolveMode,
    document: Document,
    rule: SheetRule | SheetSelector,
    bean: Any = None,
    accessor: SheetNameAccessor | None = None,
    target: Any = None,
) -> ResolutionResult:
    """Dispatch to resolve_for_load / resolve_for_save by mode."""
    if mode is ResolveMode.SAVE:
        if bean is None:
            raise ValueError("save mode requires the bean being saved")
        return resolve_for_save(document, rule, bean, accessor)
    return resolve_for_load(document, rule, target if target is not None else bean)
