from __future__ import annotations

import pytest

from src.config.loader import SheetBinding
from src.models.selection_rule import SheetRule
from src.resolver.errors import InvalidRuleError, SheetNotFoundError
from src.services.resolution import (
    ResolveReport,
    TargetOutcome,
    resolve_binding_for_save,
    resolve_bindings,
)
from src.services.summary import render_summary_line


def _bindings(**rules: SheetRule) -> dict[str, SheetBinding]:
    return {t: SheetBinding(target=t, rule=r) for t, r in rules.items()}


def test_resolve_bindings_collects_outcomes(data_document):
    report = resolve_bindings(
        data_document,
        _bindings(
            Orders=SheetRule(pattern=r"Data\d"),
            Summary=SheetRule(name="Summary"),
            Missing=SheetRule(name="Nope"),
            Broken=SheetRule(),
        ),
    )
    by_target = {o.target: o for o in report.outcomes}
    assert by_target["Orders"].sheets == ("Data1", "Data2")
    assert by_target["Summary"].ok
    assert not by_target["Missing"].ok
    assert "name='Nope'" in by_target["Missing"].error
    assert "requires name or index or regex" in by_target["Broken"].error
    assert report.resolved == 2
    assert report.failed == 2
    assert report.matched_sheets == 3


def test_render_summary_line():
    report = ResolveReport(
        [
            TargetOutcome("Orders", ("Data1", "Data2")),
            TargetOutcome("Missing", error="sheet not found: name='Nope'"),
        ]
    )
    assert render_summary_line(report) == "SUMMARY targets=2 resolved=1 failed=1 sheets=2"


def test_render_summary_line_empty():
    assert render_summary_line(ResolveReport()) == "SUMMARY targets=0 resolved=0 failed=0 sheets=0"


class SavedOrders:
    def __init__(self, target_sheet=None):
        self.target_sheet = target_sheet


def test_resolve_binding_for_save_uses_configured_field(data_document):
    binding = SheetBinding("Orders", SheetRule(pattern=r"Data\d"), sheet_name_field="target_sheet")
    result = resolve_binding_for_save(data_document, binding, SavedOrders("Data2"))
    assert result.names == ["Data2"]


def test_resolve_binding_for_save_ambiguous_without_value(data_document):
    binding = SheetBinding("Orders", SheetRule(pattern=r"Data\d"), sheet_name_field="target_sheet")
    with pytest.raises(SheetNotFoundError) as e:
        resolve_binding_for_save(data_document, binding, SavedOrders())
    assert e.value.candidates == ("Data1", "Data2")


class Unconfigured:
    pass


def test_resolve_binding_for_save_missing_configured_field(data_document):
    binding = SheetBinding("Orders", SheetRule(pattern=r"Data\d"), sheet_name_field="target_sheet")
    with pytest.raises(InvalidRuleError) as e:
        resolve_binding_for_save(data_document, binding, Unconfigured())
    assert e.value.target == "Unconfigured"
    assert "sheet_name_field 'target_sheet' not found on Unconfigured" in str(e.value)
    assert isinstance(e.value.__cause__, AttributeError)
