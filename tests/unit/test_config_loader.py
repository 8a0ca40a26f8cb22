from __future__ import annotations
import pytest
from pathlib import Path
from src.config.loader import ConfigError, load_config
from src.models.selection_rule import ByIndex, ByName, ByPattern, SheetRule
from src.resolver.errors import InvalidRuleError


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.workbook == "./data/book.xlsx"
    assert list(cfg.bindings) == ["Orders", "Summary", "First"]
    orders = cfg.bindings["Orders"]
    assert orders.rule == SheetRule(pattern=r"Data\d")
    assert orders.sheet_name_field == "sheet_name"
    assert cfg.bindings["Summary"].rule.selector() == ByName("Summary")
    assert cfg.bindings["First"].rule.selector() == ByIndex(0)
    assert orders.rule.selector() == ByPattern(r"Data\d")


def test_load_config_missing_file(temp_workdir: Path):
    with pytest.raises(ConfigError) as e:
        load_config(temp_workdir / "config" / "not_exists.yml")
    assert "config file not found" in str(e.value)


def test_load_config_invalid_yaml(write_config: Path):
    write_config.write_text("bindings: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "invalid yaml" in str(e.value)


def test_load_config_missing_bindings(write_config: Path):
    write_config.write_text("workbook: ./data/book.xlsx\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value) and "required property" in str(e.value)


def test_load_config_empty_selector_is_deferred(write_config: Path):
    write_config.write_text("bindings:\n  Orders:\n    sheet_name_field: sheet\n", encoding="utf-8")
    cfg = load_config(write_config)
    rule = cfg.bindings["Orders"].rule
    assert not rule.is_set
    with pytest.raises(InvalidRuleError):
        rule.selector("Orders")


def test_load_config_not_a_mapping(write_config: Path):
    write_config.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(write_config)


def test_load_config_integral_float_index_is_coerced(write_config: Path, data_document):
    from src.services.resolution import resolve_bindings

    write_config.write_text("bindings:\n  First:\n    index: 1.0\n", encoding="utf-8")
    cfg = load_config(write_config)
    rule = cfg.bindings["First"].rule
    assert rule.index == 1 and type(rule.index) is int
    report = resolve_bindings(data_document, cfg.bindings)
    assert report.outcomes[0].sheets == ("Data2",)


def test_load_config_fractional_index_rejected(write_config: Path):
    write_config.write_text("bindings:\n  First:\n    index: 1.5\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)
