from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.selection_rule import SheetRule

"""Binding config loader.

Responsibilities:
- Load the YAML binding config (default: config/bindings.yml)
- Validate it against the packaged JSON schema (rules_schema.json)
- Build one SheetBinding per target

The schema does not require a selector per binding: a binding with none of
name/index/regex loads fine and fails later with InvalidRuleError when it is
resolved.
"""

__all__ = [
    "ConfigError",
    "SheetBinding",
    "BindingConfig",
    "SCHEMA_PATH",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("rules_schema.json")


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class SheetBinding:
    target: str  # bean type name (key in bindings dict)
    rule: SheetRule
    sheet_name_field: str | None = None  # remembered sheet name attribute (save mode)


@dataclass(frozen=True)
class BindingConfig:
    workbook: str | None
    bindings: dict[str, SheetBinding]


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: the schema file is missing or broken, or the data
            fails validation
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _coerce_index(target: str, value: Any) -> int:
    # draft-07 "integer" also accepts integral floats such as 1.0
    if isinstance(value, float):
        if not value.is_integer():
            raise ConfigError(f"config validation failed: {target}.index must be an integer: {value}")
        return int(value)
    return value


def _build_binding(target: str, raw: dict[str, Any]) -> SheetBinding:
    rule = SheetRule(
        name=raw.get("name", ""),
        index=_coerce_index(target, raw.get("index", -1)),
        pattern=raw.get("regex", ""),
    )
    return SheetBinding(target=target, rule=rule, sheet_name_field=raw.get("sheet_name_field"))


def load_config(path: Path) -> BindingConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config validation failed: top level must be a mapping")

    _validate_config_schema(data)

    bindings = {
        str(target): _build_binding(str(target), raw or {})
        for target, raw in data["bindings"].items()
    }
    return BindingConfig(workbook=data.get("workbook"), bindings=bindings)
