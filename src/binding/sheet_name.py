from __future__ import annotations

import dataclasses
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from ..resolver.errors import InvalidRuleError

"""Remembered sheet name lookup.

When a bean bound by a regex rule is saved, it may carry the name of the sheet
it was loaded from. That member is tagged explicitly instead of being found by
scanning arbitrary attributes:

- ``@sheet_name_getter`` on a method or on a property getter
- ``sheet_name_field()`` as a dataclass field default
- ``register_sheet_name(cls, "attr")`` for classes configured from outside;
  subclasses inherit the registration
- an explicit attribute name (the YAML ``sheet_name_field`` key)

SheetNameAccessor.for_type() resolves the tagged member once per class, at
bind-configuration time. Search order: explicit attribute, registry, marked
methods (class dict order along the MRO), marked dataclass fields, then a plain
``get_sheet_name()`` method (HasSheetName). At most one
member is expected; if several are tagged the first found wins.
"""

__all__ = [
    "SHEET_NAME_ROLE",
    "HasSheetName",
    "sheet_name_getter",
    "sheet_name_field",
    "register_sheet_name",
    "unregister_sheet_name",
    "SheetNameAccessor",
]

SHEET_NAME_ROLE = "sheet_name"
_MARKER = "__sheet_binder_role__"
_ROLE_KEY = "sheet_binder_role"

_registry: dict[type, str] = {}


@runtime_checkable
class HasSheetName(Protocol):
    def get_sheet_name(self) -> str | None: ...


def sheet_name_getter(func: Callable[..., Any]) -> Callable[..., Any]:
    """Mark a zero-argument method as the remembered sheet name accessor.

    Apply below ``@property`` when used on a property getter.
    """
    setattr(func, _MARKER, SHEET_NAME_ROLE)
    return func


def sheet_name_field(default: str | None = None) -> Any:
    return dataclasses.field(default=default, metadata={_ROLE_KEY: SHEET_NAME_ROLE})


def register_sheet_name(cls: type, attribute: str) -> None:
    _registry[cls] = attribute


def unregister_sheet_name(cls: type) -> None:
    _registry.pop(cls, None)


def _find_registered(cls: type) -> str | None:
    # subclasses inherit a registration, like marked methods
    for klass in cls.__mro__:
        if klass in _registry:
            return _registry[klass]
    return None


def _is_marked(member: Any) -> bool:
    if isinstance(member, property):
        member = member.fget
    elif isinstance(member, (staticmethod, classmethod)):
        return False
    return getattr(member, _MARKER, None) == SHEET_NAME_ROLE


def _find_marked_method(cls: type) -> str | None:
    for klass in cls.__mro__:
        for attr, member in vars(klass).items():
            if _is_marked(member):
                return attr
    return None


def _find_marked_field(cls: type) -> str | None:
    if not dataclasses.is_dataclass(cls):
        return None
    for f in dataclasses.fields(cls):
        if f.metadata.get(_ROLE_KEY) == SHEET_NAME_ROLE:
            return f.name
    return None


def _find_protocol_method(cls: type) -> str | None:
    # HasSheetName implementers that did not tag the method
    if callable(getattr(cls, "get_sheet_name", None)):
        return "get_sheet_name"
    return None


@dataclass(frozen=True)
class SheetNameAccessor:
    """Reads the remembered sheet name from a bean.

    ``attribute`` is None when the bean type has no tagged member; read() then
    always returns None.
    """
    owner: type | None
    attribute: str | None

    @classmethod
    def absent(cls) -> SheetNameAccessor:
        return cls(owner=None, attribute=None)

    @classmethod
    def for_type(cls, owner: type, attribute: str | None = None) -> SheetNameAccessor:
        if attribute is None:
            attribute = (
                _find_registered(owner)
                or _find_marked_method(owner)
                or _find_marked_field(owner)
                or _find_protocol_method(owner)
            )
        return cls(owner=owner, attribute=attribute)

    @property
    def found(self) -> bool:
        return self.attribute is not None

    def read(self, bean: Any) -> str | None:
        """Return the remembered name, or None when absent or empty.

        Raises:
            InvalidRuleError: the bean has no such attribute (misconfigured
                sheet_name_field)
        """
        if self.attribute is None:
            return None
        try:
            value = getattr(bean, self.attribute)
        except AttributeError as e:
            owner = type(bean).__qualname__
            raise InvalidRuleError(
                owner, f"sheet_name_field '{self.attribute}' not found on {owner}"
            ) from e
        if callable(value):
            value = value()
        if value is None:
            return None
        text = value if isinstance(value, str) else str(value)
        return text or None
