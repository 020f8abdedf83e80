"""Bind-type inference and parameter adaptation."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List

from .contracts import DialectPort
from .errors import TypeBindingError
from .types import BoundParams, QueryParams


class BindType(str, Enum):
    """Wire data-type tag for a bound value."""

    TEXT = "text"
    INTEGER = "integer"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    NULL = "null"
    BINARY = "binary"

    @property
    def code(self) -> str:
        """One-letter code used in debug traces."""

        return _CODES[self]


_CODES = {
    BindType.TEXT: "s",
    BindType.INTEGER: "i",
    BindType.DOUBLE: "d",
    BindType.BOOLEAN: "o",
    BindType.NULL: "n",
    BindType.BINARY: "b",
}

_BINARY_TYPES = (bytes, bytearray, memoryview)


@dataclass(frozen=True)
class Param:
    """A parameter value with a bind-type tag chosen by the caller."""

    value: Any
    bind_type: BindType


def infer_bind_type(value: Any, dialect: DialectPort) -> BindType:
    """Map a value's runtime type to the dialect's bind-type tag.

    Raises:
        TypeBindingError: The value type has no tag.
    """

    if isinstance(value, Param):
        return value.bind_type
    if value is None:
        return BindType.NULL
    # bool is an int subclass.
    if isinstance(value, bool):
        return BindType.BOOLEAN
    if isinstance(value, int):
        return BindType.INTEGER
    if isinstance(value, float):
        return BindType.TEXT if dialect.float_as_text else BindType.DOUBLE
    if isinstance(value, str):
        return BindType.TEXT
    if isinstance(value, _BINARY_TYPES):
        return BindType.BINARY
    raise TypeBindingError(
        f"Unrecognised bind value type {type(value).__name__!r} for {dialect.name} dialect",
        type_name=type(value).__name__,
    )


def _incompatible(value: Any, bind_type: BindType) -> TypeBindingError:
    return TypeBindingError(
        f"Value of type {type(value).__name__!r} cannot be bound as {bind_type.value}",
        type_name=type(value).__name__,
    )


def adapt_value(value: Any, bind_type: BindType) -> Any:
    """Convert a value into the form passed to the driver for its tag."""

    if isinstance(value, Param):
        value = value.value
    if bind_type is BindType.NULL:
        if value is not None:
            raise _incompatible(value, bind_type)
        return None
    if value is None:
        return None
    if bind_type is BindType.BOOLEAN:
        if not isinstance(value, (bool, int)):
            raise _incompatible(value, bind_type)
        return int(bool(value))
    if bind_type is BindType.INTEGER:
        if isinstance(value, bool) or not isinstance(value, int):
            raise _incompatible(value, bind_type)
        return value
    if bind_type is BindType.DOUBLE:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise _incompatible(value, bind_type)
        return float(value)
    if bind_type is BindType.BINARY:
        if not isinstance(value, _BINARY_TYPES):
            raise _incompatible(value, bind_type)
        return bytes(value)
    # TEXT: floats are stringified with full precision.
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, str):
        return value
    raise _incompatible(value, bind_type)


def normalize_key(key: str) -> str:
    """Strip the leading `:` callers may include in named parameter keys."""

    return key[1:] if key.startswith(":") else key


def bind_parameters(params: QueryParams, dialect: DialectPort) -> BoundParams:
    """Infer a tag for each parameter and adapt it for the driver.

    Mapping keys lose their leading `:`; sequence order is preserved.

    Raises:
        TypeBindingError: A value has no tag or does not fit its `Param` tag.
    """

    if params is None:
        return {} if dialect.is_named else []
    if isinstance(params, Mapping):
        bound: Dict[str, Any] = {}
        for key, value in params.items():
            bound[normalize_key(str(key))] = adapt_value(value, infer_bind_type(value, dialect))
        return bound
    values: List[Any] = []
    for value in params:
        values.append(adapt_value(value, infer_bind_type(value, dialect)))
    return values


def bind_type_codes(params: QueryParams, dialect: DialectPort) -> str:
    """Return the concatenated one-letter codes for a parameter set."""

    if not params:
        return ""
    values = params.values() if isinstance(params, Mapping) else params
    return "".join(infer_bind_type(v, dialect).code for v in values)
