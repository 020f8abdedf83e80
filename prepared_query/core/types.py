"""Shared core type aliases used across binding, validation, and the executor."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

NamedParams = Mapping[str, Any]
PositionalParams = Sequence[Any]
QueryParams = Union[NamedParams, PositionalParams, None]

BoundParams = Union[Dict[str, Any], List[Any]]

RowMapping = Dict[str, Any]
Rows = List[RowMapping]
MaybeRow = Optional[RowMapping]
