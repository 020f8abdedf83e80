"""Operation-specific result records returned by the executor."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional, Union

from .errors import QueryError
from .types import MaybeRow, Rows


class _ResultMixin:
    error: Optional[QueryError]

    @property
    def ok(self) -> bool:
        """True when the call produced no error. Zero rows is still ok."""

        return self.error is None

    def raise_for_error(self) -> None:
        """Raise the carried error, if any."""

        if self.error is not None:
            raise self.error

    def to_dict(self) -> Dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}  # type: ignore[arg-type]
        if self.error is not None:
            data["error"] = self.error.message
        return data


@dataclass(frozen=True)
class SelectResult(_ResultMixin):
    rows: Union[Rows, MaybeRow] = field(default_factory=list)
    row_count: int = 0
    error: Optional[QueryError] = None


@dataclass(frozen=True)
class InsertResult(_ResultMixin):
    succeeded: bool = False
    affected_count: int = 0
    last_insert_id: Optional[int] = None
    error: Optional[QueryError] = None


@dataclass(frozen=True)
class UpdateResult(_ResultMixin):
    succeeded: bool = False
    affected_count: int = 0
    error: Optional[QueryError] = None


@dataclass(frozen=True)
class DeleteResult(_ResultMixin):
    succeeded: bool = False
    affected_count: int = 0
    error: Optional[QueryError] = None


MutationResult = Union[InsertResult, UpdateResult, DeleteResult]
OperationResult = Union[SelectResult, InsertResult, UpdateResult, DeleteResult]
