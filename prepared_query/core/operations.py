"""Statement kinds handled by the executor."""

from __future__ import annotations

from enum import Enum


class OperationKind(str, Enum):
    SELECT = "select"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"

    @property
    def keyword(self) -> str:
        """SQL keyword a statement of this kind is expected to contain."""

        return self.value.upper()
