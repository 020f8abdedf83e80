"""Error kinds carried by result records instead of being raised."""

from __future__ import annotations

from typing import Optional


class QueryError(Exception):
    """Base error for statement execution failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.message == other.message  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.message))


class InvalidArgument(QueryError):
    """Missing connection, empty SQL, or parameters that do not fit the SQL."""


class DriverError(QueryError):
    """The database driver rejected or failed the statement."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class TypeBindingError(QueryError):
    """A parameter value has no bind-type tag."""

    def __init__(self, message: str, type_name: str = ""):
        super().__init__(message)
        self.type_name = type_name
