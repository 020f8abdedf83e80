"""Core port contracts used by binding, validation, and the executor."""

from __future__ import annotations

from typing import Any, Optional, Protocol, Tuple, Type


class DialectPort(Protocol):
    """Dialect behavior required to bind parameters and execute statements."""

    name: str
    paramstyle: str
    float_as_text: bool

    @property
    def is_named(self) -> bool: ...

    def placeholder(self, key: str) -> str: ...

    def get_lastrowid(self, cursor: Any) -> Optional[int]: ...

    def driver_error_types(self, conn: Any) -> Tuple[Type[BaseException], ...]: ...
