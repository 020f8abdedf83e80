"""Concrete backend dialects for DB-API drivers."""

from __future__ import annotations

import sys
from typing import Any, Optional, Tuple, Type

from ...core.errors import InvalidArgument

_PARAMSTYLES = ("named", "qmark", "format")


class Dialect:
    """Base dialect that defines placeholder and bind behavior."""

    name: str = "generic"
    paramstyle: str = "named"
    float_as_text: bool = False
    driver_modules: Tuple[str, ...] = ()

    def __init__(self, paramstyle: Optional[str] = None):
        if paramstyle is not None:
            if paramstyle not in _PARAMSTYLES:
                raise ValueError(f"Unsupported paramstyle: {paramstyle}")
            self.paramstyle = paramstyle

    def __repr__(self) -> str:
        return f"{type(self).__name__}(paramstyle={self.paramstyle!r})"

    @property
    def is_named(self) -> bool:
        return self.paramstyle == "named"

    def placeholder(self, key: str) -> str:
        """Return parameter placeholder for current param style."""

        if self.paramstyle == "named":
            return f":{key}"
        if self.paramstyle == "qmark":
            return "?"
        if self.paramstyle == "format":
            return "%s"
        raise ValueError(f"Unsupported paramstyle: {self.paramstyle}")

    def get_lastrowid(self, cursor: Any) -> Optional[int]:
        """Extract `lastrowid` from DB-API cursor when available."""

        return getattr(cursor, "lastrowid", None)

    def driver_error_types(self, conn: Any) -> Tuple[Type[BaseException], ...]:
        """Return the driver's DB-API `Error` class for this connection.

        Walks the connection class's module path from the most specific
        module to the package root. Falls back to `Exception` when the
        driver exposes no `Error`.
        """

        parts = type(conn).__module__.split(".")
        for i in range(len(parts), 0, -1):
            module = sys.modules.get(".".join(parts[:i]))
            error = getattr(module, "Error", None)
            if isinstance(error, type) and issubclass(error, BaseException):
                return (error,)
        return (Exception,)


class SQLiteDialect(Dialect):
    """SQLite dialect (`:name` parameters, floats bound as text)."""

    name = "sqlite"
    paramstyle = "named"
    float_as_text = True
    driver_modules = ("sqlite3", "pysqlite2")


class MySQLDialect(Dialect):
    """MySQL dialect (`%s` positional parameters, floats bound as doubles)."""

    name = "mysql"
    paramstyle = "format"
    float_as_text = False
    driver_modules = ("pymysql", "MySQLdb", "mysql.connector")

    def get_lastrowid(self, cursor: Any) -> Optional[int]:
        # MySQL reports 0 when the statement generated no AUTO_INCREMENT value.
        lastrowid = getattr(cursor, "lastrowid", None)
        if not lastrowid:
            return None
        return int(lastrowid)


_BUILTIN_DIALECTS: Tuple[Type[Dialect], ...] = (SQLiteDialect, MySQLDialect)


def dialect_for_connection(conn: Any) -> Dialect:
    """Pick a dialect from the connection's driver module.

    Raises:
        InvalidArgument: The driver is not one of the known backends.
    """

    module_name = type(conn).__module__
    for dialect_cls in _BUILTIN_DIALECTS:
        for prefix in dialect_cls.driver_modules:
            if module_name == prefix or module_name.startswith(prefix + "."):
                return dialect_cls()
    raise InvalidArgument(
        f"Cannot infer a dialect for driver module {module_name!r}; pass dialect= explicitly."
    )
