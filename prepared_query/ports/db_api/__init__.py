"""DB-API dialect exports."""

from .dialects import Dialect, MySQLDialect, SQLiteDialect, dialect_for_connection

__all__ = [
    "Dialect",
    "MySQLDialect",
    "SQLiteDialect",
    "dialect_for_connection",
]
