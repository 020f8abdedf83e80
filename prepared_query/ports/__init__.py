"""Public port exports for concrete backend dialects."""

from .db_api import Dialect, MySQLDialect, SQLiteDialect, dialect_for_connection

__all__ = [
    "Dialect",
    "SQLiteDialect",
    "MySQLDialect",
    "dialect_for_connection",
]
