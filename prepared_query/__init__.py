"""Parameterized SELECT / INSERT / UPDATE / DELETE helpers over DB-API connections."""

import logging

from .config import ExecutorConfig
from .core import (
    BindType,
    DeleteResult,
    DriverError,
    InsertResult,
    InvalidArgument,
    OperationKind,
    Param,
    QueryError,
    SelectResult,
    TypeBindingError,
    UpdateResult,
    bind_parameters,
    check_placeholders,
    delete,
    execute,
    infer_bind_type,
    insert,
    select,
    update,
)
from .ports import Dialect, MySQLDialect, SQLiteDialect, dialect_for_connection

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "select",
    "insert",
    "update",
    "delete",
    "execute",
    "SelectResult",
    "InsertResult",
    "UpdateResult",
    "DeleteResult",
    "QueryError",
    "InvalidArgument",
    "DriverError",
    "TypeBindingError",
    "BindType",
    "Param",
    "OperationKind",
    "infer_bind_type",
    "bind_parameters",
    "check_placeholders",
    "Dialect",
    "SQLiteDialect",
    "MySQLDialect",
    "dialect_for_connection",
    "ExecutorConfig",
]
