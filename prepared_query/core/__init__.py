"""Public core API for binding, validation, and statement execution."""

from .binding import BindType, Param, bind_parameters, infer_bind_type
from .errors import DriverError, InvalidArgument, QueryError, TypeBindingError
from .executor import delete, execute, insert, select, update
from .operations import OperationKind
from .placeholders import check_placeholders
from .results import DeleteResult, InsertResult, SelectResult, UpdateResult

__all__ = [
    "BindType",
    "Param",
    "bind_parameters",
    "infer_bind_type",
    "check_placeholders",
    "OperationKind",
    "QueryError",
    "InvalidArgument",
    "DriverError",
    "TypeBindingError",
    "SelectResult",
    "InsertResult",
    "UpdateResult",
    "DeleteResult",
    "select",
    "insert",
    "update",
    "delete",
    "execute",
]
