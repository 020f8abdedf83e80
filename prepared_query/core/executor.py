"""Statement executor: validate, bind, execute, and shape results.

Every function here is stateless and takes the DB-API connection
explicitly. Usage, binding, and driver failures come back in the result's
`error` field; nothing is raised for them. The executor never commits or
rolls back, so the caller keeps ownership of the transaction.
"""

from __future__ import annotations

import contextlib
import logging
from typing import Any, Callable, Dict, Iterator, Optional, Tuple, Union, cast

from ..config import DEFAULT_CONFIG, ExecutorConfig
from ..ports.db_api.dialects import dialect_for_connection
from .binding import bind_parameters, bind_type_codes
from .contracts import DialectPort
from .errors import DriverError, InvalidArgument, QueryError, TypeBindingError
from .operations import OperationKind
from .results import (
    DeleteResult,
    InsertResult,
    MutationResult,
    OperationResult,
    SelectResult,
    UpdateResult,
)
from .rows import row_to_mapping
from .types import BoundParams, QueryParams
from .validation import check_arguments, lint_keyword

logger = logging.getLogger(__name__)

_Prepared = Tuple[DialectPort, Optional[BoundParams]]

# Raised by drivers while encoding bound values (oversized ints, lone
# surrogates, format characters) outside their DB-API `Error` hierarchy.
_ENCODE_ERRORS = (ValueError, TypeError, OverflowError)
_COUNT_BATCH = 500


@contextlib.contextmanager
def _open_cursor(conn: Any) -> Iterator[Any]:
    """Yield a fresh cursor and close it on every exit path."""

    cur = conn.cursor()
    try:
        yield cur
    finally:
        close = getattr(cur, "close", None)
        if callable(close):
            close()


def _prepare(
    kind: OperationKind,
    conn: Any,
    sql: Any,
    params: QueryParams,
    dialect: Optional[DialectPort],
    config: ExecutorConfig,
    *,
    use_placeholders: bool = True,
) -> Union[QueryError, _Prepared]:
    """Run usage checks and bind parameters, or return the error that stops the call."""

    if dialect is None and conn is not None:
        try:
            dialect = dialect_for_connection(conn)
        except InvalidArgument as exc:
            logger.warning("%s rejected: %s", kind.value, exc.message)
            return exc

    error = check_arguments(
        kind, conn, sql, params, dialect, use_placeholders=use_placeholders
    )
    if error is not None:
        logger.warning("%s rejected: %s", kind.value, error.message)
        return error
    dialect = cast(DialectPort, dialect)

    if config.lint_keywords:
        lint_keyword(kind, sql)

    bound: Optional[BoundParams] = None
    try:
        if use_placeholders:
            bound = bind_parameters(params, dialect)
        if config.debug:
            logger.debug(
                "%s (DEBUG) dialect=%s types=%r\n%s\nparams=%r",
                kind.value,
                dialect.name,
                bind_type_codes(params, dialect) if use_placeholders else "",
                sql,
                bound,
            )
    except TypeBindingError as exc:
        logger.warning("%s rejected: %s", kind.value, exc.message)
        return exc
    return dialect, bound


def _run(
    kind: OperationKind, cur: Any, sql: str, bound: Optional[BoundParams]
) -> Optional[DriverError]:
    """Execute the statement; a value the driver cannot encode becomes a `DriverError`."""

    try:
        if bound is None:
            cur.execute(sql)
        else:
            cur.execute(sql, bound)
    except _ENCODE_ERRORS as exc:
        return _driver_error(kind, exc)
    return None


def _driver_error(kind: OperationKind, exc: BaseException) -> DriverError:
    message = str(exc) or type(exc).__name__
    logger.error("%s failed: %s", kind.value, message)
    return DriverError(message, cause=exc)


def select(
    conn: Any,
    sql: str,
    params: QueryParams = None,
    *,
    fetch_all: Optional[bool] = None,
    use_placeholders: bool = True,
    dialect: Optional[DialectPort] = None,
    config: Optional[ExecutorConfig] = None,
) -> SelectResult:
    """Run a SELECT and return its rows.

    Args:
        conn: Live DB-API connection.
        sql: Query text, usually with placeholders.
        params: Mapping for named dialects, sequence for positional ones.
        fetch_all: True for every row, False for the first row only.
            Defaults to `config.default_fetch_all`.
        use_placeholders: False to run a query without binding anything.
        dialect: Backend dialect; inferred from the connection when omitted.
        config: Executor settings; defaults to `DEFAULT_CONFIG`.

    Returns:
        `SelectResult` with `rows` as a list (fetch-all) or a single row
        mapping / `None` (single-row), and `row_count` as the number of rows
        the query produced.
    """

    config = config or DEFAULT_CONFIG
    if fetch_all is None:
        fetch_all = config.default_fetch_all
    empty = [] if fetch_all else None
    kind = OperationKind.SELECT

    prepared = _prepare(
        kind, conn, sql, params, dialect, config, use_placeholders=use_placeholders
    )
    if isinstance(prepared, QueryError):
        return SelectResult(rows=empty, row_count=0, error=prepared)
    resolved, bound = prepared

    driver_errors = resolved.driver_error_types(conn)
    try:
        with _open_cursor(conn) as cur:
            error = _run(kind, cur, sql, bound)
            if error is not None:
                return SelectResult(rows=empty, row_count=0, error=error)
            if fetch_all:
                rows = [row_to_mapping(cur, row) for row in cur.fetchall() or ()]
                return SelectResult(rows=rows, row_count=len(rows))
            first = cur.fetchone()
            if first is None:
                return SelectResult(rows=None, row_count=0)
            row = row_to_mapping(cur, first)
            row_count = 1 + _count_remaining(cur)
    except driver_errors as exc:
        return SelectResult(rows=empty, row_count=0, error=_driver_error(kind, exc))

    return SelectResult(rows=row, row_count=row_count)


def _count_remaining(cur: Any) -> int:
    """Drain the cursor in batches without mapping the rows."""

    count = 0
    while True:
        batch = cur.fetchmany(_COUNT_BATCH)
        if not batch:
            return count
        count += len(batch)


def _mutation_result(
    kind: OperationKind,
    *,
    affected_count: int = 0,
    last_insert_id: Optional[int] = None,
    error: Optional[QueryError] = None,
) -> MutationResult:
    succeeded = error is None and affected_count > 0
    if kind is OperationKind.INSERT:
        return InsertResult(
            succeeded=succeeded,
            affected_count=affected_count,
            last_insert_id=last_insert_id,
            error=error,
        )
    if kind is OperationKind.UPDATE:
        return UpdateResult(succeeded=succeeded, affected_count=affected_count, error=error)
    return DeleteResult(succeeded=succeeded, affected_count=affected_count, error=error)


def _mutate(
    kind: OperationKind,
    conn: Any,
    sql: str,
    params: QueryParams,
    dialect: Optional[DialectPort],
    config: Optional[ExecutorConfig],
) -> MutationResult:
    """Shared INSERT / UPDATE / DELETE routine."""

    config = config or DEFAULT_CONFIG
    prepared = _prepare(kind, conn, sql, params, dialect, config)
    if isinstance(prepared, QueryError):
        return _mutation_result(kind, error=prepared)
    resolved, bound = prepared

    last_insert_id: Optional[int] = None
    driver_errors = resolved.driver_error_types(conn)
    try:
        with _open_cursor(conn) as cur:
            error = _run(kind, cur, sql, bound)
            if error is not None:
                return _mutation_result(kind, error=error)
            # DB-API reports -1 when the count is unknown.
            affected_count = max(getattr(cur, "rowcount", 0) or 0, 0)
            if kind is OperationKind.INSERT and affected_count > 0:
                last_insert_id = resolved.get_lastrowid(cur)
    except driver_errors as exc:
        return _mutation_result(kind, error=_driver_error(kind, exc))

    return _mutation_result(
        kind, affected_count=affected_count, last_insert_id=last_insert_id
    )


def insert(
    conn: Any,
    sql: str,
    params: QueryParams,
    *,
    dialect: Optional[DialectPort] = None,
    config: Optional[ExecutorConfig] = None,
) -> InsertResult:
    """Run an INSERT; reports the affected count and last generated id."""

    return _mutate(OperationKind.INSERT, conn, sql, params, dialect, config)  # type: ignore[return-value]


def update(
    conn: Any,
    sql: str,
    params: QueryParams,
    *,
    dialect: Optional[DialectPort] = None,
    config: Optional[ExecutorConfig] = None,
) -> UpdateResult:
    """Run an UPDATE; zero matched rows is `succeeded=False` without an error."""

    return _mutate(OperationKind.UPDATE, conn, sql, params, dialect, config)  # type: ignore[return-value]


def delete(
    conn: Any,
    sql: str,
    params: QueryParams,
    *,
    dialect: Optional[DialectPort] = None,
    config: Optional[ExecutorConfig] = None,
) -> DeleteResult:
    """Run a DELETE; zero matched rows is `succeeded=False` without an error."""

    return _mutate(OperationKind.DELETE, conn, sql, params, dialect, config)  # type: ignore[return-value]


def execute(
    kind: Union[OperationKind, str],
    conn: Any,
    sql: str,
    params: QueryParams = None,
    **kwargs: Any,
) -> OperationResult:
    """Dispatch to `select` / `insert` / `update` / `delete` by kind."""

    operation = _OPERATIONS[OperationKind(kind)]
    return operation(conn, sql, params, **kwargs)


_OPERATIONS: Dict[OperationKind, Callable[..., OperationResult]] = {
    OperationKind.SELECT: select,
    OperationKind.INSERT: insert,
    OperationKind.UPDATE: update,
    OperationKind.DELETE: delete,
}
