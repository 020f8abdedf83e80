"""Argument checks run before a statement reaches the driver."""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

from .contracts import DialectPort
from .errors import InvalidArgument
from .operations import OperationKind
from .placeholders import check_placeholders
from .types import QueryParams

logger = logging.getLogger(__name__)


def check_arguments(
    kind: OperationKind,
    conn: Any,
    sql: Any,
    params: QueryParams,
    dialect: Optional[DialectPort],
    *,
    use_placeholders: bool = True,
) -> Optional[InvalidArgument]:
    """Return the first usage error for an operation call, or `None`."""

    if conn is None:
        return InvalidArgument(f"{kind.value}: connection parameter is empty")
    if not isinstance(sql, str) or not sql.strip():
        return InvalidArgument(f"{kind.value}: SQL string is empty")
    if not use_placeholders:
        return None
    if params is None or len(params) == 0:
        return InvalidArgument(f"{kind.value}: parameter set to bind is empty")
    if dialect is None:
        return InvalidArgument(f"{kind.value}: no dialect available to check placeholders")
    return check_placeholders(sql, params, dialect)


def keyword_present(kind: OperationKind, sql: str) -> bool:
    return re.search(rf"\b{kind.keyword}\b", sql, re.IGNORECASE) is not None


def lint_keyword(kind: OperationKind, sql: str) -> bool:
    """Warn when the SQL lacks the operation's keyword. Never blocks execution."""

    if keyword_present(kind, sql):
        return True
    logger.warning(
        "SQL may be wrong: calling %s, but no %s keyword found in query: %s",
        kind.value,
        kind.keyword,
        sql,
    )
    return False
