"""Loose textual checks that SQL placeholders match the supplied parameters."""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Mapping
from typing import List, Optional, Set

from .binding import normalize_key
from .contracts import DialectPort
from .errors import InvalidArgument
from .types import QueryParams

_LITERALS = re.compile(
    r"""
    '(?:[^']|'')*'          # single-quoted string
    | "(?:[^"]|"")*"        # double-quoted identifier
    | `[^`]*`               # backtick identifier
    | --[^\n]*              # line comment
    | /\*.*?\*/             # block comment
    """,
    re.VERBOSE | re.DOTALL,
)
_NAMED = re.compile(r"(?<![:\w]):([A-Za-z_][A-Za-z0-9_]*)")
_STRAY_PERCENT = re.compile(r"%(?!s)")


def strip_literals(sql: str) -> str:
    """Blank out quoted literals and comments so markers inside them are ignored."""

    return _LITERALS.sub(" ", sql)


def named_placeholders(sql: str) -> Set[str]:
    """Return the `:name` tokens referenced by the SQL text."""

    return set(_NAMED.findall(strip_literals(sql)))


def stray_percent_signs(sql: str) -> int:
    """Count `%` signs that `format`-style drivers cannot interpolate.

    Drivers using `%s` markers apply `%` formatting to the whole query
    text, quoted literals included, so a lone `%` must be written `%%`.
    """

    return len(_STRAY_PERCENT.findall(sql.replace("%%", "")))


def positional_count(sql: str, dialect: DialectPort) -> int:
    """Count the dialect's positional markers (`?` or `%s`) in the SQL."""

    if dialect.is_named:
        raise ValueError(f"Not a positional paramstyle: {dialect.paramstyle}")
    marker = dialect.placeholder("")
    if dialect.paramstyle == "format":
        # Interpolation covers literals too.
        return sql.replace("%%", "").count(marker)
    return strip_literals(sql).count(marker)


def check_placeholders(
    sql: str, params: QueryParams, dialect: DialectPort
) -> Optional[InvalidArgument]:
    """Compare placeholders in `sql` against `params` for the dialect's style.

    Returns an `InvalidArgument` describing the mismatch, or `None`.
    """

    if dialect.is_named:
        if not isinstance(params, Mapping):
            return InvalidArgument(
                f"{dialect.name} dialect uses named placeholders; params must be a mapping"
            )
        expected = named_placeholders(sql)
        supplied = Counter(normalize_key(str(k)) for k in params)
        problems: List[str] = []
        duplicated = sorted(name for name, seen in supplied.items() if seen > 1)
        missing = sorted(expected - supplied.keys())
        unexpected = sorted(supplied.keys() - expected)
        if duplicated:
            problems.append("duplicate values for " + ", ".join(f":{n}" for n in duplicated))
        if missing:
            problems.append("missing values for " + ", ".join(f":{n}" for n in missing))
        if unexpected:
            problems.append("no placeholder for " + ", ".join(f":{n}" for n in unexpected))
        if problems:
            return InvalidArgument("bound parameters and SQL mismatch: " + "; ".join(problems))
        return None

    if params is None or isinstance(params, (str, bytes, Mapping)):
        return InvalidArgument(
            f"{dialect.name} dialect uses positional placeholders; params must be a sequence"
        )
    if dialect.paramstyle == "format":
        stray = stray_percent_signs(sql)
        if stray:
            return InvalidArgument(
                f"{stray} unescaped '%' sign(s) in SQL; write '%%' for a literal percent sign"
            )
    count = positional_count(sql, dialect)
    if count != len(params):
        return InvalidArgument(
            f"bound parameter number and SQL mismatch: {count} placeholder(s), "
            f"{len(params)} value(s)"
        )
    return None
