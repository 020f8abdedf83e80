"""Row normalization helpers."""

from __future__ import annotations

from typing import Any, Mapping

from .types import RowMapping


def row_to_mapping(cursor: Any, row: Any) -> RowMapping:
    """Normalize a driver row to a field-name-keyed dict.

    Supports mapping rows directly (dict cursors, `sqlite3.Row`) and
    tuple/list rows via `cursor.description`.
    """

    if isinstance(row, Mapping):
        return dict(row)

    if isinstance(row, (tuple, list)):
        desc = getattr(cursor, "description", None)
        if not desc:
            raise TypeError("Cursor has no description; cannot map tuple rows to dict.")
        cols = [d[0] for d in desc]
        return dict(zip(cols, row))

    keys = getattr(row, "keys", None)
    if callable(keys):
        return {k: row[k] for k in keys()}

    raise TypeError(f"Unsupported row type: {type(row)}")
