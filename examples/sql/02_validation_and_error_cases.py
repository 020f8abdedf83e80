"""Errors come back as values: usage, binding, and driver failures."""

from __future__ import annotations

import logging
import sqlite3
import sys
from datetime import date
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "prepared_query").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import prepared_query as pq


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s %(message)s")
    config = pq.ExecutorConfig(debug=True)

    conn = sqlite3.connect(":memory:")
    conn.execute('CREATE TABLE "t" ("id" INTEGER PRIMARY KEY, "name" TEXT UNIQUE);')

    try:
        # 1) Placeholder mismatch: nothing is executed.
        mismatch = pq.insert(conn, 'INSERT INTO "t" ("name") VALUES (:name);', {"nme": "x"}, config=config)
        print("Mismatch:", type(mismatch.error).__name__, mismatch.error)

        # 2) Unsupported value type fails only this call.
        bad_type = pq.insert(conn, 'INSERT INTO "t" ("name") VALUES (:name);', {"name": date.today()})
        print("Binding:", type(bad_type.error).__name__, bad_type.error)

        # 3) Driver failure (unique constraint) is returned, not raised.
        pq.insert(conn, 'INSERT INTO "t" ("name") VALUES (:name);', {"name": "dup"})
        dup = pq.insert(conn, 'INSERT INTO "t" ("name") VALUES (:name);', {"name": "dup"})
        print("Driver:", type(dup.error).__name__, dup.error)

        # 4) Callers who prefer exceptions can opt in.
        try:
            dup.raise_for_error()
        except pq.DriverError as exc:
            print("Raised:", exc.message)

        # 5) Keyword lint only warns; the statement still runs.
        info = pq.select(conn, 'PRAGMA table_info("t");', use_placeholders=False)
        print("Columns:", [row["name"] for row in info.rows])
        conn.rollback()
    finally:
        conn.close()


if __name__ == "__main__":
    main()
