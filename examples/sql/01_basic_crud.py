"""Basic SQLite example for prepared_query statement helpers."""

from __future__ import annotations

import logging
import sqlite3
import sys
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
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s %(message)s")

    # 1) Open a connection; the helpers never commit, so the caller does.
    conn = sqlite3.connect(":memory:")
    conn.execute('CREATE TABLE "users" ("id" INTEGER PRIMARY KEY, "name" TEXT, "score" REAL);')

    try:
        # 2) Insert rows with named placeholders (leading ":" in keys is optional).
        ann = pq.insert(
            conn,
            'INSERT INTO "users" ("name", "score") VALUES (:name, :score);',
            {":name": "Ann", ":score": 9.5},
        )
        bob = pq.insert(
            conn,
            'INSERT INTO "users" ("name", "score") VALUES (:name, :score);',
            {"name": "Bob", "score": 7.25},
        )
        conn.commit()
        print("Inserted:", ann.to_dict(), bob.to_dict())

        # 3) Fetch one row.
        one = pq.select(
            conn,
            'SELECT "name" FROM "users" WHERE "id" = :id;',
            {":id": ann.last_insert_id},
            fetch_all=False,
        )
        print("Single row:", one.rows, "row_count:", one.row_count)

        # 4) Fetch every row without binding anything.
        everyone = pq.select(conn, 'SELECT * FROM "users" ORDER BY "id";', use_placeholders=False)
        print("All rows:", everyone.rows)

        # 5) Update and delete report affected counts.
        updated = pq.update(
            conn, 'UPDATE "users" SET "score" = :score WHERE "name" = :name;', {"score": 8.0, "name": "Bob"}
        )
        deleted = pq.delete(conn, 'DELETE FROM "users" WHERE "id" = :id;', {"id": 999})
        conn.commit()
        print("Updated:", updated.to_dict())
        print("Deleted (no match is not an error):", deleted.to_dict())
    finally:
        conn.close()


if __name__ == "__main__":
    main()
