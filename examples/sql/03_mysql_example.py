"""MySQL example using `%s` positional placeholders.

Requires a MySQL driver (`pip install pymysql`) and a reachable server.
"""

from __future__ import annotations

import importlib
import os
import sys
from pathlib import Path
from typing import Any

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "prepared_query").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import prepared_query as pq


def _load_driver() -> tuple[str, Any] | tuple[None, None]:
    for module_name in ("pymysql", "MySQLdb", "mysql.connector"):
        try:
            module = importlib.import_module(module_name)
        except ImportError:
            continue
        return module_name, module.connect
    return None, None


def main() -> None:
    driver_name, connect = _load_driver()
    if connect is None:
        print("MySQL example skipped: no MySQL driver installed.")
        print("Install one of: pip install pymysql / mysqlclient / mysql-connector-python")
        return

    conn = connect(
        host=os.getenv("MYSQL_HOST", "localhost"),
        port=int(os.getenv("MYSQL_PORT", "3306")),
        user=os.getenv("MYSQL_USER", "root"),
        password=os.getenv("MYSQL_PASSWORD", "password"),
        database=os.getenv("MYSQL_DATABASE", "prepared_query_demo"),
    )
    print("Connected with", driver_name)
    try:
        cur = conn.cursor()
        cur.execute(
            "CREATE TABLE IF NOT EXISTS `messages` ("
            "`id` INT AUTO_INCREMENT PRIMARY KEY, `source` INT, `body` TEXT);"
        )
        cur.close()

        for body in ("hello", "world"):
            res = pq.insert(conn, "INSERT INTO `messages` (`source`, `body`) VALUES (%s, %s);", [3, body])
            print("Inserted id:", res.last_insert_id)

        rows = pq.select(conn, "SELECT `body` FROM `messages` WHERE `source` = %s;", [3])
        print("Rows:", rows.rows, "count:", rows.row_count)

        deleted = pq.delete(conn, "DELETE FROM `messages` WHERE `source` = %s;", [3])
        print("Deleted:", deleted.to_dict())
        conn.commit()
    finally:
        conn.close()


if __name__ == "__main__":
    main()
