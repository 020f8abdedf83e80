from __future__ import annotations

import importlib
import os
import unittest
from typing import Any

import prepared_query as pq
from prepared_query.core.errors import DriverError


def _load_mysql_driver() -> tuple[str, Any] | tuple[None, None]:
    for module_name in ("pymysql", "MySQLdb", "mysql.connector"):
        try:
            module = importlib.import_module(module_name)
        except ImportError:
            continue
        connect = getattr(module, "connect", None)
        if connect is not None:
            return module_name, connect
    return None, None


MYSQL_DRIVER, MYSQL_CONNECT = _load_mysql_driver()
HAS_MYSQL_DRIVER = MYSQL_CONNECT is not None


def _mysql_connect(*, host: str, port: int, user: str, password: str, database: str) -> Any:
    if MYSQL_DRIVER == "MySQLdb":
        return MYSQL_CONNECT(  # type: ignore[misc]
            host=host, port=port, user=user, passwd=password, db=database, charset="utf8mb4"
        )
    return MYSQL_CONNECT(  # type: ignore[misc]
        host=host, port=port, user=user, password=password, database=database
    )


@unittest.skipUnless(HAS_MYSQL_DRIVER, "mysql driver is not installed")
class MySQLExecutorTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        host = os.getenv("PREPARED_QUERY_MYSQL_HOST", os.getenv("MYSQL_HOST", "localhost"))
        port = int(os.getenv("PREPARED_QUERY_MYSQL_PORT", os.getenv("MYSQL_PORT", "3306")))
        user = os.getenv("PREPARED_QUERY_MYSQL_USER", os.getenv("MYSQL_USER", "root"))
        password = os.getenv(
            "PREPARED_QUERY_MYSQL_PASSWORD",
            os.getenv("MYSQL_ROOT_PASSWORD", os.getenv("MYSQL_PASSWORD", "password")),
        )
        database = os.getenv("PREPARED_QUERY_MYSQL_DATABASE", "prepared_query_test")

        try:
            bootstrap = _mysql_connect(
                host=host, port=port, user=user, password=password, database="mysql"
            )
            cur = bootstrap.cursor()
            cur.execute(f"CREATE DATABASE IF NOT EXISTS `{database}`;")
            bootstrap.commit()
            cur.close()
            bootstrap.close()

            cls.conn = _mysql_connect(
                host=host, port=port, user=user, password=password, database=database
            )
        except Exception as exc:
            raise unittest.SkipTest(
                f"MySQL is not reachable at {host}:{port} with configured credentials: {exc}"
            ) from exc

    @classmethod
    def tearDownClass(cls) -> None:
        conn = getattr(cls, "conn", None)
        if conn is not None:
            conn.close()

    def setUp(self) -> None:
        cur = self.conn.cursor()
        cur.execute("DROP TABLE IF EXISTS `messages`;")
        cur.execute(
            "CREATE TABLE `messages` (`id` INT AUTO_INCREMENT PRIMARY KEY, "
            "`source` INT, `body` VARCHAR(64) UNIQUE, `score` DOUBLE, `flag` BOOLEAN);"
        )
        cur.close()
        self.conn.commit()

    def test_dialect_is_inferred(self) -> None:
        self.assertIsInstance(pq.dialect_for_connection(self.conn), pq.MySQLDialect)

    def test_insert_select_update_delete(self) -> None:
        sql = "INSERT INTO `messages` (`source`, `body`, `score`, `flag`) VALUES (%s, %s, %s, %s);"
        first = pq.insert(self.conn, sql, [3, "a", 1.25, True])
        second = pq.insert(self.conn, sql, [3, "b", None, False])
        self.assertTrue(first.succeeded)
        self.assertEqual(first.affected_count, 1)
        self.assertEqual(second.last_insert_id, first.last_insert_id + 1)

        one = pq.select(
            self.conn, "SELECT `body`, `score`, `flag` FROM `messages` WHERE `id` = %s;",
            [first.last_insert_id], fetch_all=False,
        )
        self.assertEqual(one.rows["body"], "a")
        self.assertAlmostEqual(one.rows["score"], 1.25)
        self.assertEqual(one.rows["flag"], True)

        upd = pq.update(self.conn, "UPDATE `messages` SET `body` = %s WHERE `id` = %s;", ["zz", 10**6])
        self.assertEqual((upd.succeeded, upd.affected_count, upd.error), (False, 0, None))

        dele = pq.delete(self.conn, "DELETE FROM `messages` WHERE `source` = %s;", [3])
        self.assertEqual((dele.succeeded, dele.affected_count, dele.error), (True, 2, None))
        self.conn.commit()

    def test_duplicate_key_is_driver_error(self) -> None:
        sql = "INSERT INTO `messages` (`body`) VALUES (%s);"
        pq.insert(self.conn, sql, ["dup"])
        res = pq.insert(self.conn, sql, ["dup"])
        self.assertIsInstance(res.error, DriverError)
        self.assertIn("Duplicate", res.error.message)
        self.conn.rollback()


if __name__ == "__main__":
    unittest.main()
