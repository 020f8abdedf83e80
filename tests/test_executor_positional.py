from __future__ import annotations

import sqlite3
import unittest

import prepared_query as pq
from prepared_query.core.errors import DriverError, InvalidArgument
from prepared_query.ports.db_api.dialects import MySQLDialect, SQLiteDialect


class Error(Exception):
    """Stands in for a driver module's DB-API `Error` base class."""


class _FakeCursor:
    def __init__(self, conn: "_FakeMySQLConn"):
        self._conn = conn
        self.description = None
        self.rowcount = -1
        self.lastrowid = 0
        self._rows: list = []
        self.closed = False

    def execute(self, sql, params=None):  # noqa: ANN001,ANN201
        self._conn.executed.append((sql, params))
        if self._conn.fail_with is not None:
            raise self._conn.fail_with
        result = self._conn.results.pop(0) if self._conn.results else {}
        self.description = result.get("description")
        self._rows = result.get("rows", [])
        self.rowcount = result.get("rowcount", len(self._rows))
        self.lastrowid = result.get("lastrowid", 0)
        return self.rowcount

    def fetchall(self):  # noqa: ANN201
        return tuple(self._rows)

    def close(self) -> None:
        self.closed = True


class _FakeMySQLConn:
    """Scripted DB-API connection with MySQL-style `%s` markers."""

    def __init__(self, results=None, fail_with=None):  # noqa: ANN001
        self.results = list(results or [])
        self.fail_with = fail_with
        self.executed: list = []
        self.cursors: list[_FakeCursor] = []

    def cursor(self) -> _FakeCursor:
        cur = _FakeCursor(self)
        self.cursors.append(cur)
        return cur


class FakeMySQLExecutorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.dialect = MySQLDialect()

    def test_select_maps_tuple_rows_with_description(self) -> None:
        conn = _FakeMySQLConn(
            results=[{"description": [("id",), ("name",)], "rows": [(1, "Ann"), (2, "Bob")]}]
        )

        res = pq.select(conn, "SELECT id, name FROM users WHERE id > %s", [0], dialect=self.dialect)

        self.assertEqual(res.rows, [{"id": 1, "name": "Ann"}, {"id": 2, "name": "Bob"}])
        self.assertEqual(res.row_count, 2)
        self.assertEqual(conn.executed, [("SELECT id, name FROM users WHERE id > %s", [0])])

    def test_floats_bind_as_doubles_and_bools_as_ints(self) -> None:
        conn = _FakeMySQLConn(results=[{"rowcount": 1}])
        pq.update(conn, "UPDATE t SET score = %s, active = %s WHERE id = %s", (2.5, True, 9), dialect=self.dialect)
        self.assertEqual(conn.executed[0][1], [2.5, 1, 9])

    def test_insert_reports_lastrowid(self) -> None:
        conn = _FakeMySQLConn(results=[{"rowcount": 1, "lastrowid": 41}])
        res = pq.insert(conn, "INSERT INTO t (a) VALUES (%s)", ["x"], dialect=self.dialect)
        self.assertEqual(
            res.to_dict(),
            {"succeeded": True, "affected_count": 1, "last_insert_id": 41, "error": None},
        )

    def test_insert_without_auto_increment_reports_none(self) -> None:
        conn = _FakeMySQLConn(results=[{"rowcount": 1, "lastrowid": 0}])
        res = pq.insert(conn, "INSERT INTO t (a) VALUES (%s)", ["x"], dialect=self.dialect)
        self.assertTrue(res.succeeded)
        self.assertIsNone(res.last_insert_id)

    def test_unknown_rowcount_is_zero(self) -> None:
        conn = _FakeMySQLConn(results=[{"rowcount": -1}])
        res = pq.delete(conn, "DELETE FROM t WHERE a = %s", [1], dialect=self.dialect)
        self.assertEqual(res.affected_count, 0)
        self.assertFalse(res.succeeded)
        self.assertIsNone(res.error)

    def test_driver_error_from_module_error_class(self) -> None:
        conn = _FakeMySQLConn(fail_with=Error("(1062, \"Duplicate entry 'x'\")"))
        res = pq.insert(conn, "INSERT INTO t (a) VALUES (%s)", ["x"], dialect=self.dialect)
        self.assertIsInstance(res.error, DriverError)
        self.assertIn("Duplicate entry", res.error.message)
        self.assertTrue(all(c.closed for c in conn.cursors))

    def test_non_driver_exceptions_propagate(self) -> None:
        conn = _FakeMySQLConn(fail_with=KeyboardInterrupt())
        with self.assertRaises(KeyboardInterrupt):
            pq.delete(conn, "DELETE FROM t WHERE a = %s", [1], dialect=self.dialect)
        self.assertTrue(conn.cursors[0].closed)

    def test_arity_mismatch_is_invalid(self) -> None:
        conn = _FakeMySQLConn()
        res = pq.update(conn, "UPDATE t SET a = %s WHERE id = %s", [1], dialect=self.dialect)
        self.assertIsInstance(res.error, InvalidArgument)
        self.assertEqual(conn.executed, [])

    def test_mapping_params_rejected_for_positional_dialect(self) -> None:
        conn = _FakeMySQLConn()
        res = pq.select(conn, "SELECT * FROM t WHERE id = %s", {"id": 1}, dialect=self.dialect)
        self.assertIsInstance(res.error, InvalidArgument)
        self.assertEqual(conn.executed, [])

    def test_unescaped_percent_is_invalid_before_execution(self) -> None:
        conn = _FakeMySQLConn()
        res = pq.select(conn, "SELECT * FROM t WHERE a LIKE 'x%' AND id = %s", [1], dialect=self.dialect)
        self.assertIsInstance(res.error, InvalidArgument)
        self.assertIn("write '%%'", res.error.message)
        self.assertEqual(conn.executed, [])

    def test_escaped_percent_reaches_driver(self) -> None:
        conn = _FakeMySQLConn(results=[{"description": [("id",)], "rows": [(1,)]}])
        res = pq.select(conn, "SELECT id FROM t WHERE a LIKE 'x%%' AND id = %s", [1], dialect=self.dialect)
        self.assertIsNone(res.error)
        self.assertEqual(conn.executed, [("SELECT id FROM t WHERE a LIKE 'x%%' AND id = %s", [1])])

    def test_driver_encoding_value_error_is_returned(self) -> None:
        conn = _FakeMySQLConn(fail_with=ValueError("unsupported format character"))
        res = pq.update(conn, "UPDATE t SET a = %s", [1], dialect=self.dialect)
        self.assertIsInstance(res.error, DriverError)
        self.assertTrue(conn.cursors[0].closed)

    def test_literal_percent_without_placeholders(self) -> None:
        conn = _FakeMySQLConn(results=[{"description": [("n",)], "rows": [(1,)]}])
        res = pq.select(conn, "SELECT 1 AS n FROM t WHERE a LIKE 'x%'", use_placeholders=False, dialect=self.dialect)
        self.assertEqual(res.rows, [{"n": 1}])
        self.assertEqual(conn.executed, [("SELECT 1 AS n FROM t WHERE a LIKE 'x%'", None)])


class SQLiteQmarkExecutorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.conn = sqlite3.connect(":memory:")
        self.conn.execute('CREATE TABLE "messages" ("id" INTEGER PRIMARY KEY, "source" INTEGER, "body" TEXT);')
        self.dialect = SQLiteDialect(paramstyle="qmark")

    def tearDown(self) -> None:
        self.conn.close()

    def test_positional_crud_against_sqlite(self) -> None:
        sql = 'INSERT INTO "messages" ("source", "body") VALUES (?, ?);'
        first = pq.insert(self.conn, sql, [3, "a"], dialect=self.dialect)
        second = pq.insert(self.conn, sql, (3, "b"), dialect=self.dialect)
        self.assertEqual((first.last_insert_id, second.last_insert_id), (1, 2))

        rows = pq.select(self.conn, 'SELECT "body" FROM "messages" WHERE "source" = ? ORDER BY "id";', [3], dialect=self.dialect)
        self.assertEqual(rows.rows, [{"body": "a"}, {"body": "b"}])

        upd = pq.update(self.conn, 'UPDATE "messages" SET "body" = ? WHERE "id" = ?;', ["c", 1], dialect=self.dialect)
        self.assertEqual(upd.affected_count, 1)

        dele = pq.delete(self.conn, 'DELETE FROM "messages" WHERE "source" = ?;', [3], dialect=self.dialect)
        self.assertEqual((dele.succeeded, dele.affected_count, dele.error), (True, 2, None))

    def test_question_mark_inside_literal_is_not_a_placeholder(self) -> None:
        res = pq.insert(
            self.conn,
            'INSERT INTO "messages" ("source", "body") VALUES (?, \'why?\');',
            [1],
            dialect=self.dialect,
        )
        self.assertTrue(res.succeeded)


if __name__ == "__main__":
    unittest.main()
