import unittest
from unittest.mock import MagicMock, patch

import psycopg2

from infrastructure.db.account_repository_postgres import PostgresAccountRepository


def _fake_connection(cursor: MagicMock) -> MagicMock:
    conn = MagicMock()
    conn.__enter__.return_value = conn
    conn.cursor.return_value.__enter__.return_value = cursor
    return conn


class PostgresAccountRepositoryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.cursor = MagicMock()
        self.conn = _fake_connection(self.cursor)
        patcher = patch(
            "infrastructure.db.account_repository_postgres.psycopg2.connect",
            return_value=self.conn,
        )
        self.connect = patcher.start()
        self.addCleanup(patcher.stop)
        self.repo = PostgresAccountRepository({"dsn": "postgresql://example/lincoln"})

    def test_creates_table_on_init(self):
        self.connect.assert_called_with(dsn="postgresql://example/lincoln")
        statements = " ".join(call.args[0] for call in self.cursor.execute.call_args_list)
        self.assertIn("CREATE TABLE IF NOT EXISTS users", statements)
        self.assertIn("email TEXT UNIQUE NOT NULL", statements)
        self.assertIn("idx_users_email", statements)

    def test_timestamp_columns_are_time_zone_aware(self):
        ddl = self.cursor.execute.call_args_list[0].args[0]
        self.assertIn("created_at TIMESTAMPTZ DEFAULT CURRENT_TIMESTAMP", ddl)
        self.assertIn("updated_at TIMESTAMPTZ DEFAULT CURRENT_TIMESTAMP", ddl)

    def test_connection_closed_after_each_operation(self):
        self.conn.close.reset_mock()
        self.cursor.fetchone.return_value = None
        self.repo.find_by_email("alice@example.com")
        self.assertTrue(self.repo.create("Alice", "alice@example.com", "aa:bb"))
        self.assertEqual(self.conn.close.call_count, 2)

    def test_connection_closed_when_statement_fails(self):
        self.conn.close.reset_mock()
        self.cursor.execute.side_effect = psycopg2.OperationalError("connection lost")
        with self.assertLogs("infrastructure.db.account_repository_postgres", level="ERROR"):
            self.assertFalse(self.repo.create("Alice", "alice@example.com", "aa:bb"))
        self.conn.close.assert_called_once()

    def test_find_by_email_maps_row(self):
        self.cursor.fetchone.return_value = (7, "Alice", "alice@example.com", "aa:bb", 1700000000, 1700000001)

        account = self.repo.find_by_email("alice@example.com")

        self.assertEqual(account.id, 7)
        self.assertEqual(account.name, "Alice")
        self.assertEqual(account.password_hash, "aa:bb")
        self.assertEqual(account.created_at, 1700000000)
        self.assertEqual(account.updated_at, 1700000001)
        sql, params = self.cursor.execute.call_args.args
        self.assertIn("email = %s", sql)
        self.assertEqual(params, ("alice@example.com",))

    def test_find_by_id_not_found(self):
        self.cursor.fetchone.return_value = None
        self.assertIsNone(self.repo.find_by_id(3))
        sql, params = self.cursor.execute.call_args.args
        self.assertIn("id = %s", sql)
        self.assertEqual(params, (3,))

    def test_exists(self):
        self.cursor.fetchone.return_value = None
        self.assertFalse(self.repo.exists("missing@example.com"))

    def test_create_inserts_parameterized_row(self):
        self.assertTrue(self.repo.create("Alice", "alice@example.com", "aa:bb"))
        sql, params = self.cursor.execute.call_args.args
        self.assertIn("INSERT INTO users", sql)
        self.assertEqual(params, ("Alice", "alice@example.com", "aa:bb"))

    def test_create_returns_false_on_unique_violation(self):
        self.cursor.execute.side_effect = psycopg2.IntegrityError("duplicate key")
        with self.assertLogs("infrastructure.db.account_repository_postgres", level="WARNING"):
            self.assertFalse(self.repo.create("Alice", "alice@example.com", "aa:bb"))

    def test_read_errors_are_not_found(self):
        self.cursor.execute.side_effect = psycopg2.OperationalError("connection lost")
        with self.assertLogs("infrastructure.db.account_repository_postgres", level="ERROR"):
            self.assertIsNone(self.repo.find_by_email("alice@example.com"))


if __name__ == "__main__":
    unittest.main()
