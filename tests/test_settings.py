import unittest
from unittest.mock import patch

from infrastructure.db.account_repository_sqlite import SqliteAccountRepository
from infrastructure.db.bootstrap import build_account_repository
from settings import Settings, load_settings


class LoadSettingsTests(unittest.TestCase):
    def test_defaults(self):
        settings = load_settings({})
        self.assertEqual(settings, Settings())
        self.assertEqual(settings.db_path, "data/lincoln.db")
        self.assertEqual(settings.port, 8080)
        self.assertEqual(settings.cors_origins, ["*"])

    def test_overrides(self):
        settings = load_settings(
            {
                "DB_BACKEND": "Postgres",
                "DATABASE_URL": "postgresql://localhost/lincoln",
                "PORT": "9000",
                "CORS_ORIGINS": "http://a.test, http://b.test,",
                "LOG_LEVEL": "debug",
            }
        )
        self.assertEqual(settings.db_backend, "postgres")
        self.assertEqual(settings.port, 9000)
        self.assertEqual(settings.cors_origins, ["http://a.test", "http://b.test"])
        self.assertEqual(settings.log_level, "DEBUG")

    def test_rejects_unknown_backend(self):
        with self.assertRaises(RuntimeError):
            load_settings({"DB_BACKEND": "mysql"})

    def test_postgres_requires_url(self):
        with self.assertRaises(RuntimeError):
            load_settings({"DB_BACKEND": "postgres"})

    def test_rejects_bad_port(self):
        with self.assertRaises(RuntimeError):
            load_settings({"PORT": "http"})


class BuildAccountRepositoryTests(unittest.TestCase):
    def test_sqlite_backend(self):
        with patch("infrastructure.db.bootstrap.ensure_database_directory") as ensure, patch(
            "infrastructure.db.account_repository_sqlite.SqliteAccountRepository._ensure_table"
        ):
            repo = build_account_repository(Settings(db_path="var/x/lincoln.db"))
        ensure.assert_called_once_with("var/x/lincoln.db")
        self.assertIsInstance(repo, SqliteAccountRepository)

    def test_postgres_backend(self):
        with patch(
            "infrastructure.db.account_repository_postgres.PostgresAccountRepository._ensure_table"
        ):
            repo = build_account_repository(
                Settings(db_backend="postgres", database_url="postgresql://localhost/lincoln")
            )
        self.assertEqual(type(repo).__name__, "PostgresAccountRepository")


if __name__ == "__main__":
    unittest.main()
