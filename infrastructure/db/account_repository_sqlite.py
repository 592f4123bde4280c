from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from typing import Iterator, Optional

from domain.models import Account
from domain.repositories import AccountRepository

logger = logging.getLogger(__name__)

_SELECT_ACCOUNT = """
    SELECT id, name, email, password_hash,
           CAST(strftime('%s', created_at) AS INTEGER),
           CAST(strftime('%s', updated_at) AS INTEGER)
    FROM users
"""


class SqliteAccountRepository(AccountRepository):
    """
    SQLite-backed implementation of `AccountRepository`.

    Manages the `users` table, which stores display names, emails and
    password digests. It is self-initialising: the table and the email
    index are created if needed. The parent directory of `db_path` must
    already exist.
    """

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._ensure_table()

    @contextmanager
    def _get_connection(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self._db_path)
        try:
            conn.execute("PRAGMA foreign_keys = ON")
            with conn:
                yield conn
        finally:
            conn.close()

    def _ensure_table(self) -> None:
        with self._get_connection() as conn:
            cur = conn.cursor()
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    email TEXT UNIQUE NOT NULL,
                    password_hash TEXT NOT NULL,
                    created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                    updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
                )
                """
            )
            cur.execute("CREATE INDEX IF NOT EXISTS idx_users_email ON users(email)")
            conn.commit()
        logger.info("Database tables created/verified at %s", self._db_path)

    @staticmethod
    def _to_domain(row: tuple) -> Account:
        return Account(
            id=int(row[0]),
            name=row[1],
            email=row[2],
            password_hash=row[3],
            created_at=int(row[4] or 0),
            updated_at=int(row[5] or 0),
        )

    def _fetch_one(self, where: str, params: tuple) -> Optional[Account]:
        try:
            with self._get_connection() as conn:
                cur = conn.cursor()
                cur.execute(f"{_SELECT_ACCOUNT} WHERE {where}", params)
                row = cur.fetchone()
        except sqlite3.Error:
            logger.exception("Account lookup failed (%s)", where)
            return None
        if not row:
            return None
        return self._to_domain(row)

    def create(self, name: str, email: str, password_hash: str) -> bool:
        try:
            with self._get_connection() as conn:
                cur = conn.cursor()
                cur.execute(
                    """
                    INSERT INTO users (name, email, password_hash, created_at, updated_at)
                    VALUES (?, ?, ?, CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
                    """,
                    (name, email, password_hash),
                )
                conn.commit()
        except sqlite3.IntegrityError as exc:
            logger.warning("Insert rejected for %s: %s", email, exc)
            return False
        except sqlite3.Error:
            logger.exception("Failed to insert account for %s", email)
            return False
        return True

    def find_by_email(self, email: str) -> Optional[Account]:
        return self._fetch_one("email = ?", (email,))

    def find_by_id(self, account_id: int) -> Optional[Account]:
        return self._fetch_one("id = ?", (account_id,))

    def exists(self, email: str) -> bool:
        return self.find_by_email(email) is not None
