from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import psycopg2

from domain.models import Account
from domain.repositories import AccountRepository

logger = logging.getLogger(__name__)

_SELECT_ACCOUNT = """
    SELECT id, name, email, password_hash,
           CAST(EXTRACT(EPOCH FROM created_at) AS BIGINT),
           CAST(EXTRACT(EPOCH FROM updated_at) AS BIGINT)
    FROM users
"""


class PostgresAccountRepository(AccountRepository):
    """
    Postgres-backed implementation of `AccountRepository`.

    Uses the same `users` table layout as the SQLite repository, with a
    `SERIAL` id and `TIMESTAMPTZ` columns that are converted to epoch
    seconds on read, independent of the session time zone.
    """

    def __init__(self, db_params: dict) -> None:
        self._db_params = db_params
        self._ensure_table()

    @contextmanager
    def _get_connection(self) -> Iterator["psycopg2.extensions.connection"]:
        conn = psycopg2.connect(**self._db_params)
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def _ensure_table(self) -> None:
        with self._get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    CREATE TABLE IF NOT EXISTS users (
                        id SERIAL PRIMARY KEY,
                        name TEXT NOT NULL,
                        email TEXT UNIQUE NOT NULL,
                        password_hash TEXT NOT NULL,
                        created_at TIMESTAMPTZ DEFAULT CURRENT_TIMESTAMP,
                        updated_at TIMESTAMPTZ DEFAULT CURRENT_TIMESTAMP
                    )
                    """
                )
                cur.execute("CREATE INDEX IF NOT EXISTS idx_users_email ON users(email)")
                conn.commit()
        logger.info("Postgres users table created/verified")

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
                with conn.cursor() as cur:
                    cur.execute(f"{_SELECT_ACCOUNT} WHERE {where}", params)
                    row = cur.fetchone()
        except psycopg2.Error:
            logger.exception("Account lookup failed (%s)", where)
            return None
        if not row:
            return None
        return self._to_domain(row)

    def create(self, name: str, email: str, password_hash: str) -> bool:
        try:
            with self._get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        INSERT INTO users (name, email, password_hash, created_at, updated_at)
                        VALUES (%s, %s, %s, CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
                        """,
                        (name, email, password_hash),
                    )
                    conn.commit()
        except psycopg2.IntegrityError as exc:
            logger.warning("Insert rejected for %s: %s", email, exc)
            return False
        except psycopg2.Error:
            logger.exception("Failed to insert account for %s", email)
            return False
        return True

    def find_by_email(self, email: str) -> Optional[Account]:
        return self._fetch_one("email = %s", (email,))

    def find_by_id(self, account_id: int) -> Optional[Account]:
        return self._fetch_one("id = %s", (account_id,))

    def exists(self, email: str) -> bool:
        return self.find_by_email(email) is not None
