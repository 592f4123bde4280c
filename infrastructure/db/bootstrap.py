from __future__ import annotations

import logging
from pathlib import Path

from domain.repositories import AccountRepository
from settings import Settings

logger = logging.getLogger(__name__)


def ensure_database_directory(db_path: str) -> None:
    """Create the parent directory of the SQLite file if it is missing."""

    parent = Path(db_path).parent
    if str(parent) in ("", "."):
        return
    parent.mkdir(parents=True, exist_ok=True)
    logger.info("Database directory created/verified: %s", parent)


def build_account_repository(settings: Settings) -> AccountRepository:
    """Open the account store selected by `settings.db_backend`."""

    if settings.db_backend == "postgres":
        from infrastructure.db.account_repository_postgres import PostgresAccountRepository

        logger.info("Opening Postgres account store")
        return PostgresAccountRepository({"dsn": settings.database_url})

    from infrastructure.db.account_repository_sqlite import SqliteAccountRepository

    ensure_database_directory(settings.db_path)
    logger.info("Opening database: %s", settings.db_path)
    return SqliteAccountRepository(settings.db_path)
