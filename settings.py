"""
Process configuration loaded from environment variables (and `.env`).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from dotenv import load_dotenv

DB_BACKENDS = ("sqlite", "postgres")


@dataclass(frozen=True)
class Settings:
    db_backend: str = "sqlite"
    db_path: str = "data/lincoln.db"
    database_url: str = ""
    host: str = "0.0.0.0"
    port: int = 8080
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build `Settings` from `environ` (defaults to `os.environ` after
    loading `.env`).

    Raises `RuntimeError` for values the server cannot start with.
    """

    if environ is None:
        load_dotenv()
        environ = os.environ

    db_backend = environ.get("DB_BACKEND", "sqlite").strip().lower()
    if db_backend not in DB_BACKENDS:
        raise RuntimeError(
            f"DB_BACKEND must be one of {', '.join(DB_BACKENDS)}, got {db_backend!r}."
        )

    database_url = environ.get("DATABASE_URL", "")
    if db_backend == "postgres" and not database_url:
        raise RuntimeError("DATABASE_URL environment variable is not set.")

    raw_port = environ.get("PORT", "8080")
    try:
        port = int(raw_port)
    except ValueError:
        raise RuntimeError(f"PORT must be an integer, got {raw_port!r}.") from None

    origins = [o.strip() for o in environ.get("CORS_ORIGINS", "*").split(",") if o.strip()]

    return Settings(
        db_backend=db_backend,
        db_path=environ.get("DB_PATH", "data/lincoln.db"),
        database_url=database_url,
        host=environ.get("HOST", "0.0.0.0"),
        port=port,
        cors_origins=origins or ["*"],
        log_level=environ.get("LOG_LEVEL", "INFO").upper(),
    )
