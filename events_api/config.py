# events_api/config.py
"""Runtime settings read from the environment (and .env, see __init__)."""

from __future__ import annotations

from os import getenv
from pathlib import Path


def _normalize_db_url(url: str) -> str:
    """Normalize common Postgres URLs to the psycopg2 driver form."""
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg2://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg2://", 1)
    return url


def _clean(s: str | None) -> str | None:
    return s.strip().rstrip("/") if s and s.strip() else None


RAW_URL = getenv("DATABASE_URL")
if RAW_URL:
    DB_URL = _normalize_db_url(RAW_URL)
else:
    DB_URL = f"sqlite:///{(Path(__file__).resolve().parents[1] / 'events.db')}"

LOG_LEVEL = getenv("LOG_LEVEL", "INFO").upper()
AUTO_MIGRATE = getenv("AUTO_MIGRATE") == "1"

FRONTEND_ORIGIN = _clean(getenv("FRONTEND_ORIGIN")) or "http://localhost:5173"
_raw_extra = getenv("EXTRA_CORS_ORIGINS", "")
EXTRA = [x for x in (_clean(p) for p in _raw_extra.split(",")) if x]
ALLOW_ORIGINS = ["*"] if "*" in EXTRA else sorted(o for o in {FRONTEND_ORIGIN, *EXTRA} if o)
