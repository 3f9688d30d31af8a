# events_api/db.py
"""Database engine, session factory and base model setup."""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from .config import DB_URL

is_sqlite = DB_URL.startswith("sqlite")

engine = create_engine(
    DB_URL,
    echo=False,
    future=True,
    pool_pre_ping=True,
    connect_args=({} if not is_sqlite else {"check_same_thread": False}),
)


def build_session_factory(bind: Engine) -> sessionmaker:
    """
    Sessions hand back detached rows that keep their loaded attributes,
    so repository results stay readable after the session closes.
    """
    return sessionmaker(
        bind=bind,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        future=True,
    )


SessionLocal = build_session_factory(engine)


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""
    pass
