# events_api/repository.py
"""
Generic persistence gateway over a SQLAlchemy session factory.

Each operation opens its own short-lived session, so one Repository instance
can be shared by every request without carrying state between them. Returned
entities are detached but keep their loaded attributes.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, Optional, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from .db import Base

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Base)


class Repository(Generic[T]):
    def __init__(self, entity: type[T], session_factory: sessionmaker):
        self.entity = entity
        self.session_factory = session_factory

    def find(self, *where: Any, order_by: Any = None, limit: Optional[int] = None) -> list[T]:
        """Return every row matching the ``where`` clauses (all rows if none)."""
        q = select(self.entity)
        if where:
            q = q.where(*where)
        if order_by is not None:
            q = q.order_by(order_by)
        if limit is not None:
            q = q.limit(limit)
        with self.session_factory() as db:
            rows = list(db.execute(q).scalars().all())
        logger.debug("find", extra={"entity": self.entity.__name__, "count": len(rows)})
        return rows

    def find_by(self, **criteria: Any) -> list[T]:
        q = select(self.entity).filter_by(**criteria)
        with self.session_factory() as db:
            return list(db.execute(q).scalars().all())

    def find_one_by(self, **criteria: Any) -> Optional[T]:
        q = select(self.entity).filter_by(**criteria).limit(1)
        with self.session_factory() as db:
            return db.execute(q).scalars().first()

    def save(self, entity: T) -> T:
        """Insert a new row or update the existing one; returns the persisted instance."""
        with self.session_factory() as db:
            persisted = db.merge(entity)
            db.commit()
        logger.debug("save", extra={"entity": self.entity.__name__, "id": getattr(persisted, "id", None)})
        return persisted

    def remove(self, entity: T) -> T:
        with self.session_factory() as db:
            db.delete(db.merge(entity))
            db.commit()
        logger.debug("remove", extra={"entity": self.entity.__name__, "id": getattr(entity, "id", None)})
        return entity
