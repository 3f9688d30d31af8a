from __future__ import annotations
from datetime import datetime

from sqlalchemy import Integer, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from .db import Base

class Event(Base):
    __tablename__ = "events"

    id:          Mapped[int]      = mapped_column(Integer, primary_key=True, index=True)
    name:        Mapped[str]      = mapped_column(String(255), nullable=False)
    description: Mapped[str]      = mapped_column(String(255), nullable=False)
    when:        Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    address:     Mapped[str]      = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"Event(id={self.id!r}, name={self.name!r})"
