# events_api/schemas.py
from __future__ import annotations
from typing import Annotated, Optional
from datetime import datetime, timezone

from dateutil.parser import isoparse
from pydantic import BaseModel, ConfigDict, field_validator

from .validation import IsDateString, IsString, Length

# Field rules shared by the create and update payloads.
NAME_LENGTH = Length(5, 255, message="name must have a length between [5,25]")
DESCRIPTION_IS_STRING = IsString()
DESCRIPTION_LENGTH = Length(5, 255)
WHEN_IS_DATE = IsDateString()
ADDRESS_CREATE_LENGTH = Length(5, 255, groups=["create"])
ADDRESS_UPDATE_LENGTH = Length(10, 20, groups=["update"])


def parse_iso_z(value):
    """Parse an ISO string to an aware UTC datetime; naive input is taken as UTC."""
    dt = isoparse(value) if isinstance(value, str) else value
    if not isinstance(dt, datetime):
        return dt
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


class CreateEventDto(BaseModel):
    """Payload for POST /events, checked with the "create" group."""
    name:        Annotated[str, NAME_LENGTH]
    description: Annotated[str, DESCRIPTION_IS_STRING, DESCRIPTION_LENGTH]
    when:        Annotated[datetime, WHEN_IS_DATE]  # ISO string in, datetime out
    address:     Annotated[str, ADDRESS_CREATE_LENGTH, ADDRESS_UPDATE_LENGTH]

    @field_validator("when", mode="before")
    @classmethod
    def parse_when(cls, value):
        return parse_iso_z(value)


class UpdateEventDto(BaseModel):
    """Partial payload for PATCH /events/{id}; only supplied fields are checked."""
    name:        Annotated[Optional[str], NAME_LENGTH] = None
    description: Annotated[Optional[str], DESCRIPTION_IS_STRING, DESCRIPTION_LENGTH] = None
    when:        Annotated[Optional[datetime], WHEN_IS_DATE] = None
    address:     Annotated[Optional[str], ADDRESS_CREATE_LENGTH, ADDRESS_UPDATE_LENGTH] = None

    @field_validator("when", mode="before")
    @classmethod
    def parse_when(cls, value):
        return parse_iso_z(value)


class EventOut(BaseModel):
    """Response schema for an event row."""
    id: int
    name: str
    description: str
    when: datetime
    address: str
    model_config = ConfigDict(from_attributes=True)  # allow from ORM

    # SQLite hands back naive values; everything is stored as UTC
    @field_validator("when")
    @classmethod
    def as_utc(cls, value: datetime) -> datetime:
        return parse_iso_z(value)


class EventSummary(BaseModel):
    """Id and name only, as returned by the practice query."""
    id: int
    name: str
    model_config = ConfigDict(from_attributes=True)
