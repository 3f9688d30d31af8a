# events_api/controller.py
"""
Events resource: controller plus the route table that exposes it.

    GET    /events            list every event
    GET    /events/practice   example filtered/ordered/limited query
    GET    /events/{id}       one event, or null
    POST   /events            create (validated with the "create" group)
    PATCH  /events/{id}       partial update (validated with the "update" group)
    DELETE /events/{id}       remove, 204
"""

import logging
from datetime import datetime, timezone
from typing import Annotated, Any, NamedTuple, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy import and_, or_

from .models import Event
from .repository import Repository
from .schemas import CreateEventDto, EventOut, EventSummary, UpdateEventDto
from .validation import ValidationPipe

logger = logging.getLogger(__name__)

PRACTICE_SINCE = datetime(2021, 2, 12, 13, 0, 0, tzinfo=timezone.utc)

# Ids must fit a signed 64-bit INTEGER column.
EventId = Annotated[int, Path(ge=-(2**63), le=2**63 - 1)]


class EventsController:
    def __init__(self, repository: Repository[Event]):
        self.repository = repository

    def _get_or_404(self, event_id: int) -> Event:
        event = self.repository.find_one_by(id=event_id)
        if event is None:
            raise HTTPException(status_code=404, detail="Event not found")
        return event

    def find_all(self) -> list[Event]:
        return self.repository.find()

    def practice_queries(self) -> list[Event]:
        return self.repository.find(
            or_(
                and_(Event.id > 3, Event.when > PRACTICE_SINCE),
                Event.description.like("%meet%"),
            ),
            order_by=Event.id.desc(),
            limit=2,
        )

    def find_one(self, event_id: EventId) -> Optional[Event]:
        return self.repository.find_one_by(id=event_id)

    def create(
        self,
        payload: CreateEventDto = Depends(ValidationPipe(CreateEventDto, groups=["create"])),
    ) -> Event:
        event = self.repository.save(Event(**payload.model_dump()))
        logger.info("event created", extra={"event_id": event.id})
        return event

    def update(
        self,
        event_id: EventId,
        payload: UpdateEventDto = Depends(
            ValidationPipe(UpdateEventDto, groups=["update"], skip_missing=True)
        ),
    ) -> Event:
        event = self._get_or_404(event_id)
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in changes.items():
            setattr(event, field, value)
        event = self.repository.save(event)
        logger.info("event updated", extra={"event_id": event.id, "fields": sorted(changes)})
        return event

    def remove(self, event_id: EventId) -> None:
        event = self._get_or_404(event_id)
        self.repository.remove(event)
        logger.info("event removed", extra={"event_id": event_id})


class Route(NamedTuple):
    method: str
    path: str
    handler: str
    status_code: int = status.HTTP_200_OK
    response_model: Any = None


# Order matters: /practice must be matched before /{event_id}.
ROUTES: tuple[Route, ...] = (
    Route("GET",    "",                "find_all",         response_model=list[EventOut]),
    Route("GET",    "/practice",       "practice_queries", response_model=list[EventSummary]),
    Route("GET",    "/{event_id}",     "find_one",         response_model=Optional[EventOut]),
    Route("POST",   "",                "create",           status.HTTP_201_CREATED, EventOut),
    Route("PATCH",  "/{event_id}",     "update",           response_model=EventOut),
    Route("DELETE", "/{event_id}",     "remove",           status.HTTP_204_NO_CONTENT),
)


def build_router(controller: EventsController, prefix: str = "/events") -> APIRouter:
    """Register every entry of ROUTES against the given controller instance."""
    router = APIRouter(prefix=prefix, tags=["events"])
    for route in ROUTES:
        router.add_api_route(
            route.path,
            getattr(controller, route.handler),
            methods=[route.method],
            status_code=route.status_code,
            response_model=route.response_model,
            name=f"events.{route.handler}",
        )
    return router
