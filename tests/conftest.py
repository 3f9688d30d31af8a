"""
Shared fixtures: an in-memory SQLite database per test, a Repository bound
to it, and a TestClient for an app built on the same session factory.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from events_api.db import Base, build_session_factory
from events_api.main import create_app
from events_api.models import Event
from events_api.repository import Repository


@pytest.fixture()
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    Base.metadata.drop_all(eng)
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture()
def repository(session_factory):
    return Repository(Event, session_factory)


@pytest.fixture()
def client(session_factory):
    return TestClient(create_app(session_factory=session_factory))


@pytest.fixture()
def valid_payload():
    return {
        "name": "Team meetup",
        "description": "Quarterly planning session",
        "when": "2022-03-15T18:30:00",
        "address": "22 Baker Street",
    }
