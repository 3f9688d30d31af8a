"""Persistence gateway against an in-memory SQLite database."""

from datetime import datetime

from events_api.models import Event


def _event(**overrides) -> Event:
    fields = dict(
        name="Board games",
        description="Monthly board game night",
        when=datetime(2022, 5, 1, 19, 0),
        address="12 Market Square",
    )
    fields.update(overrides)
    return Event(**fields)


def test_save_assigns_an_id(repository):
    saved = repository.save(_event())
    assert saved.id is not None
    assert saved.name == "Board games"


def test_find_returns_every_row(repository):
    repository.save(_event(name="First event"))
    repository.save(_event(name="Second event"))
    assert sorted(e.name for e in repository.find()) == ["First event", "Second event"]


def test_find_with_clauses_order_and_limit(repository):
    for i in range(5):
        repository.save(_event(name=f"Event number {i}"))
    rows = repository.find(Event.id > 1, order_by=Event.id.desc(), limit=2)
    assert [e.id for e in rows] == [5, 4]


def test_find_by_and_find_one_by(repository):
    a = repository.save(_event(address="1 North Road"))
    repository.save(_event(address="2 South Road"))
    assert [e.id for e in repository.find_by(address="1 North Road")] == [a.id]
    assert repository.find_one_by(id=a.id).address == "1 North Road"
    assert repository.find_one_by(id=999) is None


def test_save_updates_existing_row(repository):
    event = repository.save(_event())
    event.name = "Renamed event"
    repository.save(event)
    reloaded = repository.find_one_by(id=event.id)
    assert reloaded.name == "Renamed event"
    assert reloaded.description == "Monthly board game night"
    assert len(repository.find()) == 1


def test_remove_deletes_row(repository):
    event = repository.save(_event())
    removed = repository.remove(event)
    assert removed.name == event.name
    assert repository.find_one_by(id=event.id) is None
    assert repository.find() == []
