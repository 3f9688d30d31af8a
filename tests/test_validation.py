"""Rule, group and message behaviour of the declarative validators."""

from datetime import datetime, timezone

import pytest

from events_api.schemas import CreateEventDto, UpdateEventDto
from events_api.validation import (
    IsDateString,
    IsString,
    Length,
    PayloadValidationError,
    ValidationPipe,
    rules_for,
    validate,
)


# ---------------------------------------------------------------------------
# Individual rules
# ---------------------------------------------------------------------------

class TestLength:
    def test_bounds_are_inclusive(self):
        rule = Length(5, 10)
        assert rule.is_valid("abcde")
        assert rule.is_valid("abcdefghij")
        assert not rule.is_valid("abcd")
        assert not rule.is_valid("abcdefghijk")

    def test_non_string_is_invalid(self):
        assert not Length(1, 3).is_valid(12)
        assert not Length(1, 3).is_valid(None)

    @pytest.mark.parametrize("value, expected", [
        ("ab", "f must be longer than or equal to 5 characters"),
        (None, "f must be longer than or equal to 5 characters"),
        ("x" * 11, "f must be shorter than or equal to 10 characters"),
        (123456, "f must be longer than or equal to 5 and shorter than or equal to 10 characters"),
    ])
    def test_default_messages(self, value, expected):
        assert Length(5, 10).format("f", value) == expected

    def test_custom_message_wins(self):
        assert Length(5, 10, message="too bad").format("f", "ab") == "too bad"


def test_is_string():
    assert IsString().is_valid("")
    assert not IsString().is_valid(5)
    assert IsString().format("description", 5) == "description must be a string"


@pytest.mark.parametrize("value", ["2022-02-02", "2022-02-02T10:00:00", "2022-02-02T10:00:00Z"])
def test_is_date_string_accepts_iso(value):
    assert IsDateString().is_valid(value)


@pytest.mark.parametrize("value", ["not a date", "2022-13-45", 20220202, None])
def test_is_date_string_rejects(value):
    assert not IsDateString().is_valid(value)


def test_ungrouped_rule_applies_everywhere():
    rule = Length(1, 2)
    assert rule.applies_to(())
    assert rule.applies_to(["create"])


def test_grouped_rule_applies_only_to_its_groups():
    rule = Length(1, 2, groups=["update"])
    assert rule.applies_to(["update"])
    assert not rule.applies_to(["create"])
    assert not rule.applies_to(())


# ---------------------------------------------------------------------------
# DTO-level validation
# ---------------------------------------------------------------------------

def test_rules_are_read_from_annotations():
    rules = rules_for(CreateEventDto)
    assert set(rules) == {"name", "description", "when", "address"}
    assert [type(r) for r in rules["description"]] == [IsString, Length]
    assert len(rules["address"]) == 2


def test_valid_create_payload_has_no_messages(valid_payload):
    assert validate(valid_payload, CreateEventDto, ["create"]) == []


def test_short_name_and_description_create_payload():
    payload = {"name": "a", "description": "hi", "when": "2022-02-02", "address": "22 av"}
    assert validate(payload, CreateEventDto, ["create"]) == [
        "name must have a length between [5,25]",
        "description must be longer than or equal to 5 characters",
    ]


def test_missing_fields_each_report_every_rule():
    assert validate({}, CreateEventDto, ["create"]) == [
        "name must have a length between [5,25]",
        "description must be a string",
        "description must be longer than or equal to 5 characters",
        "when must be a valid ISO 8601 date string",
        "address must be longer than or equal to 5 characters",
    ]


def test_address_bounds_depend_on_group(valid_payload):
    payload = dict(valid_payload, address="1 Long Avenue Of The Americas")  # 29 chars
    assert validate(payload, CreateEventDto, ["create"]) == []
    assert validate(payload, UpdateEventDto, ["update"], skip_missing=True) == [
        "address must be shorter than or equal to 20 characters",
    ]


def test_update_checks_only_supplied_fields():
    assert validate({"name": "NewName"}, UpdateEventDto, ["update"], skip_missing=True) == []
    assert validate({"name": None}, UpdateEventDto, ["update"], skip_missing=True) == []
    assert validate({"name": "abc"}, UpdateEventDto, ["update"], skip_missing=True) == [
        "name must have a length between [5,25]",
    ]


# ---------------------------------------------------------------------------
# ValidationPipe
# ---------------------------------------------------------------------------

def test_pipe_returns_coerced_dto(valid_payload):
    dto = ValidationPipe(CreateEventDto, groups=["create"])(valid_payload)
    assert isinstance(dto, CreateEventDto)
    assert dto.when == datetime(2022, 3, 15, 18, 30, tzinfo=timezone.utc)
    assert dto.name == valid_payload["name"]


def test_pipe_ignores_unknown_fields(valid_payload):
    dto = ValidationPipe(CreateEventDto, groups=["create"])(dict(valid_payload, id=99, extra="x"))
    assert "id" not in dto.model_dump()


def test_pipe_raises_with_all_messages():
    with pytest.raises(PayloadValidationError) as info:
        ValidationPipe(CreateEventDto, groups=["create"])({"name": "a"})
    assert "name must have a length between [5,25]" in info.value.messages
    assert len(info.value.messages) == 5


def test_pipe_rejects_non_object_body():
    with pytest.raises(PayloadValidationError) as info:
        ValidationPipe(CreateEventDto, groups=["create"])(["not", "an", "object"])
    assert info.value.messages == ["payload must be a JSON object"]


def test_pipe_normalizes_offsets_to_utc(valid_payload):
    dto = ValidationPipe(CreateEventDto, groups=["create"])(
        dict(valid_payload, when="2022-02-02T10:00:00+02:00")
    )
    assert dto.when == datetime(2022, 2, 2, 8, 0, tzinfo=timezone.utc)
    assert dto.when.utcoffset().total_seconds() == 0
