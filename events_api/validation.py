# events_api/validation.py
"""
Declarative, group-aware payload validation.

Rules are attached to DTO fields as ``typing.Annotated`` metadata::

    class CreateEventDto(BaseModel):
        name: Annotated[str, Length(5, 255)]
        address: Annotated[str, Length(5, 255, groups=["create"]),
                                Length(10, 20, groups=["update"])]

A rule without groups is checked in every context; a grouped rule only when
one of its groups is active. ``validate`` collects one message per violated
rule so the caller can report all of them at once.
"""

import logging
from typing import Any, Iterable, Optional, Sequence

from dateutil.parser import isoparse
from fastapi import Body
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class PayloadValidationError(Exception):
    """Raised when a request payload violates one or more field rules."""

    def __init__(self, messages: Sequence[str]):
        super().__init__("; ".join(messages))
        self.messages = list(messages)


class Rule:
    default_message = "{field} is invalid"

    def __init__(self, message: Optional[str] = None, groups: Optional[Iterable[str]] = None):
        self.message = message
        self.groups = frozenset(groups or ())

    def applies_to(self, groups: Iterable[str]) -> bool:
        if not self.groups:
            return True
        return bool(self.groups.intersection(groups))

    def is_valid(self, value: Any) -> bool:
        raise NotImplementedError

    def describe(self, field: str, value: Any) -> str:
        return self.default_message.format(field=field)

    def format(self, field: str, value: Any) -> str:
        if self.message:
            return self.message
        return self.describe(field, value)


class Length(Rule):
    def __init__(self, min: int, max: int, message: Optional[str] = None,
                 groups: Optional[Iterable[str]] = None):
        super().__init__(message=message, groups=groups)
        self.min = min
        self.max = max

    def is_valid(self, value: Any) -> bool:
        return isinstance(value, str) and self.min <= len(value) <= self.max

    def describe(self, field: str, value: Any) -> str:
        if not value or (isinstance(value, str) and len(value) < self.min):
            return f"{field} must be longer than or equal to {self.min} characters"
        if isinstance(value, str) and len(value) > self.max:
            return f"{field} must be shorter than or equal to {self.max} characters"
        return (
            f"{field} must be longer than or equal to {self.min} "
            f"and shorter than or equal to {self.max} characters"
        )

    def __repr__(self) -> str:
        groups = f", groups={sorted(self.groups)}" if self.groups else ""
        return f"Length({self.min}, {self.max}{groups})"


class IsString(Rule):
    default_message = "{field} must be a string"

    def is_valid(self, value: Any) -> bool:
        return isinstance(value, str)


class IsDateString(Rule):
    default_message = "{field} must be a valid ISO 8601 date string"

    def is_valid(self, value: Any) -> bool:
        if not isinstance(value, str):
            return False
        try:
            isoparse(value)
        except (ValueError, OverflowError):
            return False
        return True


def rules_for(dto: type[BaseModel]) -> dict[str, list[Rule]]:
    """Map each DTO field to the rules declared on it, in declaration order."""
    return {
        name: [m for m in field.metadata if isinstance(m, Rule)]
        for name, field in dto.model_fields.items()
    }


def validate(
    payload: dict[str, Any],
    dto: type[BaseModel],
    groups: Iterable[str] = (),
    skip_missing: bool = False,
) -> list[str]:
    """
    Check ``payload`` against the rules declared on ``dto``.

    With ``skip_missing`` set, fields that are absent or null are not checked
    (partial updates). Returns the violation messages; empty means valid.
    """
    groups = tuple(groups)
    messages: list[str] = []
    for field, rules in rules_for(dto).items():
        value = payload.get(field)
        if skip_missing and value is None:
            continue
        for rule in rules:
            if rule.applies_to(groups) and not rule.is_valid(value):
                messages.append(rule.format(field, value))
    return messages


class ValidationPipe:
    """
    FastAPI dependency that validates the JSON body before the handler runs.

    Usage:
        def create(payload: CreateEventDto = Depends(ValidationPipe(CreateEventDto, groups=["create"]))):
            ...
    """

    def __init__(self, dto: type[BaseModel], groups: Iterable[str] = (), skip_missing: bool = False):
        self.dto = dto
        self.groups = tuple(groups)
        self.skip_missing = skip_missing

    def __call__(self, payload: Any = Body(...)) -> BaseModel:
        if not isinstance(payload, dict):
            raise PayloadValidationError(["payload must be a JSON object"])
        messages = validate(payload, self.dto, self.groups, self.skip_missing)
        if messages:
            logger.info(
                "payload rejected",
                extra={"dto": self.dto.__name__, "groups": list(self.groups), "violations": messages},
            )
            raise PayloadValidationError(messages)
        return self.dto.model_validate(payload)
