"""Expectation models: declared errors and declared event sequences."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, field_validator
from pydantic.alias_generators import to_camel


class ExpectedEventType(str, Enum):
    """Which family of events an expectation list describes."""

    COMMAND = "command"
    CMAP = "cmap"
    # Internal only: CMAP events minus connectionReadyEvent, used while
    # connection usage is not serialized. Never accepted from input.
    CMAP_WITHOUT_CONNECTION_READY = "cmapWithoutConnectionReady"


class EventMatch(str, Enum):
    """How an actual event list is compared with the expected list."""

    EXACT = "exact"
    PREFIX = "prefix"


def _single_event_key(event: dict[str, Any]) -> dict[str, Any]:
    if len(event) != 1:
        raise ValueError(
            f"Expected event must have exactly one key naming the event type, got {sorted(event)}"
        )
    return event


ExpectedEvent = Annotated[dict[str, Any], AfterValidator(_single_event_key)]


class ExpectedEvents(BaseModel):
    """Expected events for a single client."""

    model_config = {"extra": "forbid", "alias_generator": to_camel}

    client: str
    events: list[ExpectedEvent]
    event_type: ExpectedEventType | None = None
    ignore_extra_events: bool | None = None

    @field_validator("event_type", mode="before")
    @classmethod
    def _reject_internal_event_type(cls, value: Any) -> Any:
        if value == ExpectedEventType.CMAP_WITHOUT_CONNECTION_READY.value:
            raise ValueError(f"{value!r} is not a valid eventType")
        return value

    @property
    def effective_event_type(self) -> ExpectedEventType:
        return self.event_type or ExpectedEventType.COMMAND

    @property
    def event_match(self) -> EventMatch:
        """Prefix matching when extra events are ignored, exact otherwise."""
        if self.ignore_extra_events:
            return EventMatch.PREFIX
        return EventMatch.EXACT


class ExpectError(BaseModel):
    """A declared error expectation.

    Every clause is optional. Clauses are verified in declaration order by
    :func:`unified_runner.evaluation.expect_error.verify_expect_error`.
    """

    model_config = {"extra": "forbid", "alias_generator": to_camel}

    is_error: bool | None = None
    is_client_error: bool | None = None
    error_contains: str | None = None
    error_code: int | None = None
    error_code_name: str | None = None
    error_labels_contain: list[str] | None = None
    error_labels_omit: list[str] | None = None
    expect_result: Any = None
