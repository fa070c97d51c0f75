"""Event expectation descriptor -- the contract for event comparison.

Pairwise event matching is done by the harness's comparator. This module
decides which actual events take part in the comparison: which event
names an expectation observes and how many actual events are compared.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from unified_runner.models.expectations import EventMatch, ExpectedEvents, ExpectedEventType

COMMAND_EVENTS: frozenset[str] = frozenset(
    {"commandStartedEvent", "commandSucceededEvent", "commandFailedEvent"}
)

CMAP_EVENTS: frozenset[str] = frozenset(
    {
        "poolCreatedEvent",
        "poolReadyEvent",
        "poolClearedEvent",
        "poolClosedEvent",
        "connectionCreatedEvent",
        "connectionReadyEvent",
        "connectionClosedEvent",
        "connectionCheckOutStartedEvent",
        "connectionCheckOutFailedEvent",
        "connectionCheckedOutEvent",
        "connectionCheckedInEvent",
    }
)

_OBSERVED: dict[ExpectedEventType, frozenset[str]] = {
    ExpectedEventType.COMMAND: COMMAND_EVENTS,
    ExpectedEventType.CMAP: CMAP_EVENTS,
    ExpectedEventType.CMAP_WITHOUT_CONNECTION_READY: CMAP_EVENTS
    - {"connectionReadyEvent"},
}


class EventCountMismatch(Exception):
    """The actual event list cannot be compared with the expected list."""


@dataclass(frozen=True)
class EventExpectation:
    """Comparison contract for the expected events of one client."""

    client: str
    expected: tuple[dict[str, Any], ...]
    event_type: ExpectedEventType
    match: EventMatch

    @classmethod
    def from_expected(cls, expected_events: ExpectedEvents) -> EventExpectation:
        return cls(
            client=expected_events.client,
            expected=tuple(expected_events.events),
            event_type=expected_events.effective_event_type,
            match=expected_events.event_match,
        )

    def is_observed(self, event_name: str) -> bool:
        """Whether events named ``event_name`` belong to this expectation."""
        return event_name in _OBSERVED[self.event_type]

    def window(self, actual: list[Any]) -> list[Any]:
        """Actual events to be compared pairwise with ``expected``.

        Prefix mode ignores events beyond the expected count; exact mode
        requires the counts to agree.

        Raises:
            EventCountMismatch: If there are too few actual events, or too
                many in exact mode.
        """
        expected_count = len(self.expected)
        if len(actual) < expected_count or (
            self.match is EventMatch.EXACT and len(actual) != expected_count
        ):
            raise EventCountMismatch(
                f"{self.client}: expected {expected_count} {self.event_type.value} "
                f"event(s) ({self.match.value} match), got {len(actual)}"
            )
        return list(actual[:expected_count])
