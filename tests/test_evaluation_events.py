"""Tests for unified_runner.evaluation.events - event comparison contract."""

import pytest

from unified_runner.evaluation.events import EventCountMismatch, EventExpectation
from unified_runner.models import EventMatch, ExpectedEvents, ExpectedEventType


def _expectation(**fields) -> EventExpectation:
    data = {
        "client": "client0",
        "events": [
            {"commandStartedEvent": {"commandName": "insert"}},
            {"commandSucceededEvent": {"commandName": "insert"}},
        ],
    }
    data.update(fields)
    return EventExpectation.from_expected(ExpectedEvents.model_validate(data))


class TestEventExpectation:
    def test_defaults_to_exact_command_events(self):
        expectation = _expectation()
        assert expectation.client == "client0"
        assert expectation.event_type is ExpectedEventType.COMMAND
        assert expectation.match is EventMatch.EXACT
        assert len(expectation.expected) == 2

    def test_exact_window_requires_equal_counts(self):
        expectation = _expectation()
        assert expectation.window(["a", "b"]) == ["a", "b"]
        with pytest.raises(EventCountMismatch, match="expected 2 command event"):
            expectation.window(["a", "b", "c"])
        with pytest.raises(EventCountMismatch):
            expectation.window(["a"])

    def test_prefix_window_ignores_extra_events(self):
        expectation = _expectation(ignoreExtraEvents=True)
        assert expectation.match is EventMatch.PREFIX
        assert expectation.window(["a", "b", "c"]) == ["a", "b"]
        with pytest.raises(EventCountMismatch, match="prefix match"):
            expectation.window(["a"])

    def test_command_events_observed(self):
        expectation = _expectation()
        assert expectation.is_observed("commandFailedEvent") is True
        assert expectation.is_observed("poolCreatedEvent") is False

    def test_cmap_events_observed(self):
        expectation = _expectation(eventType="cmap", events=[])
        assert expectation.is_observed("connectionReadyEvent") is True
        assert expectation.is_observed("commandStartedEvent") is False

    def test_internal_cmap_variant_drops_connection_ready(self):
        expectation = EventExpectation(
            client="client0",
            expected=(),
            event_type=ExpectedEventType.CMAP_WITHOUT_CONNECTION_READY,
            match=EventMatch.EXACT,
        )
        assert expectation.is_observed("connectionReadyEvent") is False
        assert expectation.is_observed("connectionCheckedOutEvent") is True
