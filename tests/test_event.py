"""Tests for Event and Result."""

import pytest

from eee import Event, EventStateError, Nested, Result, Scalar
from eee.events import make_outcome


def _finished(value=None, stopped=False) -> Event:
    """Build an event the way the emitter leaves it after invocation."""
    event = Event("test")
    event._active = True
    if stopped:
        event.stop()
    event._active = False
    event._outcome = make_outcome(value)
    return event


class TestEvent:
    def test_fresh_event_state(self):
        event = Event("save")
        assert event.name == "save"
        assert not event.stopped
        assert not event.active
        assert event.outcome is None
        assert event.value is None

    def test_stop_before_dispatch_raises(self):
        """stop() on a not-yet-dispatched event is a programming error."""
        with pytest.raises(EventStateError, match="not active"):
            Event("save").stop()

    def test_stop_while_active(self):
        event = Event("save")
        event._active = True
        event.stop()
        assert event.stopped

    def test_stop_after_completion_raises(self):
        event = _finished()
        with pytest.raises(EventStateError):
            event.stop()
        assert not event.stopped

    def test_state_is_read_only(self):
        event = _finished(value=1)
        with pytest.raises(AttributeError):
            event.stopped = True  # type: ignore[misc]
        with pytest.raises(AttributeError):
            event.value = 2  # type: ignore[misc]


class TestOutcome:
    def test_none_has_no_outcome(self):
        assert make_outcome(None) is None

    def test_plain_value_is_scalar(self):
        outcome = make_outcome({"a": 1})
        assert isinstance(outcome, Scalar)
        assert outcome.kind == "scalar"
        assert outcome.value == {"a": 1}

    def test_result_is_nested(self):
        inner = Result()
        outcome = make_outcome(inner)
        assert isinstance(outcome, Nested)
        assert outcome.kind == "nested"
        assert outcome.result is inner

    def test_falsy_values_are_kept(self):
        assert make_outcome(0) == Scalar(value=0)
        assert make_outcome(False) == Scalar(value=False)

    def test_event_value_unwraps_outcome(self):
        inner = Result()
        assert _finished(value="x").value == "x"
        assert _finished(value=inner).value is inner


class TestResult:
    def test_empty_result(self):
        result = Result()
        assert result.events == ()
        assert len(result) == 0
        assert not result.stopped
        assert result.values == []

    def test_stopped_if_any_event_stopped(self):
        result = Result()
        result._add_event(_finished())
        assert not result.stopped
        result._add_event(_finished(stopped=True))
        assert result.stopped

    def test_values_skip_none(self):
        result = Result()
        for value in (1, None, "two"):
            result._add_event(_finished(value=value))
        assert result.values == [1, "two"]
        assert len(result) == 3

    def test_values_flatten_nested_result(self):
        """A nested Result contributes its values, not itself."""
        inner = Result()
        inner._add_event(_finished(value="a"))
        inner._add_event(_finished(value="b"))
        outer = Result()
        outer._add_event(_finished(value=inner))
        assert outer.values == ["a", "b"]

    def test_values_flatten_recursively(self):
        innermost = Result()
        innermost._add_event(_finished(value=3))
        middle = Result()
        middle._add_event(_finished(value=2))
        middle._add_event(_finished(value=innermost))
        outer = Result()
        outer._add_event(_finished(value=1))
        outer._add_event(_finished(value=middle))
        assert outer.values == [1, 2, 3]

    def test_iterates_events_in_order(self):
        result = Result()
        events = [_finished(value=i) for i in range(3)]
        for event in events:
            result._add_event(event)
        assert list(result) == events

    def test_sealed_result_rejects_events(self):
        result = Result()
        result._seal()
        assert result.sealed
        with pytest.raises(EventStateError, match="sealed"):
            result._add_event(_finished())
