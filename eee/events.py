"""Event and Result model for eee.

An :class:`Event` is a single-use token handed to exactly one listener
invocation. A :class:`Result` collects the events of one emission and
exposes whether propagation was stopped and a flattened view of the
listener outcomes.

Listener return values are recorded as an explicit tagged variant,
``Outcome = Scalar | Nested``, so that flattening dispatches on the tag.
"""

from collections.abc import Iterator
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from eee.exceptions import EventStateError


class Event:
    """Token passed to one listener invocation.

    The event is *active* only while its listener runs. Once the listener
    returns, the event is read-only: its stop flag and outcome can be
    inspected but no longer changed.

    Example::

        async def on_save(event: Event, payload: dict) -> None:
            if payload.get("readonly"):
                event.stop()

    Attributes:
        name: Name of the event the listener was registered under.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._stopped = False
        self._active = False
        self._outcome: "Outcome | None" = None

    def stop(self) -> None:
        """Stop propagation of the current emission.

        No listener after this one (in dispatch order, across all names of
        the emission) will be invoked.

        Raises:
            EventStateError: If the listener for this event is not running.
        """
        if not self._active:
            raise EventStateError("can't stop an event that is not active")
        self._stopped = True

    @property
    def stopped(self) -> bool:
        return self._stopped

    @property
    def active(self) -> bool:
        return self._active

    @property
    def outcome(self) -> "Outcome | None":
        """Tagged listener outcome, or None if the listener returned None."""
        return self._outcome

    @property
    def value(self) -> Any:
        """Raw listener return value."""
        match self._outcome:
            case Scalar(value=value):
                return value
            case Nested(result=result):
                return result
            case _:
                return None

    def __repr__(self) -> str:
        return (
            f"Event(name={self.name!r}, stopped={self._stopped}, "
            f"outcome={self._outcome!r})"
        )


class Result:
    """Aggregate of the events produced by one emission.

    Events appear in invocation order. The result is sealed when ``emit()``
    returns and cannot be extended afterwards.
    """

    def __init__(self) -> None:
        self._events: list[Event] = []
        self._sealed = False

    def _add_event(self, event: Event) -> None:
        if self._sealed:
            raise EventStateError("can't add an event to a sealed result")
        self._events.append(event)

    def _seal(self) -> None:
        self._sealed = True

    @property
    def events(self) -> tuple[Event, ...]:
        return tuple(self._events)

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def stopped(self) -> bool:
        """True if any listener stopped the emission."""
        return any(event.stopped for event in self._events)

    @property
    def values(self) -> list[Any]:
        """Flattened listener outcomes.

        Scalar outcomes contribute their value; nested results contribute
        their own flattened values, recursively. Listeners that returned
        None contribute nothing.
        """
        values: list[Any] = []
        for event in self._events:
            match event.outcome:
                case Scalar(value=value):
                    values.append(value)
                case Nested(result=result):
                    values.extend(result.values)
        return values

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(self._events)

    def __repr__(self) -> str:
        return f"Result(events={len(self._events)}, stopped={self.stopped})"


class Scalar(BaseModel):
    """Plain listener return value."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["scalar"] = "scalar"
    value: Any


class Nested(BaseModel):
    """Listener returned the Result of another emission."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal["nested"] = "nested"
    result: Result


type Outcome = Scalar | Nested


def make_outcome(value: Any) -> Outcome | None:
    """Tag a listener return value.

    Args:
        value: Whatever the listener returned (already awaited).

    Returns:
        ``Nested`` for a Result, ``None`` for None, ``Scalar`` otherwise.
    """
    if value is None:
        return None
    if isinstance(value, Result):
        return Nested(result=value)
    return Scalar(value=value)
