"""Exception hierarchy for eee.

All custom exceptions inherit from EeeError base class. Exceptions raised
by listener hooks are never wrapped; they propagate out of ``emit()`` as-is.
"""


class EeeError(Exception):
    """Base exception for all eee errors.

    All custom exceptions in eee inherit from this class, allowing users
    to catch all library-specific errors with a single except clause.
    """


class EventStateError(EeeError, RuntimeError):
    """Operation not allowed in the current event or result state.

    Raised when:
    - ``Event.stop()`` is called while the event's listener is not running
    - an event is added to a ``Result`` that has already been sealed
    """


class ListenerValidationError(EeeError, ValueError):
    """Listener registration failed validation.

    Raised when ``on()`` receives an empty name, a non-callable hook or a
    non-integer priority.

    This wraps pydantic.ValidationError to provide a library-specific exception type.
    """


class InvalidEventNameError(EeeError, ValueError):
    """Event name passed to emit or removal is not a non-empty string."""
