"""eee - A priority-ordered asynchronous event emitter for Python.

This package provides named-event registration with priority tiers,
serial async dispatch, and early termination of an emission by any listener.
"""

__version__ = "0.1.0"

from loguru import logger

# Disable all eee logging by default.  Users opt in with:
#     from loguru import logger
#     logger.enable("eee")
logger.disable("eee")

from eee.emitter import Emitter
from eee.events import Event, Nested, Outcome, Result, Scalar
from eee.exceptions import (
    EeeError,
    EventStateError,
    InvalidEventNameError,
    ListenerValidationError,
)
from eee.facade import EEE
from eee.priority import Priority, PriorityKey, RegistrationCounter
from eee.registry import Listener

# Module-level default emitter instance
default_emitter = Emitter()

__all__ = [
    # Version
    "__version__",
    # Event model
    "Event",
    "Result",
    "Outcome",
    "Scalar",
    "Nested",
    # Priority
    "Priority",
    "PriorityKey",
    "RegistrationCounter",
    # Emitter classes
    "Emitter",
    "EEE",
    "Listener",
    "default_emitter",
    # Exception classes
    "EeeError",
    "EventStateError",
    "InvalidEventNameError",
    "ListenerValidationError",
]
