"""Priority tiers and registration ordering.

Listeners are ordered by a :class:`PriorityKey`: the coarse tier first,
then the registration sequence drawn from a :class:`RegistrationCounter`.
"""

import threading
from enum import IntEnum
from itertools import count
from typing import NamedTuple


class Priority(IntEnum):
    """Fixed priority tiers. Lower values dispatch earlier."""

    HIGHEST = -1000
    HIGHER = -100
    HIGH = -10
    NORMAL = 0
    LOW = 10
    LOWER = 100
    LOWEST = 1000


class PriorityKey(NamedTuple):
    """Sort key for a listener registration.

    Tuple ordering compares ``tier`` first and breaks ties with
    ``sequence``, so listeners of equal tier run in registration order.

    Attributes:
        tier: Priority tier (see :class:`Priority`).
        sequence: Registration sequence number.
    """

    tier: int
    sequence: int


class RegistrationCounter:
    """Monotonic registration sequence.

    Starts at zero and lives as long as the owning process (or the object
    that created it). Values are never reused. ``next()`` is guarded by a
    lock so that emitters may register listeners from several threads.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._count = count()

    def next(self) -> int:
        """Return the next sequence number."""
        with self._lock:
            return next(self._count)


# Shared by every Emitter unless one is injected
registration_counter = RegistrationCounter()
