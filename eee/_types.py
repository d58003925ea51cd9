"""Shared type definitions for eee.

All type aliases use PEP 695 ``type`` statement syntax.
"""

from collections.abc import Awaitable, Callable
from typing import Any

from eee.events import Event

type Hook = Callable[[Event, Any], Any | Awaitable[Any]]
"""Listener callable.

Invoked as ``hook(event, payload)``, or ``hook(bound_self, event, payload)``
when registered with ``bound_self``. May return a plain value, a Result, or
an awaitable resolving to either.
"""
