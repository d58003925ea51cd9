"""Asynchronous, priority-ordered event emitter."""

import asyncio
import inspect
from collections.abc import Callable, Iterable
from typing import Any

from loguru import logger

from eee._types import Hook
from eee.events import Event, Result, make_outcome
from eee.exceptions import InvalidEventNameError
from eee.priority import Priority, RegistrationCounter, registration_counter
from eee.registry import Listener, ListenerRegistry
from eee.utils import callable_name

log = logger.bind(source=__name__)


class Emitter:
    """Priority-ordered event emitter.

    Listeners run one at a time, lowest tier first, ties broken by
    registration order. Any listener may stop the emission, which skips
    every listener after it, for all names of that emission.
    """

    def __init__(self, *, counter: RegistrationCounter | None = None) -> None:
        """Initialize emitter.

        Args:
            counter: Registration counter to draw sequence numbers from
                (default: the process-wide ``registration_counter``).

        Post:
            Registry is empty.
        """
        self._counter = counter or registration_counter
        self._registry = ListenerRegistry()

    def on[H: Hook](
        self,
        name: str,
        hook: H | None = None,
        priority: int = Priority.NORMAL,
        bound_self: Any = None,
    ) -> H | Callable[[H], H]:
        """Register ``hook`` as a listener for ``name``.

        When ``hook`` is omitted, returns a decorator instead::

            @emitter.on("save", priority=Priority.HIGH)
            async def validate(event: Event, payload: dict) -> None: ...

        Args:
            name: Event name to listen on.
            hook: Callable invoked as ``hook(event, payload)``. May be a
                coroutine function.
            priority: Priority tier; lower runs earlier.
            bound_self: If given, the hook is invoked as
                ``hook(bound_self, event, payload)``.

        Returns:
            ``hook`` unchanged, for later removal by identity; or a
            decorator when ``hook`` is None.

        Post:
            Listener inserted and ``name``'s list re-sorted.

        Raises:
            ListenerValidationError: If name, hook or priority is invalid.
        """
        if hook is None:

            def decorator(func: H) -> H:
                self.on(name, func, priority=priority, bound_self=bound_self)
                return func

            return decorator

        listener = Listener(
            name=name,
            hook=hook,
            bound_self=bound_self,
            tier=int(priority) if isinstance(priority, Priority) else priority,
            sequence=self._counter.next(),
        )
        self._registry.add(listener)
        log.debug(
            "Registered {} on {!r} (tier={}, sequence={})",
            callable_name(hook),
            name,
            listener.tier,
            listener.sequence,
        )
        return hook

    def once(
        self,
        name: str,
        hook: Hook | None = None,
        priority: int = Priority.NORMAL,
        bound_self: Any = None,
    ) -> Hook:
        """Register a listener that fires at most once.

        Raises:
            NotImplementedError: Always; once-listeners are not supported.
        """
        raise NotImplementedError("once() is not supported")

    # -- removal --------------------------------------------------------------

    def remove_all(self) -> None:
        """Clear the entire registry."""
        removed = self._registry.clear()
        log.debug("Removed all {} listener(s)", removed)

    def remove_by_name(self, name: str) -> None:
        """Remove every listener registered under ``name``."""
        _check_name(name)
        removed = self._registry.remove_name(name)
        log.debug("Removed {} listener(s) from {!r}", removed, name)

    def remove_by_hook(self, hook: Hook) -> None:
        """Remove every registration of ``hook`` under every name."""
        removed = self._registry.remove_hook(hook)
        log.debug("Removed {} registration(s) of {}", removed, callable_name(hook))

    def remove_by_name_and_hook(self, name: str, hook: Hook) -> None:
        """Remove every registration of ``hook`` under ``name``."""
        _check_name(name)
        removed = self._registry.remove_hook(hook, [name])
        log.debug(
            "Removed {} registration(s) of {} from {!r}",
            removed,
            callable_name(hook),
            name,
        )

    def off(self, name: str | None = None, hook: Hook | None = None) -> None:
        """Remove listeners.

        Supports four modes:
        - (name, hook): Remove every registration of hook under name.
        - (name): Remove all listeners for name.
        - (hook=hook): Remove every registration of hook under all names.
        - (): Clear the registry.

        Removal does not affect emissions already in progress.

        Args:
            name: Event name, or None for all names.
            hook: Hook to remove, or None for all hooks.
        """
        if name is not None and hook is not None:
            self.remove_by_name_and_hook(name, hook)
        elif name is not None:
            self.remove_by_name(name)
        elif hook is not None:
            self.remove_by_hook(hook)
        else:
            self.remove_all()

    # -- introspection --------------------------------------------------------

    def listeners(self, name: str) -> tuple[Listener, ...]:
        """Return the registrations for ``name`` in dispatch order."""
        return self._registry.get(name)

    def names(self) -> list[str]:
        """Return every name that has at least one listener."""
        return self._registry.names()

    def has_listeners(self, name: str) -> bool:
        return bool(self._registry.get(name))

    # -- emission -------------------------------------------------------------

    async def emit(self, names: str | Iterable[str], payload: Any = None) -> Result:
        """Asynchronously dispatch one or more events.

        Listeners of all given names are merged into one priority order.
        ``emit()`` always yields to the event loop once before dispatching,
        even when no listener matches.

        Args:
            names: Event name, or an iterable of names.
            payload: Value passed to every listener as its second argument.

        Returns:
            Sealed Result holding one Event per invoked listener.

        Post:
            Listeners captured at the start of the emission ran in order,
            up to and including the first one that stopped the event.

        Raises:
            InvalidEventNameError: If a name is not a non-empty string.
            Exception: Whatever a listener raises; remaining listeners are
                skipped and no Result is returned.
        """
        normalized = _normalize_names(names)
        candidates = self._registry.snapshot(normalized)
        result = Result()
        log.debug("Emit {} ({} listener(s))", normalized, len(candidates))

        await asyncio.sleep(0)

        for listener in candidates:
            event = Event(listener.name)
            await self._invoke(listener, event, payload)
            result._add_event(event)
            if event.stopped:
                log.debug(
                    "Emission {} stopped by {}",
                    normalized,
                    callable_name(listener.hook),
                )
                break

        result._seal()
        return result

    async def _invoke(self, listener: Listener, event: Event, payload: Any) -> None:
        """Run one listener against its event.

        Args:
            listener: Registration to invoke.
            event: Fresh event for this invocation.
            payload: Emission payload.

        Post:
            event is inactive and holds the listener's outcome.

        Raises:
            Exception: Re-raised from the listener unchanged.
        """
        args = (event, payload)
        if listener.bound_self is not None:
            args = (listener.bound_self, *args)

        event._active = True
        try:
            value = listener.hook(*args)
            if inspect.isawaitable(value):
                value = await value
        except Exception:
            log.opt(exception=True).debug(
                "Listener {} failed on {!r}",
                callable_name(listener.hook),
                listener.name,
            )
            raise
        finally:
            event._active = False
        event._outcome = make_outcome(value)


def _check_name(name: Any) -> None:
    if not isinstance(name, str) or not name:
        raise InvalidEventNameError(f"event name must be a non-empty str, got {name!r}")


def _normalize_names(names: str | Iterable[str]) -> list[str]:
    """Turn ``names`` into an ordered list of distinct event names.

    Raises:
        InvalidEventNameError: If ``names`` is not a str or iterable of
            non-empty str.
    """
    if isinstance(names, str):
        _check_name(names)
        return [names]
    try:
        items = list(names)
    except TypeError as exc:
        raise InvalidEventNameError(
            f"expected event name or iterable of names, got {type(names).__name__}"
        ) from exc
    for name in items:
        _check_name(name)
    return list(dict.fromkeys(items))
