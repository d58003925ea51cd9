"""Registry for listener management.

This module provides the Listener registration record and ListenerRegistry,
which maps event names to listener lists kept sorted by PriorityKey.
"""

from collections.abc import Callable, Iterable
from operator import attrgetter
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, StringConstraints, ValidationError

from eee.exceptions import ListenerValidationError
from eee.priority import PriorityKey

EventName = Annotated[str, StringConstraints(min_length=1)]

_by_key = attrgetter("key")


class Listener(BaseModel):
    """One registration of a hook under an event name.

    Registrations are immutable. The same hook registered twice under the
    same name yields two distinct Listener records.

    Attributes:
        name: Event name the hook listens on.
        hook: Callable invoked as ``hook(event, payload)``.
        bound_self: Object passed as first argument to ``hook``, if any.
        tier: Priority tier.
        sequence: Registration sequence number.

    Raises:
        ListenerValidationError: If fields fail pydantic validation.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", strict=True)

    name: EventName
    hook: Callable[..., Any]
    bound_self: Any = None
    tier: int
    sequence: int

    def __init__(self, **data: Any) -> None:
        """Wrap pydantic ValidationError into ListenerValidationError."""
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise ListenerValidationError(str(exc)) from exc

    @property
    def key(self) -> PriorityKey:
        return PriorityKey(self.tier, self.sequence)

    def matches(self, hook: Callable[..., Any]) -> bool:
        """Return True if this registration is for ``hook``."""
        return self.hook == hook


class ListenerRegistry:
    """Registry table for event listeners.

    Each name's list is re-sorted on every insertion, so reads never sort
    a single name. Lists are replaced rather than mutated on removal, and
    names whose list becomes empty are dropped.
    """

    def __init__(self) -> None:
        """Initialize empty registry.

        Post:
            _store is empty.
        """
        self._store: dict[str, list[Listener]] = {}

    def add(self, listener: Listener) -> None:
        """Insert a listener and re-sort its name's list.

        Post:
            listener present in _store[listener.name], list sorted by key.
        """
        listeners = self._store.setdefault(listener.name, [])
        listeners.append(listener)
        listeners.sort(key=_by_key)

    def clear(self) -> int:
        """Remove every registration. Returns the number removed."""
        removed = sum(len(listeners) for listeners in self._store.values())
        self._store.clear()
        return removed

    def remove_name(self, name: str) -> int:
        """Remove every registration under ``name``. Returns the number removed."""
        return len(self._store.pop(name, []))

    def remove_hook(
        self,
        hook: Callable[..., Any],
        names: Iterable[str] | None = None,
    ) -> int:
        """Remove every registration of ``hook``.

        Args:
            hook: Hook to remove.
            names: Names to remove from, or None for all names.

        Returns:
            Number of registrations removed, duplicates included.
        """
        targets = list(self._store) if names is None else list(names)
        removed = 0
        for name in targets:
            listeners = self._store.get(name)
            if listeners is None:
                continue
            kept = [listener for listener in listeners if not listener.matches(hook)]
            removed += len(listeners) - len(kept)
            if kept:
                self._store[name] = kept
            else:
                del self._store[name]
        return removed

    def get(self, name: str) -> tuple[Listener, ...]:
        """Return the registrations for ``name`` in dispatch order."""
        return tuple(self._store.get(name, ()))

    def names(self) -> list[str]:
        return list(self._store)

    def snapshot(self, names: list[str]) -> list[Listener]:
        """Capture the candidate listeners for one emission.

        A single name reuses its already-sorted list. Several names are
        merged and re-sorted, since priority must hold across the whole
        emission rather than per name.

        Args:
            names: Normalized, de-duplicated event names.

        Returns:
            New list of listeners in dispatch order.
        """
        if len(names) == 1:
            return list(self._store.get(names[0], ()))
        merged = [
            listener for name in names for listener in self._store.get(name, ())
        ]
        merged.sort(key=_by_key)
        return merged
