"""EEE mixin for objects that emit their own events.

``EEE`` owns a private :class:`Emitter` and exposes its registration,
removal and emission methods unchanged::

    class Document(EEE):
        async def save(self) -> None:
            result = await self.emit("save", self)
            if result.stopped:
                return
            ...

    doc = Document()
    doc.on("save", check_permissions, priority=Priority.HIGH)
"""

from typing import Any

from eee.emitter import Emitter


class EEE:
    """Event-emitting base class that forwards to an owned Emitter."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        self.__eee = Emitter(*args, **kwargs)

    def on(self, *args: Any, **kwargs: Any) -> Any:
        return self.__eee.on(*args, **kwargs)

    def once(self, *args: Any, **kwargs: Any) -> Any:
        return self.__eee.once(*args, **kwargs)

    def off(self, *args: Any, **kwargs: Any) -> None:
        return self.__eee.off(*args, **kwargs)

    def emit(self, *args: Any, **kwargs: Any) -> Any:
        return self.__eee.emit(*args, **kwargs)
