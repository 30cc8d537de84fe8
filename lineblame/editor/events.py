"""
Editor events.

Listeners are plain callables registered on an EventEmitter; each
registration returns a Disposable that removes it again.
"""

import asyncio
import inspect
from typing import Any, Callable, List

from lineblame.util.disposable import Disposable


Listener = Callable[..., Any]


class EventEmitter:
    """Calls registered listeners in registration order."""

    def __init__(self, name: str = ""):
        self.name = name
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Disposable:
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return Disposable(remove)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def fire(self, *args: Any) -> List[asyncio.Future]:
        """
        Notify every listener.

        Returns:
            Futures for listeners that returned an awaitable; they are
            already scheduled and may be awaited or left to run.
        """
        pending: List[asyncio.Future] = []

        for listener in list(self._listeners):
            result = listener(*args)
            if inspect.isawaitable(result):
                pending.append(asyncio.ensure_future(result))

        return pending


class EditorEvents:
    """The editor notifications the blame engine reacts to."""

    def __init__(self):
        self.active_editor_changed = EventEmitter("active_editor_changed")
        self.selection_changed = EventEmitter("selection_changed")
        self.document_saved = EventEmitter("document_saved")
        self.document_closed = EventEmitter("document_closed")
        self.file_changed = EventEmitter("file_changed")

    def listener_count(self) -> int:
        return sum(
            emitter.listener_count
            for emitter in (
                self.active_editor_changed,
                self.selection_changed,
                self.document_saved,
                self.document_closed,
                self.file_changed,
            )
        )
