"""
Notifications
=============
Minimal observer list used for the model's outbound signals
(data point added, trajectory landed, target scored, rank update).

Listeners are called synchronously, in registration order, on the
thread that emits.
"""

from typing import Any, Callable, List


class Emitter:
    """Ordered list of callbacks invoked by :meth:`emit`."""

    def __init__(self):
        self._listeners: List[Callable[..., Any]] = []

    def add_listener(self, callback: Callable[..., Any]) -> None:
        if callback in self._listeners:
            return
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[..., Any]) -> None:
        try:
            self._listeners.remove(callback)
        except ValueError:
            pass

    def has_listener(self, callback: Callable[..., Any]) -> bool:
        return callback in self._listeners

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def emit(self, *args) -> None:
        # Copy so listeners may detach themselves while being notified
        for callback in tuple(self._listeners):
            callback(*args)

    def dispose(self) -> None:
        self._listeners.clear()
