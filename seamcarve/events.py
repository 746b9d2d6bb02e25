"""Listener lists for telling the UI that an image changed."""

import inspect
from typing import Callable, List


def _same_listener(a, b) -> bool:
    # Bound methods are rebuilt on each attribute access.
    if inspect.ismethod(a) and inspect.ismethod(b):
        return a.__self__ is b.__self__ and a.__func__ is b.__func__
    return a is b


class Signal:
    """
    A list of no-argument callbacks.

    Listeners are called in the order they were connected. Disconnecting
    matches by identity: the same function, or a bound method of the same
    object.
    """

    def __init__(self, name: str = ''):
        self.name = name
        self._listeners: List[Callable[[], None]] = []

    def connect(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register a listener. Returns it so this can be used as a decorator."""
        self._listeners.append(callback)
        return callback

    def disconnect(self, callback: Callable[[], None]):
        """Remove a listener. Unknown listeners are ignored."""
        for i, listener in enumerate(self._listeners):
            if _same_listener(listener, callback):
                del self._listeners[i]
                return

    def emit(self):
        for listener in list(self._listeners):
            listener()

    def __len__(self):
        return len(self._listeners)

    def __repr__(self):
        return f"Signal({self.name!r}, listeners={len(self._listeners)})"
