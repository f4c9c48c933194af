from __future__ import annotations

from typing import Any, Callable, List

Listener = Callable[..., None]


class Signal:
    """Ordered list of listeners called synchronously on `emit`."""

    def __init__(self) -> None:
        self._listeners: List[Listener] = []

    def connect(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def disconnect(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def clear(self) -> None:
        self._listeners.clear()

    def emit(self, *args: Any) -> None:
        # Copy so listeners may disconnect themselves while being called
        for listener in list(self._listeners):
            listener(*args)

    def __len__(self) -> int:
        return len(self._listeners)
