"""Callback registries for change notification.

Each ``Event`` keeps its own ordered subscriber list; there is no global bus.
Subscribing the same callback twice registers it once.
"""
from __future__ import annotations

from typing import Any, Callable, List

Callback = Callable[[Any], None]


class Event:
    __slots__ = ("name", "_subscribers")

    def __init__(self, name: str):
        self.name = name
        self._subscribers: List[Callback] = []

    def subscribe(self, callback: Callback) -> Callback:
        if callback not in self._subscribers:
            self._subscribers.append(callback)
        return callback

    def unsubscribe(self, callback: Callback) -> bool:
        try:
            self._subscribers.remove(callback)
        except ValueError:
            return False
        return True

    def clear(self) -> None:
        self._subscribers.clear()

    def emit(self, payload: Any) -> None:
        # Copy so callbacks may unsubscribe themselves mid-dispatch
        for cb in list(self._subscribers):
            cb(payload)

    def __len__(self) -> int:
        return len(self._subscribers)

    def __repr__(self) -> str:
        return f"Event({self.name!r}, subscribers={len(self._subscribers)})"


__all__ = ["Event", "Callback"]
