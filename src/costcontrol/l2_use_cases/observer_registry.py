"""Per-setting observer registry."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from costcontrol.l1_entities.change_event import ChangeEvent
from costcontrol.l1_entities.settings import Settings

log = logging.getLogger('costcontrol.settings')

# (value, old_value, name, settings)
Observer = Callable[[Any, Any, str, Settings | None], None]


class ObserverRegistry:
    """Ordered callbacks per setting name. A (name, callback) pair is held at most once."""

    def __init__(self) -> None:
        self._callbacks: dict[str, list[Observer]] = {}

    def add(self, name: str, callback: Observer) -> bool:
        """Register *callback* for *name*. Returns False if the pair was already registered."""
        callbacks = self._callbacks.setdefault(name, [])
        if callback in callbacks:
            return False
        callbacks.append(callback)
        return True

    def remove(self, name: str, callback: Observer) -> None:
        callbacks = self._callbacks.get(name)
        if callbacks and callback in callbacks:
            callbacks.remove(callback)

    def observers(self, name: str) -> list[Observer]:
        return list(self._callbacks.get(name, ()))

    def dispatch(self, event: ChangeEvent) -> None:
        """Call every observer of ``event.name`` in registration order."""
        log.debug('Option %s has changed!', event.name)
        for callback in self.observers(event.name):
            try:
                callback(event.value, event.old_value, event.name, event.settings)
            except Exception:
                log.exception('Observer %r for %s failed', callback, event.name)
