"""Local dispatch and cross-context relay of settings changes."""

from __future__ import annotations

import logging
from collections.abc import Callable

from costcontrol.l1_entities.change_event import ChangeEvent, SyncMessage
from costcontrol.l2_use_cases.ports.sync_channel import SyncChannel

log = logging.getLogger('costcontrol.sync')

ChangeHandler = Callable[[ChangeEvent], None]


class ChangeNotifier:
    """Broadcasts ChangeEvents to in-process subscribers and relays them to other contexts."""

    def __init__(self, channel: SyncChannel | None = None) -> None:
        self._channel = channel
        self._subscribers: list[ChangeHandler] = []

    @property
    def channel(self) -> SyncChannel | None:
        return self._channel

    def subscribe(self, handler: ChangeHandler) -> None:
        if handler not in self._subscribers:
            self._subscribers.append(handler)

    def unsubscribe(self, handler: ChangeHandler) -> None:
        if handler in self._subscribers:
            self._subscribers.remove(handler)

    async def emit(self, event: ChangeEvent, *, relay: bool = True) -> None:
        """Dispatch *event* locally, then publish it on the sync channel when *relay* is set."""
        for handler in list(self._subscribers):
            handler(event)
        log.debug('Event optionchange dispatched for %s', event.name)

        if relay and self._channel is not None:
            message = SyncMessage(origin=self._channel.origin, event=event)
            await self._channel.publish(message)
            log.debug('Sync marker %s#%s published', event.name, message.token)
