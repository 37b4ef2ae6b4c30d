"""Gateway: in-process sync channel — implements SyncChannel port."""

from __future__ import annotations

import asyncio
import logging
from uuid import uuid4

from costcontrol.l1_entities.change_event import SyncMessage
from costcontrol.l2_use_cases.ports.sync_channel import SyncHandler

log = logging.getLogger('costcontrol.sync')


class LocalSyncHub:
    """Broadcast medium shared by the sessions of one process.

    Delivery runs as tasks on the running loop, never inline in publish().
    """

    def __init__(self) -> None:
        self._channels: list[LocalSyncChannel] = []
        self._pending: set[asyncio.Task] = set()

    def channel(self, origin: str | None = None) -> LocalSyncChannel:
        ch = LocalSyncChannel(self, origin or uuid4().hex)
        self._channels.append(ch)
        return ch

    def broadcast(self, message: SyncMessage) -> None:
        loop = asyncio.get_running_loop()
        for ch in self._channels:
            if ch.origin == message.origin:
                continue
            for handler in ch.handlers:
                task = loop.create_task(handler(message))
                self._pending.add(task)
                task.add_done_callback(self._on_delivered)

    def _on_delivered(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if not task.cancelled() and task.exception() is not None:
            log.error('Sync delivery failed', exc_info=task.exception())

    async def join(self) -> None:
        """Wait until every scheduled delivery has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending))


class LocalSyncChannel:
    """One context's endpoint on a LocalSyncHub."""

    def __init__(self, hub: LocalSyncHub, origin: str) -> None:
        self._hub = hub
        self.origin = origin
        self.handlers: list[SyncHandler] = []

    async def publish(self, message: SyncMessage) -> None:
        self._hub.broadcast(message)

    def subscribe(self, handler: SyncHandler) -> None:
        if handler not in self.handlers:
            self.handlers.append(handler)
