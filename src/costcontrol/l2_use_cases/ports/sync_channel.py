"""Port: cross-context synchronization channel."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Protocol

from costcontrol.l1_entities.change_event import SyncMessage

SyncHandler = Callable[[SyncMessage], Awaitable[None]]


class SyncChannel(Protocol):
    """Publish/subscribe channel shared by every context of the same storage origin.

    Subscribers only receive messages published by other origins.
    """

    origin: str

    async def publish(self, message: SyncMessage) -> None:
        """Broadcast *message* to the other contexts."""
        ...

    def subscribe(self, handler: SyncHandler) -> None:
        """Register *handler* for messages from other contexts."""
        ...
