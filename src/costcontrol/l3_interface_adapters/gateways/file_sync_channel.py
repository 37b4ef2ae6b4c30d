"""Gateway: file-backed sync channel — implements SyncChannel port across processes."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from uuid import uuid4

from costcontrol.l1_entities.change_event import SyncMessage
from costcontrol.l1_entities.errors import SettingsDecodeError
from costcontrol.l2_use_cases.ports.sync_channel import SyncHandler
from costcontrol.l2_use_cases.utils.settings_codec import decode_sync_message, encode_sync_message

log = logging.getLogger('costcontrol.sync')


class FileSyncChannel:
    """Last-message-wins channel stored in a single file in the shared data directory.

    Only the latest message is kept: a process that is not polling when two
    messages are written in a row only sees the second one.
    """

    def __init__(self, path: Path, origin: str | None = None) -> None:
        self._path = path
        self.origin = origin or uuid4().hex
        self._handlers: list[SyncHandler] = []
        current = self._read()
        self._last_token: str | None = current.token if current else None

    @property
    def path(self) -> Path:
        return self._path

    def subscribe(self, handler: SyncHandler) -> None:
        if handler not in self._handlers:
            self._handlers.append(handler)

    async def publish(self, message: SyncMessage) -> None:
        self._last_token = message.token
        await asyncio.to_thread(self._write, encode_sync_message(message))

    async def poll(self) -> bool:
        """Deliver the current message if it is new and came from another origin.

        A failing handler is logged and does not stop delivery or polling.
        """
        message = await asyncio.to_thread(self._read)
        if message is None or message.token == self._last_token:
            return False
        self._last_token = message.token
        if message.origin == self.origin:
            return False
        log.debug('Sync message for %s from %s', message.event.name, message.origin)
        for handler in list(self._handlers):
            try:
                await handler(message)
            except Exception:
                log.exception('Sync handler %r failed for %s', handler, message.event.name)
        return True

    async def watch(self, interval: float) -> None:
        while True:
            await self.poll()
            await asyncio.sleep(interval)

    def _read(self) -> SyncMessage | None:
        if not self._path.exists():
            return None
        try:
            return decode_sync_message(self._path.read_text(encoding='utf-8'))
        except SettingsDecodeError as e:
            log.warning('Ignoring unreadable sync file %s: %s', self._path, e)
            return None

    def _write(self, text: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_name(self._path.name + f'.{self.origin}.tmp')
        tmp.write_text(text, encoding='utf-8')
        os.replace(tmp, self._path)
