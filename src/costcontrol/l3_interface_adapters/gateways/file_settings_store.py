"""Gateway: file-based settings store — implements SettingsStore port."""

from __future__ import annotations

import asyncio
import logging
import os
import re
from pathlib import Path

log = logging.getLogger('costcontrol.store')


class FileSettingsStore:
    """One JSON file per identity key under a directory."""

    def __init__(self, directory: Path) -> None:
        self._directory = directory
        self._directory.mkdir(parents=True, exist_ok=True)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        safe_key = re.sub(r'[^\w\-]', '_', key)
        return self._directory / f'{safe_key}.json'

    async def get_item(self, key: str) -> str | None:
        return await asyncio.to_thread(self._read, key)

    async def set_item(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write, key, value)

    def _read(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding='utf-8')

    def _write(self, key: str, value: str) -> None:
        path = self.path_for(key)
        tmp = path.with_name(path.name + '.tmp')
        tmp.write_text(value, encoding='utf-8')
        os.replace(tmp, path)
        log.debug('Wrote settings for %s (%d bytes)', key, len(value))
