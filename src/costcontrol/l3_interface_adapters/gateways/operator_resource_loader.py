"""Gateway: operator resource loader — implements ResourceLoader port."""

from __future__ import annotations

import asyncio
import logging
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path

log = logging.getLogger('costcontrol.config')

BUILTIN_OPERATORS_DIR = resources.files('costcontrol') / 'operators'


class OperatorResourceLoader:
    """Reads operator resources from an ordered list of roots.

    The first root holding the requested file wins, so a user directory
    placed before the built-in resources overrides them file by file.
    """

    def __init__(self, roots: list[Traversable | Path] | None = None) -> None:
        self._roots: list[Traversable | Path] = list(roots) if roots else [BUILTIN_OPERATORS_DIR]

    @property
    def roots(self) -> list[Traversable | Path]:
        return list(self._roots)

    async def fetch_text(self, path: str) -> str:
        return await asyncio.to_thread(self._read, path)

    def _read(self, path: str) -> str:
        for root in self._roots:
            node = root
            for part in path.split('/'):
                node = node / part
            if node.is_file():
                log.debug('Reading operator resource %s from %s', path, root)
                return node.read_text(encoding='utf-8')
        raise FileNotFoundError(f'Operator resource not found: {path}')
