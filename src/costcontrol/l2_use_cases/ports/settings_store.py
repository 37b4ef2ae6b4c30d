"""Port: durable key-value store for serialized settings."""

from __future__ import annotations

from typing import Protocol


class SettingsStore(Protocol):
    """Asynchronous string store keyed by SIM identity."""

    async def get_item(self, key: str) -> str | None:
        """Return the stored blob for *key*, or None when absent."""
        ...

    async def set_item(self, key: str, value: str) -> None:
        """Persist *value* under *key*. I/O errors propagate."""
        ...
