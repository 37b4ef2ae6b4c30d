"""Port: operator resource loader."""

from __future__ import annotations

from typing import Protocol


class ResourceLoader(Protocol):
    """Fetches operator resources (index and per-operator config files) as text."""

    async def fetch_text(self, path: str) -> str:
        """Return the raw text of the resource at *path* (relative, '/'-separated)."""
        ...
