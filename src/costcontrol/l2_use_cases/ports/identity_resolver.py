"""Port: active SIM identity resolver."""

from __future__ import annotations

from typing import Protocol

from costcontrol.l1_entities.identity import SimIdentity


class IdentityResolver(Protocol):
    async def get_active_identity(self) -> SimIdentity:
        """Return the identity of the SIM currently used for data."""
        ...
