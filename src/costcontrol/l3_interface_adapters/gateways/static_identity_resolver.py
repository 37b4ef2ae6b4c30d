"""Gateway: fixed identity resolver — implements IdentityResolver port."""

from __future__ import annotations

from costcontrol.l1_entities.config import SimConfig
from costcontrol.l1_entities.identity import NetworkInfo, SimIdentity


class StaticIdentityResolver:
    """Always reports the same SIM; used when no telephony service is available."""

    def __init__(self, identity: SimIdentity) -> None:
        self._identity = identity

    @classmethod
    def from_config(cls, sim: SimConfig) -> StaticIdentityResolver:
        network = NetworkInfo(mcc=sim.mcc, mnc=sim.mnc) if sim.mcc and sim.mnc else None
        return cls(SimIdentity(icc_id=sim.icc_id, network=network))

    async def get_active_identity(self) -> SimIdentity:
        return self._identity
