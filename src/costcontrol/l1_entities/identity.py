"""SIM identity entities."""

from __future__ import annotations

from pydantic import BaseModel

NO_ICCID = 'NOICCID'


class NetworkInfo(BaseModel):
    """Home network of the SIM (mobile country code + mobile network code)."""

    model_config = {'frozen': True}

    mcc: str
    mnc: str

    @property
    def key(self) -> str:
        return f'{self.mcc}_{self.mnc}'


class SimIdentity(BaseModel):
    """Identity of the data SIM as reported by the identity resolver."""

    model_config = {'frozen': True}

    icc_id: str | None = None
    network: NetworkInfo | None = None


def storage_key(icc_id: str | None) -> str:
    """Store key for *icc_id*, falling back to the no-SIM sentinel."""
    return icc_id or NO_ICCID
