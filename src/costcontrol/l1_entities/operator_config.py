"""Operator configuration model — opaque mapping with the few fields this package reads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

DATA_USAGE_ONLY = 'DATA_USAGE_ONLY'


class CreditConfig(BaseModel):
    model_config = {'frozen': True, 'extra': 'allow'}

    currency: str = ''


class OperatorConfiguration(BaseModel):
    """Immutable operator-supplied parameter set. Unknown keys are kept as extras."""

    model_config = {'frozen': True, 'extra': 'allow'}

    provider: str = ''
    plantype: str | None = None
    is_free: bool = True
    is_roaming_free: bool = True
    default_low_limit_threshold: float | None = None
    credit: CreditConfig = Field(default_factory=CreditConfig)

    def get(self, key: str, default: Any = None) -> Any:
        """Mapping-style lookup across declared fields and operator extras."""
        if key in type(self).model_fields:
            return getattr(self, key)
        return (self.model_extra or {}).get(key, default)
