"""Per-context session state entity."""

from __future__ import annotations

from pydantic import BaseModel

from costcontrol.l1_entities.operator_config import OperatorConfiguration
from costcontrol.l1_entities.settings import Settings


class ConfigSession(BaseModel):
    """Mutable state of one execution context.

    *configuration* is set once and never replaced. *settings* is the cache
    of the active identity, replaced wholesale only by a settings load.
    """

    configuration: OperatorConfiguration | None = None
    no_config_found: bool = False
    settings: Settings | None = None
    identity_key: str | None = None
