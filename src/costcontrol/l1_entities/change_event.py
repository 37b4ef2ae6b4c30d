"""Change notification payloads."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

from costcontrol.l1_entities.settings import Settings


@dataclass(frozen=True)
class ChangeEvent:
    """One setting's transition from *old_value* to *value*."""

    name: str
    value: Any
    old_value: Any
    settings: Settings | None


@dataclass(frozen=True)
class SyncMessage:
    """Cross-context envelope around a ChangeEvent.

    *token* is unique per message so two syncs of the same name in a row
    are still distinct.
    """

    origin: str
    event: ChangeEvent
    token: str = field(default_factory=lambda: uuid4().hex)
