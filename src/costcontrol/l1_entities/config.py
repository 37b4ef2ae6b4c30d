"""Configuration Pydantic models — pure schema, no infrastructure defaults."""

from __future__ import annotations

from pydantic import BaseModel


class StorageConfig(BaseModel):
    directory: str | None  # None = platform user data dir


class OperatorsConfig(BaseModel):
    directory: str | None  # None = built-in operator resources


class SimConfig(BaseModel):
    icc_id: str | None = None
    mcc: str | None = None
    mnc: str | None = None


class SyncConfig(BaseModel):
    poll_interval: float


class AppConfig(BaseModel):
    storage: StorageConfig
    operators: OperatorsConfig
    sim: SimConfig
    sync: SyncConfig
