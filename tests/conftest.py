"""Shared test fixtures and protocol-conforming fakes."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from costcontrol.l1_entities.identity import NetworkInfo, SimIdentity
from costcontrol.l2_use_cases.load_operator_config_use_case import LoadOperatorConfigUseCase
from costcontrol.l2_use_cases.ports.sync_channel import SyncChannel
from costcontrol.l3_interface_adapters.controllers.config_manager import ConfigManager

TEST_ICCID = '8934071100000000001'

OPERATOR_FILES = {
    'index.yaml': "'001_01': test_network\n'214_07': other_network\n",
    'default/config.yaml': 'provider: ""\nis_free: true\n',
    'test_network/config.yaml': (
        'provider: Test Network\n'
        'plantype: prepaid\n'
        'is_free: false\n'
        'credit:\n  currency: EUR\n'
        'balance:\n  destination: "8000"\n'
    ),
    'other_network/config.yaml': 'provider: Other\nplantype: postpaid\n',
}

# --- Protocol-conforming Fakes ---


class FakeSettingsStore:
    """In-memory SettingsStore recording every call."""

    def __init__(self, items: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(items or {})
        self.get_calls: list[str] = []
        self.set_calls: list[tuple[str, str]] = []
        self.fail_writes = False

    async def get_item(self, key: str) -> str | None:
        self.get_calls.append(key)
        return self.items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise OSError('disk full')
        self.set_calls.append((key, value))
        self.items[key] = value


class FakeResourceLoader:
    """ResourceLoader serving text from a dict."""

    def __init__(self, files: dict[str, str] | None = None) -> None:
        self.files = dict(OPERATOR_FILES if files is None else files)
        self.fetch_calls: list[str] = []

    async def fetch_text(self, path: str) -> str:
        self.fetch_calls.append(path)
        if path not in self.files:
            raise FileNotFoundError(path)
        return self.files[path]


class FakeIdentityResolver:
    """IdentityResolver returning a settable identity."""

    def __init__(self, identity: SimIdentity) -> None:
        self.identity = identity
        self.calls = 0

    async def get_active_identity(self) -> SimIdentity:
        self.calls += 1
        return self.identity


def make_identity(icc_id: str | None = TEST_ICCID, mcc: str = '001', mnc: str = '01') -> SimIdentity:
    return SimIdentity(icc_id=icc_id, network=NetworkInfo(mcc=mcc, mnc=mnc))


class ObserverSpy:
    """Observer callback recording (value, old_value, name, settings) calls."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def __call__(self, value, old_value, name, settings) -> None:
        self.calls.append((value, old_value, name, settings))


# --- Standard Fixtures ---


@pytest.fixture
def identity() -> SimIdentity:
    return make_identity()


@pytest.fixture
def fake_store() -> FakeSettingsStore:
    return FakeSettingsStore()


@pytest.fixture
def fake_resources() -> FakeResourceLoader:
    return FakeResourceLoader()


@pytest.fixture
def fake_identity(identity: SimIdentity) -> FakeIdentityResolver:
    return FakeIdentityResolver(identity)


@pytest.fixture
def config_loader(fake_resources: FakeResourceLoader) -> LoadOperatorConfigUseCase:
    return LoadOperatorConfigUseCase(fake_resources)


@pytest.fixture
def make_manager(
    config_loader: LoadOperatorConfigUseCase,
    fake_store: FakeSettingsStore,
    fake_identity: FakeIdentityResolver,
) -> Callable[..., ConfigManager]:
    """Factory for managers sharing one loader, store and identity unless overridden."""

    def _make(sync_channel: SyncChannel | None = None, **overrides) -> ConfigManager:
        return ConfigManager(
            config_loader=overrides.get('config_loader', config_loader),
            store=overrides.get('store', fake_store),
            identity_resolver=overrides.get('identity_resolver', fake_identity),
            sync_channel=sync_channel,
        )

    return _make


@pytest.fixture
def manager(make_manager) -> ConfigManager:
    return make_manager()


@pytest.fixture
def spy() -> ObserverSpy:
    return ObserverSpy()
