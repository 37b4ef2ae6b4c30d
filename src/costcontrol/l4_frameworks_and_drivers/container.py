"""Dependency container — composition root for wiring all layers together."""

from __future__ import annotations

from pathlib import Path

from costcontrol.l1_entities.config import AppConfig
from costcontrol.l2_use_cases.load_operator_config_use_case import LoadOperatorConfigUseCase
from costcontrol.l2_use_cases.ports.identity_resolver import IdentityResolver
from costcontrol.l2_use_cases.ports.resource_loader import ResourceLoader
from costcontrol.l2_use_cases.ports.settings_store import SettingsStore
from costcontrol.l3_interface_adapters.controllers.config_manager import ConfigManager
from costcontrol.l3_interface_adapters.gateways.file_settings_store import FileSettingsStore
from costcontrol.l3_interface_adapters.gateways.file_sync_channel import FileSyncChannel
from costcontrol.l3_interface_adapters.gateways.operator_resource_loader import (
    BUILTIN_OPERATORS_DIR,
    OperatorResourceLoader,
)
from costcontrol.l3_interface_adapters.gateways.paths import (
    DATA_DIR,
    SETTINGS_SUBDIR,
    SYNC_FILE_NAME,
    USER_OPERATORS_DIR,
)
from costcontrol.l3_interface_adapters.gateways.static_identity_resolver import StaticIdentityResolver


class DependencyContainer:
    """Creates and wires all concrete instances. Easy to override for testing."""

    def __init__(self, config: AppConfig, data_dir: Path | None = None) -> None:
        self.config = config
        self.data_dir = data_dir or (Path(config.storage.directory) if config.storage.directory else DATA_DIR)

        self.store: SettingsStore = FileSettingsStore(self.data_dir / SETTINGS_SUBDIR)
        self.resources: ResourceLoader = OperatorResourceLoader(self._operator_roots(config))
        self.identity_resolver: IdentityResolver = StaticIdentityResolver.from_config(config.sim)
        self.sync_channel = FileSyncChannel(self.data_dir / SYNC_FILE_NAME)
        self.config_loader = LoadOperatorConfigUseCase(self.resources)

        self.manager = ConfigManager(
            config_loader=self.config_loader,
            store=self.store,
            identity_resolver=self.identity_resolver,
            sync_channel=self.sync_channel,
        )

    @staticmethod
    def _operator_roots(config: AppConfig) -> list:
        roots: list = []
        if config.operators.directory:
            roots.append(Path(config.operators.directory))
        if USER_OPERATORS_DIR.is_dir():
            roots.append(USER_OPERATORS_DIR)
        roots.append(BUILTIN_OPERATORS_DIR)
        return roots
