"""ConfigManager — operator configuration and per-SIM settings for one execution context."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from costcontrol.l1_entities.change_event import ChangeEvent, SyncMessage
from costcontrol.l1_entities.errors import SettingsDecodeError
from costcontrol.l1_entities.identity import SimIdentity, storage_key
from costcontrol.l1_entities.operator_config import DATA_USAGE_ONLY, OperatorConfiguration
from costcontrol.l1_entities.session import ConfigSession
from costcontrol.l1_entities.settings import (
    SETTING_NAMES,
    Settings,
    default_settings,
    resolve_setting_name,
)
from costcontrol.l1_entities.settings import default_value as _default_value
from costcontrol.l2_use_cases.change_notifier import ChangeNotifier
from costcontrol.l2_use_cases.load_operator_config_use_case import LoadOperatorConfigUseCase
from costcontrol.l2_use_cases.observer_registry import Observer, ObserverRegistry
from costcontrol.l2_use_cases.ports.identity_resolver import IdentityResolver
from costcontrol.l2_use_cases.ports.settings_store import SettingsStore
from costcontrol.l2_use_cases.ports.sync_channel import SyncChannel
from costcontrol.l2_use_cases.utils.settings_codec import decode_settings, encode_settings

log = logging.getLogger('costcontrol.settings')

_UNSET: Any = object()


@dataclass(frozen=True)
class CostControlState:
    """Everything request_all() resolves: operator configuration, settings, and the SIM they belong to."""

    configuration: OperatorConfiguration
    settings: Settings
    icc_id: str | None


class ConfigManager:
    """Loads, caches and updates configuration and settings; notifies observers.

    The asynchronous methods are the source of truth. ``option``, ``observe``
    and ``configuration`` are the synchronous, cached interface: call
    ``request_all`` or ``request_settings`` once before relying on them.
    """

    def __init__(
        self,
        config_loader: LoadOperatorConfigUseCase,
        store: SettingsStore,
        identity_resolver: IdentityResolver,
        sync_channel: SyncChannel | None = None,
        session: ConfigSession | None = None,
    ) -> None:
        self._config_loader = config_loader
        self._store = store
        self._identity = identity_resolver
        self.session = session or ConfigSession()

        self._registry = ObserverRegistry()
        self._notifier = ChangeNotifier(sync_channel)
        self._notifier.subscribe(self._registry.dispatch)
        if sync_channel is not None:
            sync_channel.subscribe(self._on_sync)

        self._pending: set[asyncio.Task] = set()

    # --- Configuration ---

    @property
    def configuration(self) -> OperatorConfiguration | None:
        """Loaded operator configuration; never changes once set."""
        return self.session.configuration

    @property
    def notifier(self) -> ChangeNotifier:
        """Change events of this context, local and relayed, before observer filtering.

        Subscribers get every ChangeEvent; ``notifier.channel`` is the sync
        channel the context publishes to and listens on.
        """
        return self._notifier

    def provide_configuration(self, configuration: OperatorConfiguration) -> None:
        """Register the session's configuration. Ignored once a configuration is set."""
        current = self.session.configuration
        if current is not None:
            if current is not configuration:
                log.warning('Configuration already set for this session, ignoring replacement')
            return
        self.session.configuration = configuration
        log.debug('Provider configuration done!')

    async def request_configuration(self, identity: SimIdentity | None) -> OperatorConfiguration | None:
        """Resolve and load the operator configuration for *identity*.

        Returns None, after logging, when the identity carries no network info.
        """
        if identity is None or identity.network is None:
            log.error('No network info available for the data SIM')
            return None

        if self.session.configuration is not None:
            return self.session.configuration

        resolution = await self._config_loader.execute(identity.network)
        self.session.no_config_found = resolution.no_config_found
        self.provide_configuration(resolution.configuration)
        return self.session.configuration

    def get_application_mode(self) -> str:
        if self.session.no_config_found:
            return DATA_USAGE_ONLY
        plantype = self.session.configuration.plantype if self.session.configuration else None
        if plantype is None and self.session.settings is not None:
            plantype = self.session.settings.plantype
        return (plantype or '').upper()

    # --- Settings ---

    async def request_settings(self, icc_id: str | None) -> Settings:
        """Load settings for *icc_id*, storing a copy of the defaults on first use."""
        key = storage_key(icc_id)
        raw = await self._store.get_item(key)

        settings: Settings | None = None
        if raw is not None:
            try:
                settings = decode_settings(raw)
            except SettingsDecodeError as e:
                log.warning('Discarding unreadable settings for %s: %s', key, e)

        if settings is None:
            settings = default_settings()
            log.debug('Storing default settings for ICCID: %s', key)
            await self._store.set_item(key, encode_settings(settings))
        self._activate(key, settings)
        return settings

    async def request_all(self) -> CostControlState | None:
        """Vendor configuration plus settings for the active SIM."""
        identity = await self._identity.get_active_identity()
        if identity.network is None:
            log.error('No network info available for the data SIM')
            return None

        configuration, settings = await asyncio.gather(
            self.request_configuration(identity),
            self.request_settings(identity.icc_id),
        )
        return CostControlState(configuration=configuration, settings=settings, icc_id=identity.icc_id)

    async def set_option(self, options: Mapping[str, Any]) -> None:
        """Update settings, persist, re-read, and emit one ChangeEvent per option.

        Unknown names and invalid values are rejected before anything changes.
        Concurrent calls are not coordinated: the last store write wins.
        """
        identity = await self._identity.get_active_identity()
        if self.session.settings is None:
            await self.request_settings(identity.icc_id)
            loaded_key = self.session.identity_key
            identity = await self._identity.get_active_identity()
            if storage_key(identity.icc_id) != loaded_key:
                log.warning(
                    'Active SIM changed from %s to %s while loading settings',
                    loaded_key,
                    storage_key(identity.icc_id),
                )

        updates = {resolve_setting_name(name): value for name, value in options.items()}
        current = self.session.settings
        former = {name: getattr(current, name) for name in updates}
        # the cache only changes through the re-read below, after the write succeeded
        settings = Settings.model_validate({**current.model_dump(), **updates})

        key = storage_key(identity.icc_id)
        await self._store.set_item(key, encode_settings(settings))
        fresh = await self.request_settings(identity.icc_id)

        for name in updates:
            await self._notifier.emit(
                ChangeEvent(name=name, value=getattr(fresh, name), old_value=former[name], settings=fresh)
            )

    def option(self, name: str, value: Any = _UNSET) -> Any:
        """Cached getter; with *value*, schedules set_option and returns the previous value."""
        field = resolve_setting_name(name)
        settings = self.session.settings
        old_value = getattr(settings, field) if settings is not None else None
        if value is _UNSET:
            return old_value

        task = asyncio.get_running_loop().create_task(self.set_option({field: value}))
        self._pending.add(task)
        task.add_done_callback(self._on_option_done)
        return old_value

    async def flush(self) -> None:
        """Wait for every update scheduled through option()."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    def default_value(self, name: str) -> Any:
        return _default_value(name)

    # --- Observers ---

    def observe(self, name: str, callback: Observer, skip_initial_call: bool = False) -> None:
        """Call *callback* whenever *name* changes, and once now unless *skip_initial_call*."""
        field = resolve_setting_name(name)
        log.debug('Installing observer for %s', field)
        if not self._registry.add(field, callback):
            return
        if not skip_initial_call:
            settings = self.session.settings
            value = getattr(settings, field) if settings is not None else None
            callback(value, None, field, settings)

    def remove_observer(self, name: str, callback: Observer) -> None:
        self._registry.remove(resolve_setting_name(name), callback)

    # --- Internals ---

    def _activate(self, key: str, settings: Settings) -> None:
        self.session.settings = settings
        self.session.identity_key = key

    def _on_option_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if not task.cancelled() and task.exception() is not None:
            log.error('Deferred option update failed', exc_info=task.exception())

    async def _on_sync(self, message: SyncMessage) -> None:
        name = message.event.name
        if name not in SETTING_NAMES:
            log.warning('Ignoring synchronization request for unknown option %r', name)
            return

        settings = self.session.settings
        old_value = getattr(settings, name) if settings is not None else None
        log.debug('Synchronization request for %s received!', name)

        identity = await self._identity.get_active_identity()
        fresh = await self.request_settings(identity.icc_id)
        await self._notifier.emit(
            ChangeEvent(name=name, value=getattr(fresh, name), old_value=old_value, settings=fresh),
            relay=False,
        )
