"""Use case: resolve a network identity to an operator configuration and load it."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

import yaml

from costcontrol.l1_entities.identity import NetworkInfo
from costcontrol.l1_entities.operator_config import OperatorConfiguration
from costcontrol.l2_use_cases.ports.resource_loader import ResourceLoader

log = logging.getLogger('costcontrol.config')

INDEX_PATH = 'index.yaml'
DEFAULT_DIRECTORY = 'default'


def config_file_path(directory: str) -> str:
    return f'{directory}/config.yaml'


@dataclass(frozen=True)
class ConfigResolution:
    """Outcome of one resolution: the configuration, where it came from, and whether the index matched."""

    configuration: OperatorConfiguration
    path: str
    no_config_found: bool


class LoadOperatorConfigUseCase:
    """Index lookup → resource path → cached configuration.

    One instance is shared by every session of a process: the index is
    fetched once and configurations are cached by resource path.
    """

    def __init__(self, resources: ResourceLoader) -> None:
        self._resources = resources
        self._index: dict[str, str] | None = None
        self._cache: dict[str, OperatorConfiguration] = {}
        self._lock = asyncio.Lock()

    @property
    def index(self) -> dict[str, str] | None:
        return self._index

    def cached(self, path: str) -> OperatorConfiguration | None:
        return self._cache.get(path)

    async def execute(self, network: NetworkInfo) -> ConfigResolution:
        async with self._lock:
            index = await self._ensure_index()
            directory = index.get(network.key)
            no_config_found = directory is None
            if no_config_found:
                log.info('No operator entry for %s, using default configuration', network.key)
                directory = DEFAULT_DIRECTORY

            path = config_file_path(directory)
            configuration = self._cache.get(path)
            if configuration is None:
                configuration = await self._load(path)
                self._cache[path] = configuration
            else:
                log.debug('Configuration cache hit for %s', path)
            return ConfigResolution(configuration=configuration, path=path, no_config_found=no_config_found)

    async def _ensure_index(self) -> dict[str, str]:
        if self._index is not None:
            return self._index
        try:
            raw = yaml.safe_load(await self._resources.fetch_text(INDEX_PATH))
        except Exception as e:
            log.error('Error loading the configuration index: %s: %s', type(e).__name__, e)
            raw = {}
        if not isinstance(raw, dict):
            if raw is not None:
                log.error('Configuration index is not a mapping (got %s), ignoring it', type(raw).__name__)
            else:
                log.error('Configuration index is empty')
            raw = {}
        self._index = {str(k): str(v) for k, v in raw.items()}
        log.debug('Configuration index loaded with %d entries', len(self._index))
        return self._index

    async def _load(self, path: str) -> OperatorConfiguration:
        text = await self._resources.fetch_text(path)
        configuration = OperatorConfiguration.model_validate(yaml.safe_load(text) or {})
        log.info('Loaded operator configuration %s (provider=%r)', path, configuration.provider)
        return configuration
