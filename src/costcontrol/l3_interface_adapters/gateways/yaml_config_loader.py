"""Gateway: YAML loader for the costcontrol config file."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from costcontrol.l3_interface_adapters.gateways.paths import DEFAULT_CONFIG_PATHS

log = logging.getLogger('costcontrol.config')

SIM_KEYS = ('icc_id', 'mcc', 'mnc')


class YamlConfigLoader:
    """Reads the user's config file into a raw dict for build_app_config().

    An explicit path must exist; without one the first existing default
    location is used, and no file at all means an empty config.
    """

    def __init__(self, search_paths: list[Path] | None = None) -> None:
        self._search_paths = list(search_paths) if search_paths is not None else list(DEFAULT_CONFIG_PATHS)

    def find(self, config_path: str | None = None) -> Path | None:
        if config_path is not None:
            path = Path(config_path)
            if not path.exists():
                raise FileNotFoundError(f'Config file not found: {path}')
            return path
        return next((p for p in self._search_paths if p.exists()), None)

    def load_raw(self, config_path: str | None = None, data_dir: str | None = None) -> dict:
        """Parsed config with *data_dir* applied over ``storage.directory``.

        Raises ValueError when the file is not a mapping or a SIM code was
        written unquoted (YAML reads ``001`` as the integer 1).
        """
        path = self.find(config_path)
        data: dict = {}
        if path is not None:
            data = yaml.safe_load(path.read_text(encoding='utf-8')) or {}
            if not isinstance(data, dict):
                raise ValueError(f'{path}: expected a mapping at the top level')
            log.debug('Loaded config from %s', path)
            _check_sim_codes(path, data.get('sim') or {})
        if data_dir:
            deep_merge(data, {'storage': {'directory': data_dir}})
        return data


def _check_sim_codes(path: Path, sim: dict) -> None:
    for key in SIM_KEYS:
        value = sim.get(key)
        if isinstance(value, int) and not isinstance(value, bool):
            raise ValueError(f'{path}: sim.{key} must be quoted, e.g. {key}: "{value}"')


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (mutates base)."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base
