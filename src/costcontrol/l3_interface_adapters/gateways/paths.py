"""Shared path constants for configuration, operator overrides and data."""

from __future__ import annotations

from platformdirs import user_config_path, user_data_path

CONFIG_DIR = user_config_path('costcontrol')
USER_OPERATORS_DIR = CONFIG_DIR / 'operators'

DATA_DIR = user_data_path('costcontrol')
SETTINGS_SUBDIR = 'settings'
SYNC_FILE_NAME = 'sync'

DEFAULT_CONFIG_PATHS = [
    CONFIG_DIR / 'config.yaml',
    CONFIG_DIR / 'config.yml',
]
