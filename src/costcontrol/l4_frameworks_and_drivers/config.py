"""Application config defaults and the build_app_config factory."""

from __future__ import annotations

import copy

from costcontrol.l1_entities.config import AppConfig
from costcontrol.l3_interface_adapters.gateways.yaml_config_loader import deep_merge

APP_CONFIG_DEFAULTS: dict = {
    'storage': {
        'directory': None,
    },
    'operators': {
        'directory': None,
    },
    'sim': {
        'icc_id': None,
        'mcc': None,
        'mnc': None,
    },
    'sync': {
        'poll_interval': 1.0,
    },
}


def build_app_config(raw: dict) -> AppConfig:
    """Merge *raw* user overrides on top of defaults, then validate."""
    merged = copy.deepcopy(APP_CONFIG_DEFAULTS)
    deep_merge(merged, raw)
    return AppConfig.model_validate(merged)
