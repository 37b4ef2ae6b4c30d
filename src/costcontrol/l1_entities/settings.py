"""Settings entity and the default settings table."""

from __future__ import annotations

import copy
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from costcontrol.l1_entities.errors import UnknownSettingError

_TODAY = datetime.now(timezone.utc)

DEFAULT_SETTINGS: dict[str, Any] = {
    'data_limit': False,
    'data_limit_value': 1,
    'data_limit_unit': 'GB',
    'errors': {
        'INCORRECT_TOPUP_CODE': False,
        'BALANCE_TIMEOUT': False,
        'TOPUP_TIMEOUT': False,
    },
    'fte': True,
    'waiting_for_balance': None,
    'waiting_for_top_up': None,
    'last_balance': None,
    'last_balance_request': None,
    'last_top_up_request': None,
    'last_data_usage': {
        'timestamp': _TODAY,
        'start': _TODAY,
        'end': _TODAY,
        'today': _TODAY,
        'wifi': {'apps': {}, 'total': 0},
        'mobile': {'apps': {}, 'total': 0},
    },
    'last_telephony_activity': {
        'timestamp': _TODAY,
        'calltime': 0,
        'smscount': 0,
    },
    'last_telephony_reset': _TODAY,
    'last_data_reset': _TODAY,
    'last_complete_data_reset': _TODAY,
    'low_limit': False,
    'low_limit_threshold': False,
    'low_limit_notified': False,
    'zero_balance_notified': False,
    'data_usage_notified': False,
    'next_reset': None,
    'plantype': 'postpaid',
    'reset_time': 1,
    'tracking_period': 'monthly',
    'is_mobile_chart_visible': True,
    'is_wifi_chart_visible': False,
}


class Settings(BaseModel):
    """User settings for one SIM.

    Field names are snake_case; the persisted form uses camelCase aliases
    (``dataLimit``, ``lastDataUsage``, ...). Both spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        extra='forbid',
    )

    data_limit: bool
    data_limit_value: int | float
    data_limit_unit: str
    errors: dict[str, bool]
    fte: bool
    waiting_for_balance: datetime | None
    waiting_for_top_up: datetime | None
    last_balance: dict[str, Any] | None
    last_balance_request: datetime | None
    last_top_up_request: datetime | None
    last_data_usage: dict[str, Any]
    last_telephony_activity: dict[str, Any]
    last_telephony_reset: datetime
    last_data_reset: datetime
    last_complete_data_reset: datetime
    low_limit: bool
    low_limit_threshold: int | float | bool
    low_limit_notified: bool
    zero_balance_notified: bool
    data_usage_notified: bool
    next_reset: datetime | None
    plantype: str
    reset_time: int
    tracking_period: str
    is_mobile_chart_visible: bool
    is_wifi_chart_visible: bool

    def __getitem__(self, name: str) -> Any:
        return getattr(self, resolve_setting_name(name))


_NAME_INDEX: dict[str, str] = {}
for _field_name, _info in Settings.model_fields.items():
    _NAME_INDEX[_field_name] = _field_name
    if _info.alias:
        _NAME_INDEX[_info.alias] = _field_name

SETTING_NAMES = frozenset(Settings.model_fields)


def resolve_setting_name(name: str) -> str:
    """Map a field name or its camelCase alias to the field name."""
    try:
        return _NAME_INDEX[name]
    except KeyError:
        raise UnknownSettingError(name) from None


def default_value(name: str) -> Any:
    """Deep copy of the default for *name*."""
    return copy.deepcopy(DEFAULT_SETTINGS[resolve_setting_name(name)])


def default_settings() -> Settings:
    """Fresh Settings built from a deep copy of the default table."""
    return Settings.model_validate(copy.deepcopy(DEFAULT_SETTINGS))
