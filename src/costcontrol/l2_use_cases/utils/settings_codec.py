"""JSON codec for settings blobs and sync messages.

Dates are written as ``{"__date__": "<ISO-8601>"}`` and revived on decode;
every other value passes through unchanged.
"""

from __future__ import annotations

import copy
import json
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from costcontrol.l1_entities.change_event import ChangeEvent, SyncMessage
from costcontrol.l1_entities.errors import SettingsDecodeError, UnknownSettingError
from costcontrol.l1_entities.settings import DEFAULT_SETTINGS, Settings, resolve_setting_name

DATE_TAG = '__date__'


def to_tagged(value: Any) -> Any:
    """Recursively replace datetimes with tagged wrapper objects."""
    if isinstance(value, datetime):
        return {DATE_TAG: value.isoformat()}
    if isinstance(value, dict):
        return {k: to_tagged(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_tagged(v) for v in value]
    return value


def _revive(obj: dict) -> Any:
    if DATE_TAG not in obj:
        return obj
    # UTC timestamps may carry a trailing 'Z'
    return datetime.fromisoformat(obj[DATE_TAG].replace('Z', '+00:00'))


def loads_tagged(text: str) -> Any:
    return json.loads(text, object_hook=_revive)


def encode_settings(settings: Settings) -> str:
    return json.dumps(to_tagged(settings.model_dump(by_alias=True)))


def _field_name(key: str) -> str:
    try:
        return resolve_setting_name(key)
    except UnknownSettingError:
        return key  # rejected by validation


def decode_settings(text: str) -> Settings:
    """Decode a stored blob. Raises SettingsDecodeError on any malformed input.

    Keys missing from the blob take their value from DEFAULT_SETTINGS, so
    records written before a setting existed keep the values they do hold.
    """
    try:
        data = loads_tagged(text)
    except (ValueError, TypeError, AttributeError) as e:
        raise SettingsDecodeError(f'Malformed settings blob: {e}') from e
    if not isinstance(data, dict):
        raise SettingsDecodeError(f'Expected a JSON object, got {type(data).__name__}')
    merged = copy.deepcopy(DEFAULT_SETTINGS)
    for key, value in data.items():
        merged[_field_name(key)] = value
    try:
        return Settings.model_validate(merged)
    except ValidationError as e:
        raise SettingsDecodeError(f'Invalid settings: {e.error_count()} error(s)') from e


def encode_sync_message(message: SyncMessage) -> str:
    event = message.event
    return json.dumps(
        {
            'key': 'sync',
            'origin': message.origin,
            'token': message.token,
            'name': event.name,
            'value': to_tagged(event.value),
            'oldValue': to_tagged(event.old_value),
            'settings': to_tagged(event.settings.model_dump(by_alias=True)) if event.settings else None,
        }
    )


def decode_sync_message(text: str) -> SyncMessage:
    try:
        data = loads_tagged(text)
        settings = Settings.model_validate(data['settings']) if data.get('settings') else None
        event = ChangeEvent(
            name=data['name'],
            value=data.get('value'),
            old_value=data.get('oldValue'),
            settings=settings,
        )
        return SyncMessage(origin=data['origin'], event=event, token=data['token'])
    except (ValueError, TypeError, KeyError, AttributeError) as e:
        raise SettingsDecodeError(f'Malformed sync message: {e}') from e
