"""Tests for the Settings entity and the default table."""

from __future__ import annotations

from datetime import datetime

import pytest
from pydantic import ValidationError

from costcontrol.l1_entities.errors import UnknownSettingError
from costcontrol.l1_entities.settings import (
    DEFAULT_SETTINGS,
    SETTING_NAMES,
    Settings,
    default_settings,
    default_value,
    resolve_setting_name,
)


class TestDefaults:
    def test_default_table_covers_every_field(self):
        assert set(DEFAULT_SETTINGS) == SETTING_NAMES

    def test_default_settings_values(self):
        settings = default_settings()
        assert settings.data_limit is False
        assert settings.data_limit_value == 1
        assert settings.data_limit_unit == 'GB'
        assert settings.plantype == 'postpaid'
        assert settings.tracking_period == 'monthly'
        assert isinstance(settings.last_data_reset, datetime)

    def test_default_settings_do_not_share_nested_objects(self):
        first = default_settings()
        second = default_settings()
        first.errors['BALANCE_TIMEOUT'] = True
        first.last_data_usage['wifi']['total'] = 42
        assert second.errors['BALANCE_TIMEOUT'] is False
        assert second.last_data_usage['wifi']['total'] == 0
        assert DEFAULT_SETTINGS['last_data_usage']['wifi']['total'] == 0

    def test_default_value_is_a_deep_copy(self):
        usage = default_value('last_data_usage')
        usage['mobile']['apps']['browser'] = 10
        assert DEFAULT_SETTINGS['last_data_usage']['mobile']['apps'] == {}

    def test_default_value_accepts_alias(self):
        assert default_value('dataLimitUnit') == 'GB'

    def test_default_value_unknown_name(self):
        with pytest.raises(UnknownSettingError):
            default_value('nope')


class TestNames:
    def test_field_name_resolves_to_itself(self):
        assert resolve_setting_name('data_limit') == 'data_limit'

    def test_camel_case_alias_resolves(self):
        assert resolve_setting_name('dataLimit') == 'data_limit'
        assert resolve_setting_name('isWifiChartVisible') == 'is_wifi_chart_visible'

    def test_unknown_name_raises(self):
        with pytest.raises(UnknownSettingError):
            resolve_setting_name('dataLimits')

    def test_unknown_setting_error_is_key_error(self):
        assert issubclass(UnknownSettingError, KeyError)


class TestSettingsModel:
    def test_getitem_by_either_spelling(self):
        settings = default_settings()
        assert settings['fte'] is True
        assert settings['dataLimitUnit'] == settings['data_limit_unit']

    def test_dump_by_alias_uses_camel_case(self):
        dumped = default_settings().model_dump(by_alias=True)
        assert 'dataLimit' in dumped
        assert 'lastCompleteDataReset' in dumped
        assert 'data_limit' not in dumped

    def test_assignment_is_validated(self):
        settings = default_settings()
        with pytest.raises(ValidationError):
            settings.reset_time = 'tomorrow'

    def test_extra_fields_rejected(self):
        data = dict(DEFAULT_SETTINGS, surprise=True)
        with pytest.raises(ValidationError):
            Settings.model_validate(data)

    def test_low_limit_threshold_accepts_number_or_false(self):
        settings = default_settings()
        assert settings.low_limit_threshold is False
        settings.low_limit_threshold = 2.5
        assert settings.low_limit_threshold == 2.5

    def test_numeric_values_keep_their_type(self):
        settings = default_settings()
        settings.data_limit_value = 5
        assert type(settings.data_limit_value) is int
        settings.data_limit_value = 2.5
        assert settings.data_limit_value == 2.5
        settings.low_limit_threshold = 3
        assert type(settings.low_limit_threshold) is int
