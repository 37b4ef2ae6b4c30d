"""Tests for LoadOperatorConfigUseCase — uses FakeResourceLoader."""

from __future__ import annotations

import pytest

from costcontrol.l1_entities.identity import NetworkInfo
from costcontrol.l2_use_cases.load_operator_config_use_case import (
    INDEX_PATH,
    LoadOperatorConfigUseCase,
    config_file_path,
)
from tests.conftest import OPERATOR_FILES, FakeResourceLoader

TEST_NETWORK = NetworkInfo(mcc='001', mnc='01')
UNKNOWN_NETWORK = NetworkInfo(mcc='999', mnc='99')


class TestResolution:
    @pytest.mark.asyncio
    async def test_known_network_loads_operator_file(self, config_loader):
        result = await config_loader.execute(TEST_NETWORK)

        assert result.path == 'test_network/config.yaml'
        assert result.no_config_found is False
        assert result.configuration.provider == 'Test Network'
        assert result.configuration.plantype == 'prepaid'
        assert result.configuration.get('balance') == {'destination': '8000'}

    @pytest.mark.asyncio
    async def test_unknown_network_falls_back_to_default(self, config_loader):
        result = await config_loader.execute(UNKNOWN_NETWORK)

        assert result.path == 'default/config.yaml'
        assert result.no_config_found is True

    def test_path_template(self):
        assert config_file_path('foo') == 'foo/config.yaml'


class TestCaching:
    @pytest.mark.asyncio
    async def test_second_resolution_does_not_refetch(self, config_loader, fake_resources):
        first = await config_loader.execute(TEST_NETWORK)
        second = await config_loader.execute(TEST_NETWORK)

        assert first.configuration is second.configuration
        assert fake_resources.fetch_calls.count('test_network/config.yaml') == 1

    @pytest.mark.asyncio
    async def test_index_fetched_once(self, config_loader, fake_resources):
        await config_loader.execute(TEST_NETWORK)
        await config_loader.execute(UNKNOWN_NETWORK)
        await config_loader.execute(NetworkInfo(mcc='214', mnc='07'))

        assert fake_resources.fetch_calls.count(INDEX_PATH) == 1
        assert config_loader.index == {'001_01': 'test_network', '214_07': 'other_network'}

    @pytest.mark.asyncio
    async def test_cache_is_keyed_by_path(self, config_loader, fake_resources):
        await config_loader.execute(UNKNOWN_NETWORK)
        await config_loader.execute(NetworkInfo(mcc='888', mnc='88'))

        assert fake_resources.fetch_calls.count('default/config.yaml') == 1
        assert config_loader.cached('default/config.yaml') is not None
        assert config_loader.cached('test_network/config.yaml') is None


class TestIndexUnavailable:
    @pytest.mark.asyncio
    async def test_missing_index_degrades_to_default(self, caplog):
        files = {k: v for k, v in OPERATOR_FILES.items() if k != INDEX_PATH}
        loader = LoadOperatorConfigUseCase(FakeResourceLoader(files))

        result = await loader.execute(TEST_NETWORK)

        assert result.no_config_found is True
        assert result.path == 'default/config.yaml'
        assert loader.index == {}
        assert 'Error loading the configuration index' in caplog.text

    @pytest.mark.asyncio
    async def test_failed_index_is_not_refetched(self):
        files = {k: v for k, v in OPERATOR_FILES.items() if k != INDEX_PATH}
        resources = FakeResourceLoader(files)
        loader = LoadOperatorConfigUseCase(resources)

        await loader.execute(TEST_NETWORK)
        await loader.execute(TEST_NETWORK)

        assert resources.fetch_calls.count(INDEX_PATH) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize('index_text', ['', 'null', '- a\n- b\n', 'just a string'])
    async def test_unusable_index_treated_as_empty(self, index_text):
        files = dict(OPERATOR_FILES)
        files[INDEX_PATH] = index_text
        loader = LoadOperatorConfigUseCase(FakeResourceLoader(files))

        result = await loader.execute(TEST_NETWORK)

        assert result.no_config_found is True
        assert loader.index == {}
