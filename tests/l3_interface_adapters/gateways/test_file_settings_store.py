"""Tests for FileSettingsStore."""

from __future__ import annotations

from pathlib import Path

import pytest

from costcontrol.l3_interface_adapters.gateways.file_settings_store import FileSettingsStore


class TestFileSettingsStore:
    def test_creates_directory(self, tmp_path: Path):
        directory = tmp_path / 'a' / 'settings'
        FileSettingsStore(directory)
        assert directory.is_dir()

    @pytest.mark.asyncio
    async def test_missing_key_returns_none(self, tmp_path: Path):
        assert await FileSettingsStore(tmp_path).get_item('unknown') is None

    @pytest.mark.asyncio
    async def test_set_then_get(self, tmp_path: Path):
        store = FileSettingsStore(tmp_path)
        await store.set_item('8934', '{"fte": true}')
        assert await store.get_item('8934') == '{"fte": true}'

    @pytest.mark.asyncio
    async def test_overwrite_leaves_no_temp_file(self, tmp_path: Path):
        store = FileSettingsStore(tmp_path)
        await store.set_item('k', 'one')
        await store.set_item('k', 'two')
        assert await store.get_item('k') == 'two'
        assert sorted(p.name for p in tmp_path.iterdir()) == ['k.json']

    def test_keys_are_sanitized(self, tmp_path: Path):
        store = FileSettingsStore(tmp_path)
        path = store.path_for('../etc/passwd')
        assert path.parent == tmp_path
        assert path.name == '___etc_passwd.json'

    @pytest.mark.asyncio
    async def test_stores_are_shared_through_the_directory(self, tmp_path: Path):
        await FileSettingsStore(tmp_path).set_item('k', 'v')
        assert await FileSettingsStore(tmp_path).get_item('k') == 'v'
