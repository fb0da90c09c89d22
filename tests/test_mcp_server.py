"""Tests for the MCP server tools, called as plain functions."""

import pytest

from mcp_server import server
from mcp_server.datasource import LocalSnapshotSource
from ui_metadata.domain.enums import EntityKind


@pytest.fixture
def loaded(dictionary, monkeypatch):
    monkeypatch.setattr(server, '_repository', dictionary)
    monkeypatch.setattr(server, '_default_role', 'R')
    return dictionary


class TestTools:

    def test_list_windows(self, loaded):
        assert server.list_windows() == [{'id': 'W1', 'name': 'Sales Order'}]

    def test_list_windows_translated(self, loaded):
        assert server.list_windows(language='es_ES')[0]['name'] == 'Pedido de venta'

    def test_get_window(self, loaded):
        doc = server.get_window('W1')
        assert [t['id'] for t in doc['tabs']] == ['T0', 'T1']

    def test_get_window_unauthorized(self, loaded):
        result = server.get_window('W1', role_id='R2')
        assert result['status'] == 403

    def test_get_process(self, loaded):
        assert server.get_process('PD1')['id'] == 'PD1'
        assert server.get_process('NOPE')['status'] == 404

    def test_get_menu_and_toolbar(self, loaded):
        assert server.get_menu()['menu'][0]['id'] == 'M_SALES'
        toolbar = server.get_toolbar('W1', tab_id='T0')
        assert toolbar['buttons'][-1]['processId'] == 'PD1'

    def test_not_loaded(self, monkeypatch):
        monkeypatch.setattr(server, '_repository', None)
        with pytest.raises(RuntimeError):
            server.list_windows(role_id='R')

    def test_truncate(self):
        big = {'x': 'a' * 100}
        assert server._truncate(big, max_chars=50)['_truncated'] is True
        assert server._truncate(big) is big


class TestLocalSnapshotSource:

    def test_load(self, snapshot_file):
        source = LocalSnapshotSource(snapshot_file)
        assert source.load().count(EntityKind.WINDOW) == 1
        assert snapshot_file in source.describe()
