"""Tests for the Flask JSON interface."""

import pytest

from web.app import app


@pytest.fixture
def client(dictionary, monkeypatch):
    monkeypatch.setitem(app.config, 'DICTIONARY', dictionary)
    monkeypatch.setitem(app.config, 'DEFAULT_ROLE', None)
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


class TestWebApp:

    def test_window(self, client):
        resp = client.get('/meta/window/W1?role=R')
        assert resp.status_code == 200
        assert resp.get_json()['id'] == 'W1'

    def test_role_and_language_headers(self, client):
        resp = client.get('/meta/window/W1', headers={'X-Role': 'R', 'X-Language': 'es_ES'})
        assert resp.get_json()['name'] == 'Pedido de venta'

    def test_missing_role(self, client):
        resp = client.get('/meta/menu')
        assert resp.status_code == 400
        assert 'role' in resp.get_json()['error']

    def test_unauthorized(self, client):
        resp = client.get('/meta/window/W1?role=R2&roleName=Guest')
        assert resp.status_code == 403
        assert resp.get_json() == {'error': "Role 'Guest' has no access to W1"}

    def test_not_found(self, client):
        resp = client.get('/meta/process/NOPE?role=R')
        assert resp.status_code == 404

    def test_default_role(self, client, monkeypatch):
        monkeypatch.setitem(app.config, 'DEFAULT_ROLE', 'R')
        resp = client.get('/meta/menu')
        assert resp.status_code == 200
        assert resp.get_json()['menu'][0]['id'] == 'M_SALES'

    def test_toolbar_new_record(self, client):
        resp = client.get('/meta/toolbar/W1?role=R&isNew=true&tabId=T1')
        toolbar = resp.get_json()
        assert toolbar['isNew'] is True
        assert toolbar['tabId'] == 'T1'
        delete = next(b for b in toolbar['buttons'] if b['id'] == 'DELETE')
        assert delete['enabled'] is False

    def test_session(self, client):
        resp = client.get('/meta/session?role=R&user=U1')
        assert resp.get_json()['user']['username'] == 'alice'

    def test_labels_and_languages(self, client):
        assert client.get('/meta/labels?role=R').get_json()['OBUIAPP_SaveRow'] == 'Save'
        assert list(client.get('/meta/language?role=R').get_json()) == ['en_US', 'es_ES']

    def test_report_and_process(self, client):
        resp = client.get('/meta/report-and-process/LP1?role=R')
        assert resp.status_code == 200
        assert resp.get_json()['id'] == 'LP1'
