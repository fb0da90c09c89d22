"""Integration tests for the command-line entry point."""

import json
import os
import sys

import pytest

from ui_metadata.cli import main


def run_cli(monkeypatch, *argv):
    monkeypatch.setattr(sys, 'argv', ['ui-metadata', *argv])
    main()


class TestCLI:
    """End-to-end runs against a snapshot file."""

    def test_window_to_stdout(self, snapshot_file, monkeypatch, capsys):
        run_cli(monkeypatch, 'window', snapshot_file, 'W1', '--role', 'R')
        doc = json.loads(capsys.readouterr().out)
        assert doc['id'] == 'W1'
        assert [t['id'] for t in doc['tabs']] == ['T0']
        assert 'documentNo' in doc['tabs'][0]['fields']

    def test_window_without_audit_fields(self, snapshot_file, monkeypatch, capsys):
        run_cli(monkeypatch, 'window', snapshot_file, 'W1', '--role', 'R', '--no-audit')
        fields = json.loads(capsys.readouterr().out)['tabs'][0]['fields']
        assert list(fields) == ['documentNo']

    def test_output_file(self, snapshot_file, monkeypatch, tmp_path):
        output = str(tmp_path / 'out' / 'w1.json')
        run_cli(monkeypatch, 'window', snapshot_file, 'W1', '--role', 'R', '--output', output)
        with open(output, encoding='utf-8') as f:
            assert json.load(f)['id'] == 'W1'

    def test_labels_in_language(self, snapshot_file, monkeypatch, capsys):
        run_cli(monkeypatch, 'labels', snapshot_file, '--role', 'R', '--language', 'es_ES')
        assert json.loads(capsys.readouterr().out) == {'OBUIAPP_NewDoc': 'Nuevo'}

    def test_windows_dump(self, snapshot_file, monkeypatch, capsys, tmp_path):
        output_dir = str(tmp_path / 'dump')
        run_cli(monkeypatch, 'windows', snapshot_file, output_dir, '--role', 'R')
        assert 'Wrote 1 windows' in capsys.readouterr().out
        assert os.path.isfile(os.path.join(output_dir, 'windows', 'W1.json'))
        assert os.path.isfile(os.path.join(output_dir, 'manifest.json'))

    def test_unauthorized_role_exits(self, snapshot_file, monkeypatch, capsys):
        with pytest.raises(SystemExit) as exc:
            run_cli(monkeypatch, 'window', snapshot_file, 'W1', '--role', 'OTHER', '--role-name', 'Guest')
        assert exc.value.code == 1
        assert "Role 'Guest' has no access to W1" in capsys.readouterr().err

    def test_missing_snapshot_exits(self, monkeypatch, capsys, tmp_path):
        with pytest.raises(SystemExit):
            run_cli(monkeypatch, 'menu', str(tmp_path / 'nope.json'), '--role', 'R')
        assert 'not found' in capsys.readouterr().err

    def test_kinds(self, monkeypatch, capsys):
        run_cli(monkeypatch, 'kinds')
        out = capsys.readouterr().out
        assert 'Window' in out
        assert 'MenuEntry' in out
