"""
Tests for the command-line interface.
"""

import json

import pytest

from ..cli import main
from .helpers import make_config


def _write(tmp_path, name, data):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestCLI:

    def test_dimensions(self, capsys):
        main(["dimensions", "2"])

        assert capsys.readouterr().out.strip() == "6"

    def test_validate_ok(self, tmp_path, capsys):
        main(["validate", _write(tmp_path, "config.json", make_config())])

        assert capsys.readouterr().out.strip() == "ok"

    def test_validate_errors(self, tmp_path, capsys):
        path = _write(tmp_path, "config.json", make_config(height=0, width=0))

        with pytest.raises(SystemExit) as excinfo:
            main(["validate", path])

        assert excinfo.value.code == 1
        assert "dimensions.height" in capsys.readouterr().out

    def test_placement_is_seeded(self, capsys):
        main(["placement", "3", "--at", "2023-09-08T05:00:00.000Z", "--seed", "7"])
        first = json.loads(capsys.readouterr().out)
        main(["placement", "3", "--at", "2023-09-08T05:00:00.000Z", "--seed", "7"])
        second = json.loads(capsys.readouterr().out)

        assert first == second
        assert [e["player"] for e in first] == [0, 1, 2]
        assert all(e["type"] == "PLACE" for e in first)

    def test_replay_nobody_placed(self, tmp_path, capsys):
        config_path = _write(tmp_path, "config.json", make_config())
        events_path = _write(tmp_path, "events.json", [])

        main(["replay", config_path, events_path, "--at", "2023-09-11T04:00:00.000Z"])

        state = json.loads(capsys.readouterr().out)
        assert state["winner"] == -1

    def test_replay_reports_rule_errors(self, tmp_path, capsys):
        config_path = _write(tmp_path, "config.json", make_config())
        events_path = _write(tmp_path, "events.json", [
            {"type": "MOVE", "submittedAt": "2023-09-08T05:00:00.000Z", "player": 0, "dir": "UP"},
        ])

        with pytest.raises(SystemExit) as excinfo:
            main(["replay", config_path, events_path, "--at", "2023-09-09T00:00:00.000Z"])

        assert excinfo.value.code == 1
        assert "not yet placed" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit):
            main(["validate", str(tmp_path / "missing.json")])

        assert "File not found" in capsys.readouterr().err

    def test_no_command_prints_help(self, capsys):
        with pytest.raises(SystemExit):
            main([])
