import json
from pathlib import Path

import pytest

from tinyclaw.cli.main import main
from tinyclaw.config.manager import ConfigManager
from tinyclaw.teams.docs import TEAM_BLOCK_START


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path: Path):
    for var in ConfigManager.ENV_MAPPINGS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


def _run(workspace, *argv):
    return main(["--settings", str(workspace["settings"]), "team", *argv])


def test_cli_list_empty(workspace, capsys):
    assert _run(workspace, "list") == 0
    assert "No teams configured." in capsys.readouterr().out


def test_cli_add_list_show(workspace, capsys):
    assert _run(workspace, "add", "Dev", "--agents", "coder, reviewer,ghost", "--name", "Dev Team") == 0
    out = capsys.readouterr()
    assert "Team 'dev' created!" in out.out
    assert "Leader:  @coder" in out.out
    assert "ghost" in out.err

    assert _run(workspace, "list") == 0
    out = capsys.readouterr().out
    assert "@dev - Dev Team" in out
    assert "Agents:  coder,reviewer" in out

    assert _run(workspace, "show", "dev") == 0
    out = capsys.readouterr().out
    payload = json.loads(out.split("\n", 2)[2])
    assert payload == {"name": "Dev Team", "agents": ["coder", "reviewer"], "leader_agent": "coder"}

    assert TEAM_BLOCK_START in workspace["docs"]["reviewer"].read_text(encoding="utf-8")


def test_cli_show_unknown_lists_available(workspace, capsys):
    _run(workspace, "add", "dev", "--agents", "coder,reviewer")
    capsys.readouterr()

    assert _run(workspace, "show", "ops") == 1
    err = capsys.readouterr().err
    assert "Team 'ops' not found." in err
    assert "@dev" in err


def test_cli_add_errors_exit_nonzero(workspace, capsys):
    assert _run(workspace, "add", "coder", "--agents", "coder,reviewer") == 1
    assert "share the same namespace" in capsys.readouterr().err

    assert _run(workspace, "add", "ops", "--agents", "coder,ghost") == 1
    assert "at least 2 valid agents" in capsys.readouterr().err


def test_cli_remove_prompts_for_confirmation(workspace, capsys, monkeypatch):
    _run(workspace, "add", "dev", "--agents", "coder,reviewer")
    capsys.readouterr()

    monkeypatch.setattr("builtins.input", lambda prompt: "n")
    assert _run(workspace, "remove", "dev") == 0
    assert "Cancelled." in capsys.readouterr().out
    assert "dev" in json.loads(workspace["settings"].read_text(encoding="utf-8"))["teams"]

    monkeypatch.setattr("builtins.input", lambda prompt: "y")
    assert _run(workspace, "remove", "dev") == 0
    assert "Team 'dev' removed." in capsys.readouterr().out
    assert json.loads(workspace["settings"].read_text(encoding="utf-8"))["teams"] == {}
    assert TEAM_BLOCK_START not in workspace["docs"]["coder"].read_text(encoding="utf-8")


def test_cli_remove_yes_flag_and_sync(workspace, capsys):
    _run(workspace, "add", "dev", "--agents", "coder,reviewer")
    workspace["docs"]["coder"].write_text("# Coder\n", encoding="utf-8")
    capsys.readouterr()

    assert _run(workspace, "sync") == 0
    assert "Updated 1 AGENTS.md file(s)." in capsys.readouterr().out

    assert _run(workspace, "remove", "dev", "--yes") == 0
    assert _run(workspace, "remove", "dev", "--yes") == 1


def test_cli_missing_settings(tmp_path: Path, capsys):
    assert main(["--settings", str(tmp_path / "none.json"), "team", "list"]) == 1
    assert "No settings file found" in capsys.readouterr().err


def test_cli_lists_teams_with_non_string_fields(workspace, capsys):
    data = json.loads(workspace["settings"].read_text(encoding="utf-8"))
    data["teams"] = {"dev": {"name": 5, "agents": ["coder", "reviewer"], "leader_agent": None}}
    workspace["settings"].write_text(json.dumps(data), encoding="utf-8")

    assert _run(workspace, "list") == 0
    assert "@dev - 5" in capsys.readouterr().out
