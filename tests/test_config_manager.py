from pathlib import Path

import pytest

from tinyclaw.config.manager import ConfigManager


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path: Path):
    for var in ConfigManager.ENV_MAPPINGS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


def test_defaults_resolve_settings_under_home(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("TINYCLAW_HOME", str(tmp_path / "home"))

    config = ConfigManager().load()

    assert config.settings_path == tmp_path / "home" / "settings.json"
    assert config.docs_filename == "AGENTS.md"
    assert config.debug is False


def test_yaml_file_then_env_overrides(monkeypatch, tmp_path: Path):
    cfg = tmp_path / "tinyclaw.yaml"
    cfg.write_text(
        "\n".join(
            [
                "paths:",
                f"  settings_file: {tmp_path / 'from_yaml.json'}",
                "docs:",
                "  filename: CLAUDE.md",
                "",
            ]
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("TINYCLAW_LOG_LEVEL", "debug")
    monkeypatch.setenv("TINYCLAW_DEBUG", "true")

    config = ConfigManager(str(cfg)).load()

    assert config.settings_path == tmp_path / "from_yaml.json"
    assert config.docs_filename == "CLAUDE.md"
    assert config.get("logging.level") == "DEBUG"
    assert config.debug is True

    monkeypatch.setenv("TINYCLAW_SETTINGS_FILE", str(tmp_path / "from_env.json"))
    assert ConfigManager(str(cfg)).load().settings_path == tmp_path / "from_env.json"


def test_dotenv_is_loaded(tmp_path: Path):
    (tmp_path / ".env").write_text("TINYCLAW_DOCS_FILENAME=TEAM.md\n", encoding="utf-8")

    assert ConfigManager().load().docs_filename == "TEAM.md"


def test_missing_config_file_is_an_error(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        ConfigManager(str(tmp_path / "nope.yaml")).load()


def test_get_and_set_dot_notation():
    config = ConfigManager()
    config.set("paths.settings_file", "/tmp/s.json")
    config.set("extra.nested.key", 3)

    assert config.get("paths.settings_file") == "/tmp/s.json"
    assert config.get("extra.nested.key") == 3
    assert config.get("extra.missing", "x") == "x"
    assert config.all["paths"]["home"] == "~/.tinyclaw"
