from pathlib import Path

import config


def _write_config(path: Path, text: str) -> None:
    path.write_text(text, encoding="utf-8")


def test_load_config_copies_example_on_first_run(tmp_path, monkeypatch):
    config_dir = tmp_path / ".langstep"
    config_path = config_dir / "config.toml"
    monkeypatch.setattr(config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config, "CONFIG_PATH", config_path)
    monkeypatch.delenv("LANGSTEP_PORT", raising=False)
    monkeypatch.delenv("LANGSTEP_ENV", raising=False)
    monkeypatch.delenv("LANGSTEP_CONTENT_DIR", raising=False)

    loaded = config.load_config()

    assert config_path.exists()
    assert loaded["server"]["port"] == 3000
    assert loaded["server"]["env"] == "production"
    assert loaded["rewards"] == {"correct_xp": 10, "consolation_xp": 2}
    assert loaded["paths"]["content_dir"] == config.PROJECT_DIR / "data" / "content"


def test_environment_overrides_file_values(tmp_path, monkeypatch):
    config_dir = tmp_path / ".langstep"
    config_dir.mkdir()
    config_path = config_dir / "config.toml"
    _write_config(config_path, "[server]\nport = 4000\nenv = \"production\"\n\n[logging]\nlevel = \"INFO\"\n")
    monkeypatch.setattr(config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config, "CONFIG_PATH", config_path)
    monkeypatch.setenv("LANGSTEP_ENV", "development")
    monkeypatch.setenv("LANGSTEP_DATA_DIR", str(tmp_path / "state"))
    monkeypatch.delenv("LANGSTEP_PORT", raising=False)

    assert config.get_config_value("server", "port") == 4000
    assert config.get_config_value("server", "env") == "development"
    assert config.get_config_value("logging", "level") == "info"
    assert config.get_config_value("paths", "data_dir") == tmp_path / "state"
