from pathlib import Path

import pytest

from sokoban.config.settings import Settings, load_settings
from sokoban.exceptions import ConfigError


def test_defaults_from_embedded_yaml():
    s = Settings.from_sources(env={})
    assert s.collection is None
    assert s.auto_advance is True
    assert s.start_level == 0
    assert s.log_level == "WARNING"


def test_yaml_file_overrides_defaults(tmp_path: Path):
    cfg = tmp_path / "settings.yaml"
    cfg.write_text("auto_advance: false\nstart_level: 2\nlog_level: info\n", encoding="utf-8")

    s = Settings.from_sources(env={}, file_path=cfg)
    assert s.auto_advance is False
    assert s.start_level == 2
    assert s.log_level == "INFO"


def test_env_overrides_file(tmp_path: Path):
    cfg = tmp_path / "settings.yaml"
    cfg.write_text("start_level: 2\n", encoding="utf-8")
    env = {
        "SOKOBAN_SETTINGS_FILE": str(cfg),
        "SOKOBAN_START_LEVEL": "1",
        "SOKOBAN_AUTO_ADVANCE": "off",
        "SOKOBAN_LOG_LEVEL": "debug",
        "SOKOBAN_COLLECTION": "",
    }
    s = Settings.from_sources(env=env)
    assert s.start_level == 1
    assert s.auto_advance is False
    assert s.log_level == "DEBUG"
    assert s.collection is None


@pytest.mark.parametrize(
    "data",
    [
        {"log_level": "LOUD"},
        {"start_level": -1},
        {"start_level": "first"},
        {"auto_advance": "maybe"},
    ],
)
def test_invalid_values(data):
    with pytest.raises(ConfigError):
        Settings.from_dict(data)


def test_unknown_keys_are_ignored():
    s = Settings.from_dict({"start_level": 1, "fullscreen": True})
    assert s.as_dict() == {
        "collection": None,
        "auto_advance": True,
        "start_level": 1,
        "log_level": "WARNING",
    }


def test_non_mapping_yaml(tmp_path: Path):
    cfg = tmp_path / "settings.yaml"
    cfg.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        Settings.from_sources(env={}, file_path=cfg)


def test_missing_settings_file(tmp_path: Path):
    with pytest.raises(ConfigError):
        Settings.from_sources(env={}, file_path=tmp_path / "absent.yaml")


def test_open_session_on_bundled_collection():
    session = Settings(start_level=1).open_session()
    assert len(session) == 4
    assert session.index == 1
    assert session.current.title == "Corner"


def test_open_session_on_configured_collection(tmp_path: Path):
    slc = tmp_path / "mine.slc"
    slc.write_text('<SokobanLevels><Level Id="Mine"><L>#@ #</L></Level></SokobanLevels>', encoding="utf-8")
    s = Settings.from_sources(env={"SOKOBAN_COLLECTION": str(slc), "SOKOBAN_AUTO_ADVANCE": "0"})

    session = s.open_session()
    assert session.auto_advance is False
    assert session.current.title == "Mine"


def test_load_settings_reads_environment(tmp_path: Path, monkeypatch):
    cfg = tmp_path / "settings.yaml"
    cfg.write_text("start_level: 3\n", encoding="utf-8")
    monkeypatch.setenv("SOKOBAN_LOG_LEVEL", "ERROR")
    monkeypatch.delenv("SOKOBAN_START_LEVEL", raising=False)
    monkeypatch.delenv("SOKOBAN_SETTINGS_FILE", raising=False)

    s = load_settings(cfg)
    assert s.start_level == 3
    assert s.log_level == "ERROR"
