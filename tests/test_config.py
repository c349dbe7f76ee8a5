"""Tests for settings resolution."""

from __future__ import annotations

from pathlib import Path

from task_tracker.config import load_settings, load_tracker_config


def test_defaults(tmp_path: Path) -> None:
    settings = load_settings(tmp_path, environ={})
    assert settings.data_file == tmp_path.resolve() / ".tasks.csv"
    assert settings.log_level == "WARNING"


def test_config_file_values(tmp_path: Path) -> None:
    (tmp_path / ".tasks.yaml").write_text("data_file: lists/todo.csv\nlog_level: debug\n")
    settings = load_settings(tmp_path, environ={})
    assert settings.data_file == tmp_path.resolve() / "lists" / "todo.csv"
    assert settings.log_level == "DEBUG"


def test_environment_beats_config_file(tmp_path: Path) -> None:
    (tmp_path / ".tasks.yaml").write_text("data_file: from-config.csv\nlog_level: INFO\n")
    env = {"TASKS_FILE": str(tmp_path / "from-env.csv"), "TASKS_LOG_LEVEL": "error"}
    settings = load_settings(tmp_path, environ=env)
    assert settings.data_file == tmp_path / "from-env.csv"
    assert settings.log_level == "ERROR"


def test_arguments_beat_environment(tmp_path: Path) -> None:
    env = {"TASKS_FILE": "from-env.csv", "TASKS_LOG_LEVEL": "ERROR"}
    settings = load_settings(tmp_path, data_file="explicit.csv", log_level="info", environ=env)
    assert settings.data_file == tmp_path.resolve() / "explicit.csv"
    assert settings.log_level == "INFO"


def test_unknown_log_level_falls_back(tmp_path: Path) -> None:
    settings = load_settings(tmp_path, log_level="chatty", environ={})
    assert settings.log_level == "WARNING"


def test_malformed_config_is_ignored(tmp_path: Path) -> None:
    (tmp_path / ".tasks.yaml").write_text("data_file: [unclosed\n")
    config, err = load_tracker_config(tmp_path)
    assert config == {}
    assert err is not None and "YAMLError" in err
    assert load_settings(tmp_path, environ={}).data_file == tmp_path.resolve() / ".tasks.csv"


def test_non_mapping_config_is_reported(tmp_path: Path) -> None:
    (tmp_path / ".tasks.yaml").write_text("- just\n- a list\n")
    config, err = load_tracker_config(tmp_path)
    assert config == {}
    assert err is not None and "expected mapping" in err
