"""Tests for configuration loading."""

import json
from pathlib import Path

import pytest

from smart_git_commit.config import PROJECT_CONFIG_NAME, load_config
from smart_git_commit.errors import ConfigError


def test_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("SMART_GIT_DEBUG_LOG", raising=False)
    config = load_config(tmp_path, user_config=tmp_path / "missing.json")
    assert config.git_executable == "git"
    assert config.show_empty_dates is False
    assert config.history_limit is None
    assert config.debug_log.name == "smart-git-debug.log"


def test_project_overrides_user(tmp_path):
    user_file = tmp_path / "user.json"
    user_file.write_text(json.dumps({"remote": "origin", "history_limit": 50}))
    (tmp_path / PROJECT_CONFIG_NAME).write_text(
        json.dumps({"history_limit": 10, "show_empty_dates": True})
    )

    config = load_config(tmp_path, user_config=user_file)

    assert config.remote == "origin"
    assert config.history_limit == 10
    assert config.show_empty_dates is True


def test_environment_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("SMART_GIT_GIT", "/usr/local/bin/git")
    monkeypatch.setenv("SMART_GIT_DEBUG_LOG", str(tmp_path / "custom.log"))

    config = load_config(tmp_path, user_config=tmp_path / "missing.json")

    assert config.git_executable == "/usr/local/bin/git"
    assert config.debug_log == Path(tmp_path / "custom.log")


def test_invalid_json(tmp_path):
    (tmp_path / PROJECT_CONFIG_NAME).write_text("{not json")
    with pytest.raises(ConfigError, match=PROJECT_CONFIG_NAME):
        load_config(tmp_path, user_config=tmp_path / "missing.json")


def test_invalid_value(tmp_path):
    (tmp_path / PROJECT_CONFIG_NAME).write_text(json.dumps({"history_limit": "lots"}))
    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_config(tmp_path, user_config=tmp_path / "missing.json")


def test_history_limit_must_be_positive(tmp_path):
    (tmp_path / PROJECT_CONFIG_NAME).write_text(json.dumps({"history_limit": 0}))
    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_config(tmp_path, user_config=tmp_path / "missing.json")
