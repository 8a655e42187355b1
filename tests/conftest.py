"""Shared fixtures for Smart Git Commit tests."""

import tempfile
from pathlib import Path

import pytest
from git import Repo


def init_repo(path: Path) -> Repo:
    """Initialize a git repository with a test identity."""
    repo = Repo.init(path)
    with repo.config_writer() as config:
        config.set_value("user", "name", "Test User")
        config.set_value("user", "email", "test@example.com")
        config.set_value("commit", "gpgsign", "false")
    return repo


@pytest.fixture(autouse=True)
def isolated_debug_log(tmp_path, monkeypatch):
    """Keep debug logs and user config out of the real home directory."""
    monkeypatch.setenv("SMART_GIT_DEBUG_LOG", str(tmp_path / "debug.log"))
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


@pytest.fixture
def temp_git_project():
    """Create a temporary git project with an initial commit."""
    with tempfile.TemporaryDirectory() as temp_dir:
        project_path = Path(temp_dir).resolve()
        main_repo = init_repo(project_path)

        (project_path / "main.py").write_text("def main():\n    print('Hello')\n")
        (project_path / "utils.py").write_text("def helper():\n    return 42\n")
        (project_path / "src").mkdir()
        (project_path / "src" / "core.py").write_text("class Core:\n    pass\n")

        main_repo.index.add(["main.py", "utils.py", "src/core.py"])
        main_repo.index.commit("Initial commit")

        yield project_path


@pytest.fixture
def empty_git_project():
    """Create a temporary git project without any commits."""
    with tempfile.TemporaryDirectory() as temp_dir:
        project_path = Path(temp_dir).resolve()
        init_repo(project_path)
        yield project_path
