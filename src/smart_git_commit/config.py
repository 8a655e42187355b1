"""Configuration loading for Smart Git Commit."""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError

from smart_git_commit.errors import ConfigError

PROJECT_CONFIG_NAME = ".smart-git.json"


def get_user_config_dir() -> Path:
    """Get the per-user Smart Git directory."""
    return Path.home() / ".smart-git"


class SmartGitConfig(BaseModel):
    """User and project settings."""

    git_executable: str = "git"
    remote: Optional[str] = None
    branch: Optional[str] = None
    show_empty_dates: bool = False
    history_limit: Optional[int] = Field(default=None, ge=1)
    debug_log: Path = get_user_config_dir() / "smart-git-debug.log"
    log_level: str = "info"

    model_config = {"arbitrary_types_allowed": True}


def _read_config_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not read {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a JSON object")
    return data


def load_config(
    project_root: Optional[Path] = None, user_config: Optional[Path] = None
) -> SmartGitConfig:
    """Load settings from the user file, the project file and the environment.

    Later sources win: project settings override user settings, and the
    ``SMART_GIT_GIT`` / ``SMART_GIT_DEBUG_LOG`` environment variables override
    both.
    """
    if user_config is None:
        user_config = get_user_config_dir() / "config.json"

    merged: Dict[str, Any] = {}
    sources = [Path(user_config)]
    if project_root is not None:
        sources.append(Path(project_root) / PROJECT_CONFIG_NAME)

    for source in sources:
        merged.update(_read_config_file(source))

    if os.environ.get("SMART_GIT_GIT"):
        merged["git_executable"] = os.environ["SMART_GIT_GIT"]
    if os.environ.get("SMART_GIT_DEBUG_LOG"):
        merged["debug_log"] = os.environ["SMART_GIT_DEBUG_LOG"]

    try:
        return SmartGitConfig.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
