"""Thin wrapper around the git executable."""

import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from smart_git_commit.errors import GitCommandError, GitNotFoundError
from smart_git_commit.log import get_logger

logger = get_logger("runner")


@dataclass
class GitResult:
    """Outcome of a single git invocation."""

    argv: List[str]
    stdout: str
    exit_code: int
    stderr: str = ""
    env_overrides: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def check(self) -> "GitResult":
        """Raise GitCommandError when the command failed."""
        if not self.ok:
            raise GitCommandError(self.argv, self.exit_code, self.stderr, self.stdout)
        return self

    def lines(self) -> List[str]:
        """Non-blank stdout lines."""
        return [line for line in self.stdout.splitlines() if line.strip()]


def run_git_command(
    working_directory: Path,
    argv: Sequence[str],
    env_overrides: Optional[Dict[str, str]] = None,
    git_executable: str = "git",
) -> GitResult:
    """Run ``git <argv>`` in ``working_directory`` and capture its output.

    The child inherits the current environment with ``env_overrides`` applied
    on top. The command always runs to completion; a non-zero exit code is
    reported through the returned result, not raised.

    Args:
        working_directory: Directory the command runs in
        argv: Git arguments without the executable, e.g. ``["status"]``
        env_overrides: Extra environment variables for this invocation
        git_executable: Name or path of the git binary

    Returns:
        GitResult with stdout, stderr and the exit code

    Raises:
        GitNotFoundError: If the git executable cannot be started
    """
    overrides = dict(env_overrides or {})
    cmd = [git_executable] + list(argv)

    env = os.environ.copy()
    env.update(overrides)

    logger.debug(
        "Running %s in %s (env overrides: %s)",
        " ".join(cmd),
        working_directory,
        ", ".join(sorted(overrides)) or "none",
    )

    try:
        result = subprocess.run(  # noqa: S603
            cmd,
            cwd=str(working_directory),
            env=env,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except FileNotFoundError as e:
        raise GitNotFoundError(git_executable) from e

    logger.debug("%s exited with %d", " ".join(cmd), result.returncode)
    if result.returncode != 0:
        logger.debug("stderr: %s", result.stderr.strip())

    return GitResult(
        argv=cmd,
        stdout=result.stdout,
        exit_code=result.returncode,
        stderr=result.stderr,
        env_overrides=overrides,
    )
