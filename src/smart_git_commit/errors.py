"""Exceptions raised by Smart Git Commit."""

from typing import List, Optional


class SmartGitError(Exception):
    """Base class for all Smart Git Commit errors."""


class ConfigError(SmartGitError):
    """A configuration file could not be read or validated."""


class GitNotFoundError(SmartGitError):
    """The git executable could not be started."""

    def __init__(self, executable: str = "git"):
        super().__init__(f"Git command not found ({executable}). Is Git installed?")
        self.executable = executable


class NotARepositoryError(SmartGitError):
    """The given path is not inside a git work tree."""

    def __init__(self, path):
        super().__init__(f"Not a git repository: {path}")
        self.path = path


class GitCommandError(SmartGitError):
    """A git command exited with a non-zero status."""

    def __init__(
        self,
        argv: List[str],
        exit_code: int,
        stderr: str = "",
        stdout: str = "",
    ):
        self.argv = list(argv)
        self.exit_code = exit_code
        self.stderr = stderr
        self.stdout = stdout
        super().__init__(self.user_message)

    @property
    def user_message(self) -> str:
        """Single line-ish message suitable for a notification."""
        for text in (self.stderr, self.stdout):
            if text and text.strip():
                return text.strip()
        return f"Git command failed with exit code {self.exit_code}"


class CommitMessageRequired(SmartGitError):
    """Raised when a commit is attempted with an empty message."""

    title = "Commit Message Required"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "Please enter a message.")


class NoFilesSelected(SmartGitError):
    """Raised when a commit is attempted with no files selected."""

    title = "No Files Selected"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "Select files to commit.")
