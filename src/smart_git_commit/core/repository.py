"""Git operations for staging, backdating and committing changes."""

from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Set

import git
from git import Repo

from smart_git_commit.config import SmartGitConfig
from smart_git_commit.core.history import LOG_FORMAT, parse_log
from smart_git_commit.core.runner import GitResult, run_git_command
from smart_git_commit.core.status import merge_unversioned, parse_porcelain, unquote_path
from smart_git_commit.errors import (
    CommitMessageRequired,
    GitCommandError,
    NoFilesSelected,
    NotARepositoryError,
)
from smart_git_commit.log import get_logger
from smart_git_commit.models.change import FileChange
from smart_git_commit.models.commit import CommitRecord

logger = get_logger("repository")

GIT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def format_git_date(when: datetime) -> str:
    """Format a datetime for GIT_AUTHOR_DATE / GIT_COMMITTER_DATE.

    Naive datetimes are taken to be in the system local zone.
    """
    if when.tzinfo is None:
        when = when.astimezone()
    return when.strftime(GIT_DATE_FORMAT)


def backdate_env(when: datetime) -> Dict[str, str]:
    """Environment overrides that stamp a commit with ``when``."""
    formatted = format_git_date(when)
    return {"GIT_AUTHOR_DATE": formatted, "GIT_COMMITTER_DATE": formatted}


def find_project_root(path: Path) -> Path:
    """Find the top of the git work tree containing ``path``."""
    try:
        repo = Repo(Path(path), search_parent_directories=True)
    except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
        raise NotARepositoryError(path) from e
    if repo.working_tree_dir is None:
        raise NotARepositoryError(path)
    return Path(repo.working_tree_dir).resolve()


class SmartGitRepository:
    """Stages, backdates, commits and pushes changes in a git work tree."""

    def __init__(self, project_root: Path, config: Optional[SmartGitConfig] = None):
        self.project_root = find_project_root(project_root)
        self.config = config or SmartGitConfig()

    def run_git_command(
        self, argv: Sequence[str], env_overrides: Optional[Dict[str, str]] = None
    ) -> GitResult:
        """Run a git command in the project root."""
        return run_git_command(
            self.project_root,
            argv,
            env_overrides,
            git_executable=self.config.git_executable,
        )

    # ---- read operations ----

    def status(self, raise_on_error: bool = False) -> List[FileChange]:
        """Changed files from ``git status --porcelain``.

        Failures yield an empty list unless ``raise_on_error`` is set.
        """
        try:
            result = self.run_git_command(["status", "--porcelain"]).check()
        except GitCommandError as e:
            if raise_on_error:
                raise
            logger.warning("git status failed: %s", e.user_message)
            return []
        return parse_porcelain(result.stdout)

    def unversioned_files(self) -> List[str]:
        """Untracked, non-ignored files, one entry per file."""
        try:
            result = self.run_git_command(
                ["ls-files", "--others", "--exclude-standard"]
            ).check()
        except GitCommandError as e:
            logger.warning("git ls-files failed: %s", e.user_message)
            return []
        return [unquote_path(line.strip()) for line in result.lines()]

    def all_changes(self) -> List[FileChange]:
        """Tracked changes followed by every unversioned file.

        Unlike ``status()``, untracked directories are expanded to the files
        they contain.
        """
        tracked = [change for change in self.status() if change.tracked]
        return merge_unversioned(tracked, self.unversioned_files())

    def history(self, limit: Optional[int] = None) -> List[CommitRecord]:
        """Commits reachable from HEAD, newest first.

        A repository without commits yields an empty list.
        """
        argv = ["log", LOG_FORMAT]
        if limit is not None:
            argv.append(f"--max-count={limit}")
        try:
            result = self.run_git_command(argv).check()
        except GitCommandError as e:
            logger.info("git log returned no history: %s", e.user_message)
            return []
        return parse_log(result.stdout)

    def head_commit(self) -> str:
        """Hash of the current HEAD commit."""
        return self.run_git_command(["rev-parse", "HEAD"]).check().stdout.strip()

    def _removed_from_index(self) -> Set[str]:
        """Paths already staged as deleted or renamed away and gone from disk.

        ``git add`` rejects these, while ``git commit -- <path>`` still
        records their removal.
        """
        removed = set()
        for change in self.status():
            if change.status[:1] == "D":
                removed.add(change.path)
            elif change.status[:1] == "R" and change.original_path:
                removed.add(change.original_path)
        return {path for path in removed if not (self.project_root / path).exists()}

    # ---- write operations ----

    def stage(self, paths: Iterable[str]) -> None:
        """Stage the given paths, including deletions."""
        paths = _unique(paths)
        if not paths:
            return
        self.run_git_command(["add", "--"] + paths, _LITERAL_PATHSPECS).check()
        logger.info("Staged %d path(s)", len(paths))

    def untrack(self, paths: Iterable[str]) -> None:
        """Remove paths from the index while keeping them on disk."""
        paths = _unique(paths)
        if not paths:
            return
        self.run_git_command(
            ["rm", "--cached", "-r", "--quiet", "--"] + paths, _LITERAL_PATHSPECS
        ).check()
        logger.info("Untracked %d path(s)", len(paths))

    def commit(
        self,
        message: str,
        when: Optional[datetime] = None,
        paths: Optional[Iterable[str]] = None,
        push: bool = False,
    ) -> str:
        """Commit changes with the author and committer date set to ``when``.

        With ``paths``, only those paths are staged and committed; anything
        else already in the index stays staged. Paths whose deletion or
        rename is already staged are committed without staging them again. Without ``paths`` every change
        in the work tree is committed.

        Args:
            message: Commit message
            when: Commit date, defaults to now
            paths: Paths to commit, or None for everything
            push: Run ``git push`` after committing

        Returns:
            Hash of the new commit

        Raises:
            CommitMessageRequired: If the message is blank
            NoFilesSelected: If ``paths`` is given but empty
            GitCommandError: If any git step fails
        """
        message = (message or "").strip()
        if not message:
            raise CommitMessageRequired()

        selected = None if paths is None else _unique(paths)
        if selected is not None and not selected:
            raise NoFilesSelected()

        when = when or datetime.now()
        env = backdate_env(when)

        if selected is None:
            self.run_git_command(["add", "-A"]).check()
            self.run_git_command(["commit", "-m", message], env).check()
        else:
            removed = self._removed_from_index()
            self.stage([p for p in selected if p not in removed])
            env.update(_LITERAL_PATHSPECS)
            self.run_git_command(["commit", "-m", message, "--"] + selected, env).check()

        commit_hash = self.head_commit()
        logger.info(
            "Committed %s dated %s", commit_hash[:8], env["GIT_AUTHOR_DATE"]
        )

        if push:
            self.push()
        return commit_hash

    def push(self) -> str:
        """Push the current branch, to the configured remote/branch if set."""
        argv = ["push"]
        if self.config.remote:
            argv.append(self.config.remote)
            if self.config.branch:
                argv.append(self.config.branch)
        result = self.run_git_command(argv).check()
        logger.info("Pushed %s", " ".join(argv[1:]) or "to upstream")
        # git push reports progress on stderr
        return (result.stderr or result.stdout).strip()


_LITERAL_PATHSPECS = {"GIT_LITERAL_PATHSPECS": "1"}


def _unique(paths: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(str(p) for p in paths if str(p)))
