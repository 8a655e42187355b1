"""Interactive commit panel: pick files, set a date and message, commit."""

import shlex
from datetime import datetime, tzinfo
from typing import List, Optional, Set

from rich.console import Console, Group
from rich.markup import escape
from rich.prompt import Prompt
from rich.text import Text
from rich.tree import Tree

from smart_git_commit.cli.notify import Notifier, NotificationType
from smart_git_commit.core.history import group_by_day
from smart_git_commit.core.repository import SmartGitRepository
from smart_git_commit.core.selection import SelectionState
from smart_git_commit.core.status import split_sections
from smart_git_commit.core.worker import BackgroundWorker
from smart_git_commit.errors import (
    CommitMessageRequired,
    GitCommandError,
    GitNotFoundError,
    NoFilesSelected,
    SmartGitError,
)
from smart_git_commit.log import get_logger
from smart_git_commit.models.change import FileChange
from smart_git_commit.models.commit import DayGroup

logger = get_logger("panel")

DATE_FORMATS = [
    "%Y-%m-%d",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%d/%m/%y, %I:%M %p",
]
DISPLAY_DATE_FORMAT = "%d/%m/%y, %I:%M %p"

UNVERSIONED_COLOR = "#FF8C82"
DELETED_COLOR = "#6E6E6E"
MODIFIED_COLOR = "#3592FF"
DIR_COLOR = "#808080"

HELP = """\
[bold]Commands[/bold]
  r, refresh              reload changed files
  t, toggle N \\[N-M ...]  flip checkboxes by row number
  a, all / n, none        check or uncheck every file
  m, message TEXT         set the commit message
  d, date WHEN|now        set the change date (e.g. 2024-03-10 14:30)
  c, commit               commit the checked files
  p, push                 commit the checked files and push
  h, history \\[empty]     show commits grouped by day; empty shows or hides
                          days without commits
  x, expand N|all         expand or collapse history days
  ?, help                 show this help
  q, quit                 leave the panel"""


def parse_change_date(value: str) -> datetime:
    """Parse a change date typed by the user."""
    value = value.strip()
    if value.lower() == "now":
        return datetime.now()
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    raise ValueError(f"Unrecognised date: {value}")


def parse_row_numbers(tokens: List[str], count: int) -> List[int]:
    """Turn ``["1", "3-5"]`` into zero-based row indexes."""
    indexes = []
    for token in tokens:
        if "-" in token:
            start, _, end = token.partition("-")
            numbers = range(int(start), int(end) + 1)
        else:
            numbers = [int(token)]
        for number in numbers:
            if not 1 <= number <= count:
                raise ValueError(f"No row {number}")
            indexes.append(number - 1)
    return indexes


def _plural(count: int) -> str:
    return "file" if count == 1 else "files"


class CommitPanel:
    """Terminal rendition of the commit tool window.

    Holds the changed files, which of them are checked, the change date and
    the commit message. Commits run on a background worker; their results are
    handled back on the panel's own thread.
    """

    def __init__(
        self,
        repo: SmartGitRepository,
        console: Optional[Console] = None,
        worker: Optional[BackgroundWorker] = None,
        notifier: Optional[Notifier] = None,
        tz: Optional[tzinfo] = None,
    ):
        self.repo = repo
        self.console = console or Console()
        self.worker = worker or BackgroundWorker()
        self.notifier = notifier or Notifier(self.console)
        self.tz = tz

        self.changes: List[FileChange] = []
        self.selection = SelectionState()
        self.message: Optional[str] = None
        self.when: Optional[datetime] = None

        self.show_empty_dates = repo.config.show_empty_dates
        self.history_groups: List[DayGroup] = []
        self.expanded_days: Set[int] = set()

    # ---- commit tab ----

    @property
    def rows(self) -> List[FileChange]:
        """Changes in display order: tracked section, then unversioned."""
        tracked, unversioned = split_sections(self.changes)
        return tracked + unversioned

    def refresh(self) -> List[FileChange]:
        """Reload changed files, keeping the user's unchecked files unchecked."""
        try:
            self.changes = self.repo.status(raise_on_error=True)
        except (GitCommandError, GitNotFoundError) as e:
            logger.warning("Refresh failed: %s", e)
            self.changes = []
            self.notifier.notify("Error", "Git status failed", NotificationType.ERROR)
        self.selection.sync(self.changes)
        return self.changes

    def toggle(self, indexes: List[int]) -> None:
        rows = self.rows
        for index in indexes:
            self.selection.toggle(rows[index].path)

    def set_all(self, selected: bool) -> None:
        self.selection.set_all(self.changes, selected)

    def selected_paths(self) -> List[str]:
        paths = []
        for change in self.selection.selected(self.rows):
            paths.extend(change.pathspecs)
        return paths

    def master_label(self) -> str:
        box = "[x]" if self.selection.master_checked(self.changes) else "[ ]"
        return f"{box} Changes {len(self.changes)} files"

    def _row_text(self, number: int, change: FileChange) -> Text:
        box = "[x]" if self.selection.is_selected(change.path) else "[ ]"
        if change.is_unversioned:
            color = UNVERSIONED_COLOR
        elif change.is_deleted:
            color = DELETED_COLOR
        else:
            color = MODIFIED_COLOR

        text = Text(f"{box} {number:>2} ")
        text.append(change.name or change.path, style=color)
        if change.parent_dir:
            text.append(f"  {change.parent_dir}", style=DIR_COLOR)
        if change.is_renamed:
            text.append(f"  (from {change.original_path})", style=DIR_COLOR)
        return text

    def render_changes(self) -> Tree:
        tree = Tree(Text(self.master_label(), style="bold"))
        tracked, unversioned = split_sections(self.changes)
        number = 1
        for title, section in (("Changes", tracked), ("Unversioned Files", unversioned)):
            if not section:
                continue
            label = Text(title, style="bold")
            label.append(f" {len(section)} {_plural(len(section))}", style=DELETED_COLOR)
            branch = tree.add(label)
            for change in section:
                branch.add(self._row_text(number, change))
                number += 1
        return tree

    def render_commit_form(self) -> Text:
        when = self.when or datetime.now()
        text = Text("Change Date ", style="bold")
        text.append(when.strftime(DISPLAY_DATE_FORMAT))
        if self.when is None:
            text.append(" (now)", style="dim")
        text.append("\nCommit Message ", style="bold")
        if self.message:
            text.append(self.message)
        else:
            text.append("<empty>", style="dim")
        return text

    def render(self) -> Group:
        return Group(self.render_changes(), Text(""), self.render_commit_form())

    def commit(self, push: bool = False) -> bool:
        """Validate, then commit the checked files on the background worker.

        Returns:
            True if a commit job was started
        """
        message = (self.message or "").strip()
        if not message:
            error = CommitMessageRequired()
            self.notifier.notify(error.title, str(error), NotificationType.WARNING)
            return False

        paths = self.selected_paths()
        if not paths:
            error = NoFilesSelected()
            self.notifier.notify(error.title, str(error), NotificationType.WARNING)
            return False

        when = self.when or datetime.now()

        def job():
            return self.repo.commit(message, when, paths=paths, push=push)

        self.worker.submit(job, self._on_commit_success, self._on_commit_error)
        return True

    def _on_commit_success(self, commit_hash: str) -> None:
        logger.info("Commit %s finished", commit_hash[:8])
        self.message = None
        self.refresh()
        self.notifier.notify("Git Success", "Commit completed successfully.")

    def _on_commit_error(self, error: Exception) -> None:
        if isinstance(error, GitCommandError):
            content = error.user_message
        else:
            content = str(error) or "Action failed"
        self.notifier.notify("Git Error", content, NotificationType.ERROR)

    # ---- history tab ----

    def load_history(self, include_empty_days: Optional[bool] = None) -> List[DayGroup]:
        if include_empty_days is not None:
            self.show_empty_dates = include_empty_days
        commits = self.repo.history(self.repo.config.history_limit)
        self.history_groups = group_by_day(
            commits, tz=self.tz, include_empty_days=self.show_empty_dates
        )
        self.expanded_days.clear()
        return self.history_groups

    def toggle_day(self, index: int) -> None:
        if index in self.expanded_days:
            self.expanded_days.discard(index)
        else:
            self.expanded_days.add(index)

    def render_history(self) -> Tree:
        return render_history(self.history_groups, self.expanded_days, tz=self.tz)

    # ---- interactive loop ----

    def handle(self, line: str) -> bool:
        """Run one command. Returns False when the user quits."""
        try:
            tokens = shlex.split(line)
        except ValueError:
            tokens = line.split()
        if not tokens:
            return True

        command, args = tokens[0].lower(), tokens[1:]
        rest = " ".join(args)

        try:
            if command in ("q", "quit", "exit"):
                return False
            elif command in ("?", "help"):
                self.console.print(HELP)
            elif command in ("r", "refresh"):
                self.refresh()
                self.console.print(self.render())
            elif command in ("t", "toggle"):
                self.toggle(parse_row_numbers(args, len(self.rows)))
                self.console.print(self.render_changes())
            elif command in ("a", "all"):
                self.set_all(True)
                self.console.print(self.render_changes())
            elif command in ("n", "none"):
                self.set_all(False)
                self.console.print(self.render_changes())
            elif command in ("m", "message"):
                self.message = rest or None
                self.console.print(self.render_commit_form())
            elif command in ("d", "date"):
                self.when = None if rest.lower() in ("", "now") else parse_change_date(rest)
                self.console.print(self.render_commit_form())
            elif command in ("c", "commit", "p", "push"):
                if self.commit(push=command in ("p", "push")):
                    with self.console.status("Committing..."):
                        self.worker.wait()
                    self.console.print(self.render())
            elif command in ("h", "history"):
                if "empty" in args:
                    self.show_empty_dates = not self.show_empty_dates
                self.load_history()
                self.console.print(self.render_history())
            elif command in ("x", "expand"):
                if args == ["all"]:
                    if len(self.expanded_days) == len(self.history_groups):
                        self.expanded_days.clear()
                    else:
                        self.expanded_days = set(range(len(self.history_groups)))
                else:
                    for index in parse_row_numbers(args, len(self.history_groups)):
                        self.toggle_day(index)
                self.console.print(self.render_history())
            else:
                self.console.print(f"[red]Unknown command: {escape(command)}[/red] (type ? for help)")
        except ValueError as e:
            self.console.print(f"[red]{escape(str(e))}[/red]")
        except SmartGitError as e:
            self.console.print(f"[red]Error: {escape(str(e))}[/red]")
        return True

    def run(self) -> None:
        """Prompt for commands until the user quits."""
        self.refresh()
        self.console.print(self.render())
        self.console.print("[dim]Type ? for help[/dim]")
        while True:
            try:
                line = Prompt.ask("[bold cyan]smart-git[/bold cyan]", console=self.console)
            except (EOFError, KeyboardInterrupt):
                self.console.print()
                break
            if not self.handle(line):
                break
            self.worker.process_events()


def render_history(
    groups: List[DayGroup],
    expanded: Optional[Set[int]] = None,
    tz: Optional[tzinfo] = None,
) -> Tree:
    """Render day groups as a tree; only expanded days list their commits."""
    expanded = set(range(len(groups))) if expanded is None else expanded
    tree = Tree(Text("History", style="bold"))
    for index, group in enumerate(groups):
        if group.is_empty:
            label = Text(f"   {group.label}", style=UNVERSIONED_COLOR)
            label.append(" (No commits)", style=DIR_COLOR)
            tree.add(label)
            continue

        arrow = "v" if index in expanded else ">"
        label = Text(f"{arrow} {index + 1:>2} {group.label}")
        label.append(f" {len(group.commits)}", style=DIR_COLOR)
        branch = tree.add(label)
        if index in expanded:
            for commit in group.commits:
                row = Text(f"{commit.time_label(tz):>8}", style=DELETED_COLOR)
                row.append("   ")
                row.append(commit.message, style=MODIFIED_COLOR)
                row.append(f"  {commit.author}", style=DIR_COLOR)
                branch.add(row)
    return tree
