"""Main CLI interface for Smart Git Commit."""

from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from smart_git_commit.cli.panel import DATE_FORMATS, CommitPanel, render_history
from smart_git_commit.config import load_config
from smart_git_commit.core.history import group_by_day
from smart_git_commit.core.repository import SmartGitRepository, find_project_root
from smart_git_commit.core.status import split_sections
from smart_git_commit.errors import (
    CommitMessageRequired,
    GitCommandError,
    NoFilesSelected,
    SmartGitError,
)
from smart_git_commit.log import setup_logging

console = Console()


def get_repo_or_exit(ctx: click.Context) -> SmartGitRepository:
    """Open the repository for the current command or exit with an error."""
    project_path = ctx.obj["project_path"]
    try:
        project_root = find_project_root(project_path)
        config = load_config(project_root)
    except SmartGitError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort() from e

    setup_logging(config.debug_log, config.log_level, verbose=ctx.obj["verbose"])
    return SmartGitRepository(project_root, config)


def _fail(title: str, error: Exception) -> None:
    if isinstance(error, GitCommandError):
        message = error.user_message
    else:
        message = str(error) or "Action failed"
    console.print(f"[red]{title}: {escape(message)}[/red]")
    raise click.Abort() from error


@click.group()
@click.version_option(package_name="smart-git-commit")
@click.option(
    "--project-path",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    help="Path inside the git work tree",
)
@click.option("--verbose", "-v", is_flag=True, help="Show log output on stderr")
@click.pass_context
def main(ctx: click.Context, project_path: str, verbose: bool):
    """Smart Git Commit - stage, backdate and commit Git changes."""
    ctx.ensure_object(dict)
    ctx.obj["project_path"] = Path(project_path)
    ctx.obj["verbose"] = verbose


@main.command()
@click.option(
    "--all-files",
    is_flag=True,
    help="List every unversioned file instead of collapsed directories",
)
@click.pass_context
def status(ctx: click.Context, all_files: bool):
    """Show changed and unversioned files."""
    repo = get_repo_or_exit(ctx)
    changes = repo.all_changes() if all_files else repo.status()

    if not changes:
        console.print("[green]Nothing to commit, working tree clean[/green]")
        return

    tracked, unversioned = split_sections(changes)
    table = Table(title=f"Changes {len(changes)} files")
    table.add_column("Status", style="magenta", no_wrap=True)
    table.add_column("File", style="cyan")
    table.add_column("Directory", style="dim")
    table.add_column("Section", style="yellow")

    for change in tracked:
        name = change.name
        if change.is_renamed:
            name = f"{name} (from {change.original_path})"
        style = "dim" if change.is_deleted else None
        table.add_row(change.status, name, change.parent_dir, "Changes", style=style)
    for change in unversioned:
        table.add_row(
            change.status, change.name, change.parent_dir, "Unversioned Files"
        )

    console.print(table)


@main.command()
@click.argument("paths", nargs=-1, required=True)
@click.pass_context
def add(ctx: click.Context, paths: Tuple[str, ...]):
    """Stage files for the next commit."""
    repo = get_repo_or_exit(ctx)
    try:
        repo.stage(paths)
    except SmartGitError as e:
        _fail("Git Error", e)
    console.print(f"[green]Staged {len(paths)} path(s)[/green]")


@main.command()
@click.argument("paths", nargs=-1, required=True)
@click.pass_context
def untrack(ctx: click.Context, paths: Tuple[str, ...]):
    """Stop tracking files but keep them on disk (git rm --cached)."""
    repo = get_repo_or_exit(ctx)
    try:
        repo.untrack(paths)
    except SmartGitError as e:
        _fail("Git Error", e)
    console.print(f"[green]Untracked {len(paths)} path(s)[/green]")


@main.command()
@click.option("--message", "-m", required=True, help="Commit message")
@click.option(
    "--date",
    "-d",
    "when",
    type=click.DateTime(formats=DATE_FORMATS),
    help="Author and committer date (local time), defaults to now",
)
@click.option(
    "--file",
    "-f",
    "files",
    multiple=True,
    help="File to commit (repeatable); commits everything when omitted",
)
@click.option("--push", is_flag=True, help="Push after committing")
@click.pass_context
def commit(
    ctx: click.Context,
    message: str,
    when: Optional[datetime],
    files: Tuple[str, ...],
    push: bool,
):
    """Commit changes with a custom (backdated) date."""
    repo = get_repo_or_exit(ctx)
    try:
        commit_hash = repo.commit(
            message, when=when, paths=list(files) if files else None, push=push
        )
    except (CommitMessageRequired, NoFilesSelected) as e:
        _fail(e.title, e)
    except SmartGitError as e:
        _fail("Git Error", e)

    stamp = (when or datetime.now()).strftime("%Y-%m-%d %H:%M")
    console.print(f"[green]✅ Committed {commit_hash[:8]} dated {stamp}[/green]")
    if push:
        console.print("[green]Pushed to remote[/green]")


@main.command()
@click.pass_context
def push(ctx: click.Context):
    """Push the current branch."""
    repo = get_repo_or_exit(ctx)
    try:
        output = repo.push()
    except SmartGitError as e:
        _fail("Git Error", e)
    if output:
        console.print(f"[dim]{escape(output)}[/dim]")
    console.print("[green]Push completed[/green]")


@main.command()
@click.option(
    "--limit", type=click.IntRange(min=1), default=None, help="Number of commits to read"
)
@click.option(
    "--empty-days/--no-empty-days",
    default=None,
    help="Show days without commits between the first and last commit",
)
@click.option(
    "--expand/--collapse",
    default=True,
    help="List commits under each day or only the day headings",
)
@click.pass_context
def history(
    ctx: click.Context, limit: Optional[int], empty_days: Optional[bool], expand: bool
):
    """Show commit history grouped by day."""
    repo = get_repo_or_exit(ctx)
    if limit is None:
        limit = repo.config.history_limit
    if empty_days is None:
        empty_days = repo.config.show_empty_dates

    groups = group_by_day(repo.history(limit), include_empty_days=empty_days)
    if not groups:
        console.print("[yellow]No commits found[/yellow]")
        return

    expanded = set(range(len(groups))) if expand else set()
    console.print(render_history(groups, expanded))


@main.command()
@click.pass_context
def panel(ctx: click.Context):
    """Open the interactive commit panel."""
    repo = get_repo_or_exit(ctx)
    CommitPanel(repo, console=console).run()


if __name__ == "__main__":
    main()
