"""Parsing of ``git log`` output and grouping of commits by day."""

from datetime import date, timedelta, tzinfo
from typing import Dict, Iterable, List, Optional

from smart_git_commit.models.commit import CommitRecord, DayGroup

LOG_FORMAT = "--pretty=format:%s|%an|%ct"


def parse_log_line(line: str) -> Optional[CommitRecord]:
    """Parse one ``subject|author|timestamp`` line.

    Author and timestamp are taken from the right so subjects may contain
    ``|`` characters.
    """
    parts = line.rstrip("\r\n").rsplit("|", 2)
    if len(parts) < 3:
        return None
    message, author, raw_timestamp = parts
    try:
        timestamp = int(raw_timestamp.strip())
    except ValueError:
        return None
    return CommitRecord(message=message, author=author, timestamp=timestamp)


def parse_log(output: str) -> List[CommitRecord]:
    """Parse the whole ``git log`` output, skipping malformed lines."""
    commits = []
    for line in output.splitlines():
        if not line.strip():
            continue
        commit = parse_log_line(line)
        if commit is not None:
            commits.append(commit)
    return commits


def commit_day(commit: CommitRecord, tz: Optional[tzinfo] = None) -> date:
    """Local calendar day of a commit."""
    return commit.local_time(tz).date()


def group_by_day(
    commits: Iterable[CommitRecord],
    tz: Optional[tzinfo] = None,
    include_empty_days: bool = False,
) -> List[DayGroup]:
    """Group commits by local calendar day, newest day first.

    Commits keep their input order within a day. When ``include_empty_days``
    is set, every day between the newest and the oldest commit day is listed,
    including days without commits.
    """
    groups: Dict[date, List[CommitRecord]] = {}
    for commit in commits:
        groups.setdefault(commit_day(commit, tz), []).append(commit)

    if not groups:
        return []

    days = sorted(groups, reverse=True)
    if include_empty_days:
        newest, oldest = days[0], days[-1]
        days = [newest - timedelta(days=i) for i in range((newest - oldest).days + 1)]

    return [DayGroup(day=day, commits=groups.get(day, [])) for day in days]
