"""Data models for Smart Git Commit."""

from .change import FileChange
from .commit import CommitRecord, DayGroup

__all__ = ["FileChange", "CommitRecord", "DayGroup"]
