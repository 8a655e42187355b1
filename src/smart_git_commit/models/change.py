"""Change model for files reported by git status."""

from pathlib import PurePosixPath
from typing import List, Optional

from pydantic import BaseModel


class FileChange(BaseModel):
    """A single changed path from ``git status --porcelain``."""

    path: str
    status: str
    tracked: bool = True
    original_path: Optional[str] = None  # Source of a rename or copy

    @property
    def is_unversioned(self) -> bool:
        return not self.tracked

    @property
    def is_deleted(self) -> bool:
        return "D" in self.status

    @property
    def is_renamed(self) -> bool:
        return self.original_path is not None

    @property
    def is_staged(self) -> bool:
        """Check if the index side of the status has a change."""
        return self.tracked and self.status[:1] not in (" ", "?", "!")

    @property
    def name(self) -> str:
        return PurePosixPath(self.path.rstrip("/")).name

    @property
    def parent_dir(self) -> str:
        parent = str(PurePosixPath(self.path.rstrip("/")).parent)
        return "" if parent == "." else parent

    @property
    def pathspecs(self) -> List[str]:
        """Paths that must be passed to git to commit this change in full."""
        if self.original_path:
            return [self.path, self.original_path]
        return [self.path]
