"""Checkbox state for changed files, kept across refreshes."""

from typing import Iterable, List, Set, Tuple

from smart_git_commit.models.change import FileChange


class SelectionState:
    """Remembers which files the user unchecked.

    Only deselections are stored, so files that show up after a refresh are
    selected by default.
    """

    def __init__(self):
        self.deselected: Set[str] = set()

    def sync(self, changes: Iterable[FileChange]) -> None:
        """Forget deselections for paths that are no longer changed."""
        present = {change.path for change in changes}
        self.deselected &= present

    def is_selected(self, path: str) -> bool:
        return path not in self.deselected

    def select(self, path: str) -> None:
        self.deselected.discard(path)

    def deselect(self, path: str) -> None:
        self.deselected.add(path)

    def toggle(self, path: str) -> bool:
        """Flip a path's checkbox and return the new state."""
        if self.is_selected(path):
            self.deselect(path)
            return False
        self.select(path)
        return True

    def set_all(self, changes: Iterable[FileChange], selected: bool) -> None:
        for change in changes:
            if selected:
                self.select(change.path)
            else:
                self.deselect(change.path)

    def selected(self, changes: Iterable[FileChange]) -> List[FileChange]:
        return [change for change in changes if self.is_selected(change.path)]

    def summary(self, changes: Iterable[FileChange]) -> Tuple[bool, bool]:
        """Return (all_selected, any_selected) over ``changes``."""
        states = [self.is_selected(change.path) for change in changes]
        return all(states), any(states)

    def master_checked(self, changes: Iterable[FileChange]) -> bool:
        """The master checkbox is checked only when every row is."""
        all_selected, any_selected = self.summary(changes)
        return all_selected and any_selected
