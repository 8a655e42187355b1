"""Tests for checkbox state retention."""

from smart_git_commit.core.selection import SelectionState
from smart_git_commit.core.status import parse_porcelain


def test_new_files_are_selected_by_default():
    changes = parse_porcelain(" M a.py\n?? b.txt\n")
    state = SelectionState()
    assert [c.path for c in state.selected(changes)] == ["a.py", "b.txt"]
    assert state.master_checked(changes)


def test_deselection_survives_refresh():
    state = SelectionState()
    state.sync(parse_porcelain(" M a.py\n M b.py\n"))
    state.deselect("b.py")

    # A refresh that still lists b.py and adds c.py
    refreshed = parse_porcelain(" M a.py\n M b.py\n?? c.py\n")
    state.sync(refreshed)

    assert not state.is_selected("b.py")
    assert state.is_selected("c.py")
    assert [c.path for c in state.selected(refreshed)] == ["a.py", "c.py"]


def test_sync_forgets_vanished_paths():
    state = SelectionState()
    state.deselect("committed.py")
    state.sync(parse_porcelain(" M other.py\n"))
    assert state.deselected == set()

    # The same path coming back later starts selected again
    assert state.is_selected("committed.py")


def test_toggle_and_set_all():
    changes = parse_porcelain(" M a.py\n M b.py\n")
    state = SelectionState()

    assert state.toggle("a.py") is False
    assert state.summary(changes) == (False, True)
    assert not state.master_checked(changes)

    state.set_all(changes, False)
    assert state.summary(changes) == (False, False)

    state.set_all(changes, True)
    assert state.summary(changes) == (True, True)
    assert state.toggle("a.py") is False
    assert state.toggle("a.py") is True


def test_master_unchecked_without_rows():
    assert not SelectionState().master_checked([])
