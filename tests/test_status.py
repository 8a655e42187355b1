"""Tests for porcelain status parsing."""

import pytest

from smart_git_commit.core.status import (
    merge_unversioned,
    parse_porcelain,
    parse_porcelain_line,
    split_sections,
    unquote_path,
)


@pytest.mark.parametrize(
    "line, path, tracked",
    [
        (" M src/app.py", "src/app.py", True),
        ("M  src/app.py", "src/app.py", True),
        ("MM src/app.py", "src/app.py", True),
        ("A  new_file.txt", "new_file.txt", True),
        (" D removed.txt", "removed.txt", True),
        ("D  removed.txt", "removed.txt", True),
        ("UU conflicted.txt", "conflicted.txt", True),
        ("?? notes.md", "notes.md", False),
        ("?? build/", "build/", False),
    ],
)
def test_status_codes(line, path, tracked):
    """Each documented status code maps to a path and a tracked flag."""
    change = parse_porcelain_line(line)
    assert change is not None
    assert change.path == path
    assert change.tracked is tracked
    assert change.status == line[:2]


def test_deleted_detection():
    assert parse_porcelain_line(" D gone.txt").is_deleted
    assert parse_porcelain_line("D  gone.txt").is_deleted
    assert not parse_porcelain_line(" M kept.txt").is_deleted


def test_staged_detection():
    assert parse_porcelain_line("M  a.txt").is_staged
    assert parse_porcelain_line("A  a.txt").is_staged
    assert not parse_porcelain_line(" M a.txt").is_staged
    assert not parse_porcelain_line("?? a.txt").is_staged


def test_ignored_and_blank_lines_are_skipped():
    output = "\n!! ignored.log\n M kept.py\n\n"
    changes = parse_porcelain(output)
    assert [c.path for c in changes] == ["kept.py"]


def test_rename_keeps_both_paths():
    change = parse_porcelain_line("R  old/name.py -> new/name.py")
    assert change.path == "new/name.py"
    assert change.original_path == "old/name.py"
    assert change.is_renamed
    assert change.pathspecs == ["new/name.py", "old/name.py"]


def test_quoted_rename_with_arrow_inside_name():
    change = parse_porcelain_line('R  "a -> b.txt" -> "c d.txt"')
    assert change.original_path == "a -> b.txt"
    assert change.path == "c d.txt"


def test_quoted_paths_are_unquoted():
    assert parse_porcelain_line('?? "with space.txt"').path == "with space.txt"
    assert unquote_path('"caf\\303\\251.txt"') == "café.txt"
    assert unquote_path('"tab\\there"') == "tab\there"
    assert unquote_path('"quote\\"d"') == 'quote"d'
    assert unquote_path("plain.txt") == "plain.txt"


def test_name_and_parent_dir():
    change = parse_porcelain_line(" M src/pkg/module.py")
    assert change.name == "module.py"
    assert change.parent_dir == "src/pkg"

    top_level = parse_porcelain_line(" M setup.py")
    assert top_level.parent_dir == ""

    directory = parse_porcelain_line("?? build/")
    assert directory.name == "build"


def test_split_sections_keeps_order():
    changes = parse_porcelain(" M b.py\n?? z.txt\nA  a.py\n?? y.txt\n")
    tracked, unversioned = split_sections(changes)
    assert [c.path for c in tracked] == ["b.py", "a.py"]
    assert [c.path for c in unversioned] == ["z.txt", "y.txt"]


def test_merge_unversioned_skips_duplicates():
    tracked = parse_porcelain(" M a.py\nA  b.py\n")
    merged = merge_unversioned(tracked, ["b.py", "c.txt", "c.txt", "d/e.txt"])
    assert [(c.path, c.tracked) for c in merged] == [
        ("a.py", True),
        ("b.py", True),
        ("c.txt", False),
        ("d/e.txt", False),
    ]
