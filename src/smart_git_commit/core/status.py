"""Parsing of ``git status --porcelain`` output."""

from typing import Iterable, List, Optional, Tuple

from smart_git_commit.models.change import FileChange

UNVERSIONED = "??"
IGNORED = "!!"

_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    '"': '"',
    "\\": "\\",
}


def unquote_path(path: str) -> str:
    """Undo git's C-style quoting of paths with special characters.

    Git wraps such paths in double quotes and escapes non-ASCII bytes as
    octal sequences, e.g. ``"caf\\303\\251.txt"``.
    """
    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
        return path

    inner = path[1:-1]
    out = bytearray()
    i = 0
    while i < len(inner):
        ch = inner[i]
        if ch != "\\" or i + 1 >= len(inner):
            out += ch.encode("utf-8")
            i += 1
            continue
        nxt = inner[i + 1]
        octal = inner[i + 1 : i + 4]
        if len(octal) == 3 and all(c in "01234567" for c in octal):
            out.append(int(octal, 8) & 0xFF)
            i += 4
        else:
            out += _ESCAPES.get(nxt, nxt).encode("utf-8")
            i += 2
    return out.decode("utf-8", errors="replace")


def _split_rename(rest: str) -> Tuple[str, Optional[str]]:
    # Quoted halves may themselves contain " -> ", so split outside quotes.
    in_quotes = False
    escaped = False
    for i, ch in enumerate(rest):
        if escaped:
            escaped = False
        elif ch == "\\" and in_quotes:
            escaped = True
        elif ch == '"':
            in_quotes = not in_quotes
        elif not in_quotes and rest.startswith(" -> ", i):
            return unquote_path(rest[i + 4 :]), unquote_path(rest[:i])
    return unquote_path(rest), None


def parse_porcelain_line(line: str) -> Optional[FileChange]:
    """Parse one porcelain v1 line, or return None for blank/ignored lines."""
    line = line.rstrip("\r\n")
    if not line.strip() or len(line) < 4:
        return None

    code = line[:2]
    rest = line[3:]

    if code == IGNORED:
        return None

    if code == UNVERSIONED:
        return FileChange(path=unquote_path(rest), status=code, tracked=False)

    original_path = None
    if "R" in code or "C" in code:
        path, original_path = _split_rename(rest)
    else:
        path = unquote_path(rest)

    return FileChange(
        path=path, status=code, tracked=True, original_path=original_path
    )


def parse_porcelain(output: str) -> List[FileChange]:
    """Parse ``git status --porcelain`` output into file changes."""
    changes = []
    for line in output.splitlines():
        change = parse_porcelain_line(line)
        if change is not None:
            changes.append(change)
    return changes


def split_sections(
    changes: Iterable[FileChange],
) -> Tuple[List[FileChange], List[FileChange]]:
    """Split changes into (tracked, unversioned) lists, keeping order."""
    tracked, unversioned = [], []
    for change in changes:
        (tracked if change.tracked else unversioned).append(change)
    return tracked, unversioned


def merge_unversioned(
    tracked: Iterable[FileChange], unversioned_paths: Iterable[str]
) -> List[FileChange]:
    """Tracked changes first, then unversioned files not already listed."""
    result = list(tracked)
    seen = {change.path for change in result}
    for path in unversioned_paths:
        if path not in seen:
            result.append(FileChange(path=path, status=UNVERSIONED, tracked=False))
            seen.add(path)
    return result
