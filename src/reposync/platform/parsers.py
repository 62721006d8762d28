"""
Output parsers.

Parsers for the remote find listing and git check-ignore responses.
"""

from __future__ import annotations

import re

from reposync.core.errors import IgnoreFilterError, RemoteScanError
from reposync.core.models import Directory, File, Snapshot, normalize_path

# <source>:<linenum>:<pattern>; the source file name may itself contain colons.
CHECK_IGNORE_HEADER = re.compile(r"(?P<source>.*?):(?P<linenum>\d*):(?P<pattern>.*)")


def parse_find_line(line: str) -> File | Directory | None:
    """
    Parse one "<path> <type> <size>" line of the remote listing.

    Splits from the right so the path may contain spaces. Returns None for the
    starting point itself (empty path).
    """
    stripped = line.rstrip()
    head, sep, size_text = stripped.rpartition(" ")
    if not sep:
        raise RemoteScanError(f"malformed find output line: {line}")
    path_text, sep, entry_type = head.rpartition(" ")
    if not sep:
        raise RemoteScanError(f"malformed find output line: {line}")

    path = normalize_path(path_text)
    entry_type = entry_type.strip()

    if entry_type == "f":
        try:
            size = int(size_text)
        except ValueError as exc:
            raise RemoteScanError(f"failed to parse file size in line: {line}") from exc
        if size < 0:
            raise RemoteScanError(f"negative file size in line: {line}")
        return File(path=path, size=size)
    if entry_type == "d":
        if not path:
            return None
        return Directory(path=path)
    raise RemoteScanError(f"malformed find output line (incorrect file type): {line}")


def parse_find_output(output: str) -> Snapshot:
    """Parse the full remote listing into a snapshot."""
    directories: list[Directory] = []
    files: list[File] = []

    for line in output.split("\n"):
        if not line.strip():
            continue
        entry = parse_find_line(line)
        if isinstance(entry, File):
            files.append(entry)
        elif isinstance(entry, Directory):
            directories.append(entry)

    return Snapshot.from_entries(directories, files)


def is_inside_metadata_dir(path: str, metadata_dir: str) -> bool:
    """Whether path is the version-control metadata directory or below it."""
    return path == metadata_dir or path.startswith(f"{metadata_dir}/")


def parse_check_ignore_line(line: str, metadata_dir: str = ".git") -> bool:
    """
    Interpret one line of `git check-ignore --verbose --non-matching`.

    Lines look like "<source>:<linenum>:<pattern>\\t<path>"; non-matching paths
    have all three header fields empty. Returns True when the path should be
    kept: no pattern matched, or the matching pattern is a negation.
    """
    header, sep, path = line.rstrip("\r\n").partition("\t")
    if not sep:
        raise IgnoreFilterError(f"git check-ignore output missing path: {line!r}")

    match = CHECK_IGNORE_HEADER.fullmatch(header)
    if match is None:
        raise IgnoreFilterError(f"git check-ignore output missing pattern: {line!r}")
    pattern = match.group("pattern")

    if is_inside_metadata_dir(path.strip(), metadata_dir):
        return False
    return not pattern or pattern.startswith("!")
