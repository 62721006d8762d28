"""
Local filesystem scanning and mutation helpers.
"""

from __future__ import annotations

import os
import stat
from pathlib import Path

from reposync.core.errors import LocalIOError
from reposync.core.models import Directory, File, Snapshot, normalize_path


def _raise_walk_error(error: OSError) -> None:
    raise LocalIOError("walk", str(error.filename or ""), error.strerror or str(error)) from error


def scan_local_tree(root: Path) -> Snapshot:
    """
    Recursively snapshot every file and directory below root.

    Symbolic links are skipped and never followed. Any entry that cannot be
    read fails the whole scan.
    """
    directories: list[Directory] = []
    files: list[File] = []

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        current = Path(dirpath)
        kept_dirnames = []
        for dirname in dirnames:
            path = current / dirname
            if path.is_symlink():
                continue
            kept_dirnames.append(dirname)
            directories.append(Directory(path=normalize_path(path.relative_to(root))))
        dirnames[:] = kept_dirnames

        for filename in filenames:
            path = current / filename
            try:
                info = path.lstat()
            except OSError as exc:
                raise LocalIOError("stat", str(path), exc.strerror or str(exc)) from exc
            if not stat.S_ISREG(info.st_mode):
                continue
            files.append(File(path=normalize_path(path.relative_to(root)), size=info.st_size))

    return Snapshot.from_entries(directories, files)


def remove_file(root: Path, relative_path: str) -> None:
    path = root / relative_path
    try:
        path.unlink()
    except OSError as exc:
        raise LocalIOError("remove file", str(path), exc.strerror or str(exc)) from exc


def remove_directory_if_empty(root: Path, relative_path: str) -> bool:
    """
    Remove a directory only if it is empty at this moment.

    The directory may hold ignored or untracked content the source never saw;
    such a directory is left alone. Returns True if it was removed.
    """
    path = root / relative_path
    try:
        with os.scandir(path) as entries:
            if next(entries, None) is not None:
                return False
        path.rmdir()
    except OSError as exc:
        raise LocalIOError("remove directory", str(path), exc.strerror or str(exc)) from exc
    return True


def create_directory(root: Path, relative_path: str) -> None:
    path = root / relative_path
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise LocalIOError("create directory", str(path), exc.strerror or str(exc)) from exc
