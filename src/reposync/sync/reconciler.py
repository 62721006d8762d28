"""
reposync reconciler.

Computes the plan that turns a target tree into a copy of a source tree.
"""

from __future__ import annotations

from typing import Callable, Sequence, TypeVar

from reposync.core.models import Directory, File, Plan, Snapshot, path_key

Entry = TypeVar("Entry", File, Directory)


def _merge(
    source: Sequence[Entry],
    target: Sequence[Entry],
    on_missing: Callable[[Entry], None],
    on_extra: Callable[[Entry], None],
    on_both: Callable[[Entry, Entry], None],
) -> None:
    """Two-pointer merge-join of two path-sorted entry lists."""
    source = sorted(source, key=lambda entry: path_key(entry.path))
    target = sorted(target, key=lambda entry: path_key(entry.path))
    i = j = 0

    while i < len(source) and j < len(target):
        source_key = path_key(source[i].path)
        target_key = path_key(target[j].path)
        if source_key == target_key:
            on_both(source[i], target[j])
            i += 1
            j += 1
        elif source_key < target_key:
            on_missing(source[i])
            i += 1
        else:
            on_extra(target[j])
            j += 1

    for entry in source[i:]:
        on_missing(entry)
    for entry in target[j:]:
        on_extra(entry)


def reconcile(source: Snapshot, target: Snapshot) -> Plan:
    """
    Compute the one-way plan from source to target.

    Directories and files are merged independently. Files match on path and
    size only. Every list comes out in path-component order, so ancestors
    precede their descendants.
    """
    remove_files: list[str] = []
    remove_directories: list[str] = []
    create_directories: list[str] = []
    copy_files: list[str] = []

    _merge(
        source.directories,
        target.directories,
        on_missing=lambda d: create_directories.append(d.path),
        on_extra=lambda d: remove_directories.append(d.path),
        on_both=lambda s, t: None,
    )

    def compare_files(source_file: File, target_file: File) -> None:
        if source_file.size != target_file.size:
            copy_files.append(source_file.path)

    _merge(
        source.files,
        target.files,
        on_missing=lambda f: copy_files.append(f.path),
        on_extra=lambda f: remove_files.append(f.path),
        on_both=compare_files,
    )

    return Plan(
        remove_files=tuple(remove_files),
        remove_directories=tuple(remove_directories),
        create_directories=tuple(create_directories),
        copy_files=tuple(copy_files),
    )
