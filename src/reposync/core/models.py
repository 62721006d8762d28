"""
reposync data models.

Defines tree snapshots, sync plans, and remote descriptors.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable

from reposync.core.errors import RemoteDescriptorError


def normalize_path(path: str | os.PathLike[str]) -> str:
    """Return a relative path in forward-slash form."""
    text = os.fspath(path).replace(os.sep, "/").replace("\\", "/")
    while text.startswith("./"):
        text = text[2:]
    return text.rstrip("/")


def path_key(path: str) -> tuple[str, ...]:
    """Sort key comparing paths component by component."""
    return tuple(path.split("/"))


class Direction(Enum):
    """Which endpoint a sync run mutates."""

    PUSH = "push"  # local -> remote
    PULL = "pull"  # remote -> local

    @property
    def target_is_remote(self) -> bool:
        return self is Direction.PUSH


@dataclass(frozen=True)
class File:
    """A regular file inside a tree."""

    path: str
    size: int

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError(f"File size must be non-negative: {self.path}")

    def __str__(self) -> str:
        return f"{self.path} ({self.size} bytes)"


@dataclass(frozen=True)
class Directory:
    """A directory inside a tree. The tree root is never represented."""

    path: str

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True)
class Snapshot:
    """Directories and files captured from one tree at one point in time."""

    directories: tuple[Directory, ...] = ()
    files: tuple[File, ...] = ()

    @classmethod
    def from_entries(
        cls,
        directories: Iterable[Directory] = (),
        files: Iterable[File] = (),
    ) -> Snapshot:
        return cls(directories=tuple(directories), files=tuple(files))

    @property
    def total_size_bytes(self) -> int:
        return sum(f.size for f in self.files)

    @property
    def is_empty(self) -> bool:
        return not self.directories and not self.files

    def filter(self, keep: Callable[[str], bool]) -> Snapshot:
        """Return a new snapshot holding only entries whose path passes keep."""
        return Snapshot(
            directories=tuple(d for d in self.directories if keep(d.path)),
            files=tuple(f for f in self.files if keep(f.path)),
        )

    def paths(self) -> list[str]:
        """All entry paths, directories first."""
        return [d.path for d in self.directories] + [f.path for f in self.files]


@dataclass(frozen=True)
class Plan:
    """
    Actions that make a target tree equal to a source tree.

    Each list is in ascending path-component order, so a directory always
    precedes its descendants.
    """

    remove_files: tuple[str, ...] = ()
    remove_directories: tuple[str, ...] = ()
    create_directories: tuple[str, ...] = ()
    copy_files: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.total_actions == 0

    @property
    def total_actions(self) -> int:
        return (
            len(self.remove_files)
            + len(self.remove_directories)
            + len(self.create_directories)
            + len(self.copy_files)
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "remove_files": list(self.remove_files),
            "remove_directories": list(self.remove_directories),
            "create_directories": list(self.create_directories),
            "copy_files": list(self.copy_files),
        }


@dataclass(frozen=True)
class Remote:
    """A remote tree addressed as host:path."""

    host: str
    path: str

    @classmethod
    def parse(cls, descriptor: str) -> Remote:
        """
        Parse a host:path descriptor.

        A leading ~/ is dropped since ssh and sftp already start in the home
        directory; an empty path means the home directory itself.
        """
        host, sep, path = descriptor.partition(":")
        if not sep or not host:
            raise RemoteDescriptorError(f"invalid remote: {descriptor}")
        if len(path) > 1:
            path = path.rstrip("/") or "/"
        if path == "~":
            path = ""
        elif path.startswith("~/"):
            path = path[2:]
        return cls(host=host, path=path or ".")

    def join(self, relative_path: str) -> str:
        """Absolute-or-home-relative remote location of a tree entry."""
        if self.path == ".":
            return relative_path
        if self.path == "/":
            return f"/{relative_path}"
        return f"{self.path}/{relative_path}"

    def __str__(self) -> str:
        return f"{self.host}:{self.path}"


@dataclass
class ExecutionResult:
    """What an executor actually did to the target tree."""

    direction: Direction
    removed_files: list[str] = field(default_factory=list)
    removed_directories: list[str] = field(default_factory=list)
    kept_directories: list[str] = field(default_factory=list)
    skipped_directories: list[str] = field(default_factory=list)
    created_directories: list[str] = field(default_factory=list)
    copied_files: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "direction": self.direction.value,
            "removed_files": self.removed_files,
            "removed_directories": self.removed_directories,
            "kept_directories": self.kept_directories,
            "skipped_directories": self.skipped_directories,
            "created_directories": self.created_directories,
            "copied_files": self.copied_files,
        }
