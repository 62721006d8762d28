"""
reposync error hierarchy.

Every failure that ends a run derives from ReposyncError so the CLI can
report it as a single line.
"""

from __future__ import annotations


class ReposyncError(Exception):
    """Base class for all reposync failures."""


class CollaboratorError(ReposyncError):
    """An external command could not be spawned, misbehaved, or failed."""


class RemoteScanError(CollaboratorError):
    """Listing the remote tree failed or produced malformed output."""


class IgnoreFilterError(CollaboratorError):
    """git check-ignore failed or answered unexpectedly."""


class TransferError(CollaboratorError):
    """The sftp batch session exited with a non-zero status."""

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class LocalIOError(ReposyncError):
    """A filesystem call on the local tree failed."""

    def __init__(self, operation: str, path: str, reason: str) -> None:
        super().__init__(f"failed to {operation} {path}: {reason}")
        self.operation = operation
        self.path = path
        self.reason = reason


class RemoteDescriptorError(ReposyncError, ValueError):
    """A remote descriptor is not of the form host:path."""
