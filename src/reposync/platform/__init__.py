"""
reposync Platform Layer.

Collaborators that touch the outside world: the local filesystem, the
remote host over ssh and sftp, and git's ignore rules.
"""

from __future__ import annotations

from reposync.platform.base import CommandResult, CommandRunner
from reposync.platform.ignore import GitIgnoreFilter
from reposync.platform.local import scan_local_tree
from reposync.platform.remote import RemoteScanner
from reposync.platform.sftp import SftpBatch

__all__ = [
    "CommandResult",
    "CommandRunner",
    "GitIgnoreFilter",
    "RemoteScanner",
    "SftpBatch",
    "scan_local_tree",
]
