"""
reposync - One-way directory sync between a git checkout and a remote host.

Mirrors only the content git tracks, using ssh for remote listing and a
batched sftp session for transfers.
"""

__version__ = "1.0.0"
__author__ = "reposync developers"

from reposync.core.config import ReposyncConfig
from reposync.core.session import SyncSession

__all__ = ["ReposyncConfig", "SyncSession", "__version__"]
