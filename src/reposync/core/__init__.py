"""
reposync Core - Data model and service layer.

Contains snapshots and plans, configuration, logging, errors, and the
session that drives one sync run.
"""

from reposync.core.config import ReposyncConfig
from reposync.core.errors import ReposyncError
from reposync.core.logging import get_logger, setup_logging
from reposync.core.models import Direction, Plan, Remote, Snapshot
from reposync.core.session import SyncReport, SyncSession

__all__ = [
    "ReposyncConfig",
    "ReposyncError",
    "Direction",
    "Plan",
    "Remote",
    "Snapshot",
    "SyncReport",
    "SyncSession",
    "get_logger",
    "setup_logging",
]
