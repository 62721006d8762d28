"""
reposync CLI Module.

Provides command-line interface for reposync operations.
"""

from reposync.cli.main import main, cli

__all__ = ["main", "cli"]
