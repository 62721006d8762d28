"""
Remote tree listing over ssh.

The remote side only needs a POSIX shell with GNU find.
"""

from __future__ import annotations

import shlex

from reposync.core.config import TransportConfig
from reposync.core.errors import RemoteScanError
from reposync.core.logging import get_logger
from reposync.core.models import Remote, Snapshot
from reposync.platform.base import CommandRunner
from reposync.platform.parsers import parse_find_output

logger = get_logger(__name__)

# %P: path relative to the starting point, %y: type (f/d), %s: size in bytes.
FIND_FORMAT = "%P %y %s\\n"


def build_listing_command(remote_path: str) -> str:
    """
    Shell command that creates the remote root if needed and lists it.

    -mindepth 1 keeps find from printing the starting point itself.
    """
    quoted = shlex.quote(remote_path)
    printf = shlex.quote(FIND_FORMAT)
    return (
        f"mkdir -p {quoted} && "
        f"find {quoted} -mindepth 1 "
        f"\\( -type f -printf {printf} \\) -o \\( -type d -printf {printf} \\)"
    )


class RemoteScanner:
    """Lists a remote tree by running find on the host over ssh."""

    def __init__(self, transport: TransportConfig, runner: CommandRunner) -> None:
        self.transport = transport
        self.runner = runner

    def scan(self, remote: Remote) -> Snapshot:
        command = [
            *self.transport.ssh_command,
            remote.host,
            build_listing_command(remote.path),
        ]
        result = self.runner.run(command)
        if not result.success:
            raise RemoteScanError(
                f"remote command failed with status code {result.returncode}: "
                f"{result.combined_output()}"
            )

        snapshot = parse_find_output(result.stdout)
        logger.debug(
            "Scanned remote tree",
            remote=str(remote),
            directories=len(snapshot.directories),
            files=len(snapshot.files),
        )
        return snapshot
