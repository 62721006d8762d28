"""
Batched sftp transfer session.

Instructions are accumulated in order and sent to a single `sftp -b -`
process. In batch mode sftp aborts on the first failing instruction and
exits non-zero, which is what decides success of the whole batch.
"""

from __future__ import annotations

from reposync.core.config import TransportConfig
from reposync.core.errors import TransferError
from reposync.core.logging import get_logger
from reposync.platform.base import CommandResult, CommandRunner

logger = get_logger(__name__)


def quote_sftp_argument(value: str) -> str:
    """Double-quote a path for an sftp batch line."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class SftpBatch:
    """An ordered list of sftp instructions executed as one session."""

    def __init__(self, host: str, transport: TransportConfig, runner: CommandRunner) -> None:
        self.host = host
        self.transport = transport
        self.runner = runner
        self.instructions: list[str] = []

    def _add(self, verb: str, *paths: str) -> None:
        self.instructions.append(" ".join([verb, *(quote_sftp_argument(p) for p in paths)]))

    def remove(self, remote_path: str) -> None:
        self._add("rm", remote_path)

    def mkdir(self, remote_path: str) -> None:
        self._add("mkdir", remote_path)

    def put(self, local_path: str, remote_path: str) -> None:
        self._add("put", local_path, remote_path)

    def get(self, remote_path: str, local_path: str) -> None:
        self._add("get", remote_path, local_path)

    def script(self) -> str:
        return "".join(f"{line}\n" for line in self.instructions)

    def execute(self) -> CommandResult | None:
        """Run the batch. An empty batch does not spawn sftp at all."""
        if not self.instructions:
            return None

        command = [*self.transport.sftp_command, "-b", "-", self.host]
        logger.debug("Running sftp batch", host=self.host, instructions=len(self.instructions))
        result = self.runner.run(command, input_text=self.script())
        if not result.success:
            raise TransferError(
                f"sftp failed with status code {result.returncode}: {result.combined_output()}",
                returncode=result.returncode,
            )
        return result
