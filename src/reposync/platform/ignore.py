"""
Ignore-rule filtering through git check-ignore.
"""

from __future__ import annotations

from pathlib import Path

from reposync.core.config import TransportConfig
from reposync.core.errors import IgnoreFilterError
from reposync.core.logging import get_logger
from reposync.core.models import Snapshot
from reposync.platform.base import CommandRunner
from reposync.platform.parsers import parse_check_ignore_line

logger = get_logger(__name__)

# check-ignore exits 1 when no path was ignored; that is still a valid answer.
ACCEPTED_EXIT_CODES = (0, 1)


class GitIgnoreFilter:
    """Keeps only the snapshot entries that git would track in a checkout."""

    def __init__(self, transport: TransportConfig, runner: CommandRunner) -> None:
        self.transport = transport
        self.runner = runner

    def build_command(self, repository: Path) -> list[str]:
        return [
            *self.transport.git_command,
            "-C",
            repository.as_posix(),
            "check-ignore",
            "--non-matching",
            "--stdin",
            "--verbose",
        ]

    def filter(self, snapshot: Snapshot, repository: Path) -> Snapshot:
        """
        Return a new snapshot without ignored entries.

        Every path is sent to git as one input line and must be answered by
        exactly one output line, in the same order.
        """
        paths = snapshot.paths()
        if not paths:
            return snapshot

        result = self.runner.run(
            self.build_command(repository),
            input_text="".join(f"{path}\n" for path in paths),
        )
        if result.returncode not in ACCEPTED_EXIT_CODES:
            raise IgnoreFilterError(
                f"git check-ignore failed with status code {result.returncode}: "
                f"{result.combined_output()}"
            )

        responses = result.stdout.split("\n")
        if responses[-1] == "":
            responses.pop()
        if len(responses) < len(paths):
            raise IgnoreFilterError(
                f"git check-ignore answered {len(responses)} of {len(paths)} paths"
            )

        keep = {
            path: parse_check_ignore_line(line, self.transport.metadata_dir)
            for path, line in zip(paths, responses)
        }
        filtered = snapshot.filter(lambda path: keep[path])
        logger.debug(
            "Filtered snapshot by ignore rules",
            repository=str(repository),
            kept=len(filtered.directories) + len(filtered.files),
            dropped=len(paths) - len(filtered.directories) - len(filtered.files),
        )
        return filtered
