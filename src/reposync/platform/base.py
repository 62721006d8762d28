"""
reposync command execution.

Every external program (ssh, sftp, git) is spawned through CommandRunner so
that collaborators can be exercised with a mock runner.
"""

from __future__ import annotations

import subprocess
import time

from reposync.core.errors import CollaboratorError
from reposync.core.logging import get_logger

logger = get_logger(__name__)


class CommandResult:
    """Result of a command execution."""

    def __init__(
        self,
        returncode: int,
        stdout: str,
        stderr: str,
        command: str | list[str],
        duration_seconds: float = 0.0,
    ) -> None:
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.command = command
        self.duration_seconds = duration_seconds

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def command_text(self) -> str:
        return self.command if isinstance(self.command, str) else " ".join(self.command)

    def combined_output(self) -> str:
        """Stdout and stderr joined for diagnostics."""
        parts = [text.strip() for text in (self.stdout, self.stderr) if text and text.strip()]
        if not parts:
            return "<command has no output>"
        return " ".join(parts)

    def __repr__(self) -> str:
        return f"CommandResult(rc={self.returncode}, cmd='{self.command_text[:50]}...')"


class CommandRunner:
    """Runs external commands synchronously and captures their output."""

    def __init__(self, timeout: int | None = None) -> None:
        self.timeout = timeout

    def run(self, command: list[str], input_text: str | None = None) -> CommandResult:
        """
        Run a command to completion.

        input_text is written to the command's stdin, which is then closed. Text
        is UTF-8 with surrogate escapes, so file names that are not valid UTF-8
        pass through unchanged.
        Raises CollaboratorError if the command cannot be spawned or times out;
        a non-zero exit status is reported through the result.
        """
        logger.debug("Running command", command=command)
        start_time = time.time()

        try:
            result = subprocess.run(
                command,
                input=input_text,
                capture_output=True,
                encoding="utf-8",
                errors="surrogateescape",
                timeout=self.timeout,
            )
        except FileNotFoundError as exc:
            raise CollaboratorError(f"failed to spawn {command[0]}: {exc}") from exc
        except subprocess.TimeoutExpired as exc:
            raise CollaboratorError(
                f"{command[0]} timed out after {self.timeout}s"
            ) from exc
        except OSError as exc:
            raise CollaboratorError(f"failed to run {command[0]}: {exc}") from exc
        except UnicodeError as exc:
            raise CollaboratorError(f"failed to exchange text with {command[0]}: {exc}") from exc

        cmd_result = CommandResult(
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            command=command,
            duration_seconds=time.time() - start_time,
        )

        if not cmd_result.success:
            logger.debug(
                "Command exited with non-zero status",
                command=command,
                returncode=result.returncode,
                stderr=cmd_result.stderr[:500],
            )

        return cmd_result
