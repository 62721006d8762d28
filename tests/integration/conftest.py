"""
Fixtures for integration tests.

FakeRunner stands in for ssh, sftp, and git: it answers git check-ignore
from a set of ignored paths, serves a canned remote listing, and records
sftp batches.
"""

from pathlib import Path

import pytest

from reposync.core.config import ReposyncConfig
from reposync.core.session import SyncSession
from reposync.platform.base import CommandResult, CommandRunner


class FakeRunner(CommandRunner):
    """Command runner that never spawns a process."""

    def __init__(self, remote_listing: str = "", ignored: set[str] | None = None) -> None:
        super().__init__()
        self.remote_listing = remote_listing
        self.ignored = ignored or set()
        self.sftp_returncode = 0
        self.ssh_returncode = 0
        self.commands: list[list[str]] = []
        self.sftp_scripts: list[str] = []

    def run(self, command: list[str], input_text: str | None = None) -> CommandResult:
        self.commands.append(command)
        program = command[0]

        if program == "git":
            lines = []
            for path in (input_text or "").splitlines():
                if path in self.ignored:
                    lines.append(f".gitignore:1:{path}\t{path}")
                else:
                    lines.append(f"::\t{path}")
            return CommandResult(0, "".join(f"{line}\n" for line in lines), "", command)

        if program == "ssh":
            return CommandResult(self.ssh_returncode, self.remote_listing, "", command)

        if program == "sftp":
            self.sftp_scripts.append(input_text or "")
            return CommandResult(self.sftp_returncode, "", "", command)

        raise AssertionError(f"unexpected command: {command}")


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def repo(temp_dir: Path) -> Path:
    """A small local checkout."""
    root = temp_dir / "repo"
    (root / ".git").mkdir(parents=True)
    (root / ".git" / "HEAD").write_text("ref: refs/heads/main\n")
    (root / "src").mkdir()
    (root / "src" / "main.py").write_text("print('hi')\n")
    (root / "README.md").write_text("# repo\n")
    (root / "build").mkdir()
    (root / "build" / "out.o").write_bytes(b"\x00" * 16)
    return root


@pytest.fixture
def session(repo: Path, sample_config: ReposyncConfig, fake_runner: FakeRunner) -> SyncSession:
    fake_runner.ignored = {"build", "build/out.o"}
    return SyncSession(config=sample_config, local_root=repo, runner=fake_runner)
