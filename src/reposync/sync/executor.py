"""
reposync plan executors.

Applies a Plan to the target endpoint. The phase order is fixed for every
endpoint:

1. remove files
2. remove directories
3. create directories
4. copy files

Files go before directories so no non-empty directory is removed, removals
go before creations so a path that changed kind does not collide, and
directories exist before any file is copied into them.

Nothing is rolled back: a failure leaves the target partially updated.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from reposync.core.config import TransportConfig
from reposync.core.logging import get_logger
from reposync.core.models import Direction, ExecutionResult, Plan, Remote
from reposync.platform.base import CommandRunner
from reposync.platform.local import (
    create_directory,
    remove_directory_if_empty,
    remove_file,
)
from reposync.platform.sftp import SftpBatch

logger = get_logger(__name__)


class PlanExecutor(ABC):
    """Base class running the four plan phases in their fixed order."""

    direction: Direction

    def __init__(
        self,
        local_root: Path,
        remote: Remote,
        transport: TransportConfig,
        runner: CommandRunner,
    ) -> None:
        self.local_root = local_root
        self.remote = remote
        self.transport = transport
        self.runner = runner

    def apply(self, plan: Plan) -> ExecutionResult:
        result = ExecutionResult(direction=self.direction)
        self.remove_files(plan.remove_files, result)
        self.remove_directories(plan.remove_directories, result)
        self.create_directories(plan.create_directories, result)
        self.copy_files(plan.copy_files, result)
        self.finish(result)
        return result

    def new_batch(self) -> SftpBatch:
        return SftpBatch(self.remote.host, self.transport, self.runner)

    def local_path(self, relative_path: str) -> str:
        return (self.local_root / relative_path).as_posix()

    @abstractmethod
    def remove_files(self, paths: tuple[str, ...], result: ExecutionResult) -> None:
        """Remove files that the source does not have."""

    @abstractmethod
    def remove_directories(self, paths: tuple[str, ...], result: ExecutionResult) -> None:
        """Remove directories that the source does not have."""

    @abstractmethod
    def create_directories(self, paths: tuple[str, ...], result: ExecutionResult) -> None:
        """Create directories missing on the target, parents first."""

    @abstractmethod
    def copy_files(self, paths: tuple[str, ...], result: ExecutionResult) -> None:
        """Copy new or changed files from source to target."""

    def finish(self, result: ExecutionResult) -> None:
        """Flush any pending work."""


class LocalTargetExecutor(PlanExecutor):
    """Pull: mutates the local tree, fetching files from the remote."""

    direction = Direction.PULL

    def remove_files(self, paths: tuple[str, ...], result: ExecutionResult) -> None:
        for path in paths:
            remove_file(self.local_root, path)
            result.removed_files.append(path)

    def remove_directories(self, paths: tuple[str, ...], result: ExecutionResult) -> None:
        # Deepest first, so a parent emptied by removing its children can go too.
        for path in reversed(paths):
            if remove_directory_if_empty(self.local_root, path):
                result.removed_directories.append(path)
            else:
                logger.debug("Keeping non-empty directory", path=path)
                result.kept_directories.append(path)

    def create_directories(self, paths: tuple[str, ...], result: ExecutionResult) -> None:
        for path in paths:
            create_directory(self.local_root, path)
            result.created_directories.append(path)

    def copy_files(self, paths: tuple[str, ...], result: ExecutionResult) -> None:
        batch = self.new_batch()
        for path in paths:
            batch.get(self.remote.join(path), self.local_path(path))
        batch.execute()
        result.copied_files.extend(paths)


class RemoteTargetExecutor(PlanExecutor):
    """
    Push: mutates the remote tree through one sftp batch.

    Remote directories are never removed. Checking that a remote directory is
    empty would need a second round trip, and it may hold ignored files that
    must survive, so orphaned remote directories are left behind.
    """

    direction = Direction.PUSH

    def __init__(
        self,
        local_root: Path,
        remote: Remote,
        transport: TransportConfig,
        runner: CommandRunner,
    ) -> None:
        super().__init__(local_root, remote, transport, runner)
        self.batch = self.new_batch()
        self._pending = ExecutionResult(direction=self.direction)

    def remove_files(self, paths: tuple[str, ...], result: ExecutionResult) -> None:
        for path in paths:
            self.batch.remove(self.remote.join(path))
            self._pending.removed_files.append(path)

    def remove_directories(self, paths: tuple[str, ...], result: ExecutionResult) -> None:
        if paths:
            logger.debug("Skipping remote directory removal", count=len(paths))
        result.skipped_directories.extend(paths)

    def create_directories(self, paths: tuple[str, ...], result: ExecutionResult) -> None:
        for path in paths:
            self.batch.mkdir(self.remote.join(path))
            self._pending.created_directories.append(path)

    def copy_files(self, paths: tuple[str, ...], result: ExecutionResult) -> None:
        for path in paths:
            self.batch.put(self.local_path(path), self.remote.join(path))
            self._pending.copied_files.append(path)

    def finish(self, result: ExecutionResult) -> None:
        self.batch.execute()
        result.removed_files.extend(self._pending.removed_files)
        result.created_directories.extend(self._pending.created_directories)
        result.copied_files.extend(self._pending.copied_files)


def get_executor(
    direction: Direction,
    local_root: Path,
    remote: Remote,
    transport: TransportConfig,
    runner: CommandRunner,
) -> PlanExecutor:
    """Get the executor that mutates the target endpoint of direction."""
    if direction is Direction.PUSH:
        return RemoteTargetExecutor(local_root, remote, transport, runner)
    return LocalTargetExecutor(local_root, remote, transport, runner)


def apply_plan(
    plan: Plan,
    local_root: Path,
    remote: Remote,
    direction: Direction,
    transport: TransportConfig | None = None,
    runner: CommandRunner | None = None,
) -> ExecutionResult:
    """Apply plan to the target endpoint selected by direction."""
    executor = get_executor(
        direction,
        local_root,
        remote,
        transport or TransportConfig(),
        runner or CommandRunner(),
    )
    return executor.apply(plan)
