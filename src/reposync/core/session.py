"""
reposync Session Management.

A session runs one sync: scan both trees, apply the ignore rules, reconcile,
and either apply the plan or hand it back for a dry run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from reposync.core.config import ReposyncConfig, load_config
from reposync.core.logging import RunLog, get_logger, setup_logging
from reposync.core.models import Direction, ExecutionResult, Plan, Remote, Snapshot
from reposync.platform.base import CommandRunner
from reposync.platform.ignore import GitIgnoreFilter
from reposync.platform.local import scan_local_tree
from reposync.platform.remote import RemoteScanner
from reposync.sync.executor import get_executor
from reposync.sync.reconciler import reconcile

logger = get_logger(__name__)


@dataclass
class SyncReport:
    """Everything one sync run saw and did."""

    direction: Direction
    local_root: Path
    remote: Remote
    local_snapshot: Snapshot
    remote_snapshot: Snapshot
    plan: Plan
    started_at: datetime = field(default_factory=datetime.now)
    ended_at: datetime | None = None
    result: ExecutionResult | None = None
    phase_seconds: dict[str, float] = field(default_factory=dict)

    @property
    def source_label(self) -> str:
        if self.direction is Direction.PUSH:
            return self.local_root.as_posix()
        return str(self.remote)

    @property
    def target_label(self) -> str:
        if self.direction is Direction.PUSH:
            return str(self.remote)
        return self.local_root.as_posix()

    @property
    def target_name(self) -> str:
        """Short name of the mutated endpoint for summaries."""
        if self.direction is Direction.PUSH:
            return self.remote.host
        return "local host"

    def to_dict(self) -> dict[str, Any]:
        return {
            "direction": self.direction.value,
            "source": self.source_label,
            "target": self.target_label,
            "started_at": self.started_at.isoformat(),
            "ended_at": self.ended_at.isoformat() if self.ended_at else None,
            "plan": self.plan.to_dict(),
            "result": self.result.to_dict() if self.result else None,
            "phase_seconds": dict(self.phase_seconds),
        }


class SyncSession:
    """
    Runs sync operations between a local checkout and a remote tree.

    Both trees are filtered with the local checkout's ignore rules, so content
    git does not track is neither sent nor deleted.
    """

    def __init__(
        self,
        config: ReposyncConfig | None = None,
        local_root: Path | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        self.config = config or load_config()
        setup_logging(self.config.logging)

        self.local_root = local_root or Path.cwd()
        self.runner = runner or CommandRunner(timeout=self.config.transport.command_timeout_seconds)
        self.ignore_filter = GitIgnoreFilter(self.config.transport, self.runner)
        self.remote_scanner = RemoteScanner(self.config.transport, self.runner)

        logger.debug("Session started", local_root=str(self.local_root))

    def scan_local(self, run_log: RunLog | None = None) -> Snapshot:
        """Snapshot the local tree with ignored entries removed."""
        run_log = run_log or RunLog(logger)
        with run_log.phase("local scan", root=str(self.local_root)) as counts:
            snapshot = scan_local_tree(self.local_root)
            snapshot = self.ignore_filter.filter(snapshot, self.local_root)
            counts.update(directories=len(snapshot.directories), files=len(snapshot.files))
        return snapshot

    def scan_remote(self, remote: Remote, run_log: RunLog | None = None) -> Snapshot:
        """Snapshot the remote tree with ignored entries removed."""
        run_log = run_log or RunLog(logger)
        with run_log.phase("remote scan", remote=str(remote)) as counts:
            snapshot = self.remote_scanner.scan(remote)
            snapshot = self.ignore_filter.filter(snapshot, self.local_root)
            counts.update(directories=len(snapshot.directories), files=len(snapshot.files))
        return snapshot

    def prepare(self, direction: Direction, remote: Remote) -> SyncReport:
        """Scan both trees and compute the plan without changing anything."""
        run_log = RunLog(logger)
        local_snapshot = self.scan_local(run_log)
        remote_snapshot = self.scan_remote(remote, run_log)

        with run_log.phase("reconcile", direction=direction.value) as counts:
            if direction is Direction.PUSH:
                plan = reconcile(local_snapshot, remote_snapshot)
            else:
                plan = reconcile(remote_snapshot, local_snapshot)
            counts.update({name: len(paths) for name, paths in plan.to_dict().items()})

        return SyncReport(
            direction=direction,
            local_root=self.local_root,
            remote=remote,
            local_snapshot=local_snapshot,
            remote_snapshot=remote_snapshot,
            plan=plan,
            phase_seconds=run_log.phases,
        )

    def execute(self, report: SyncReport) -> SyncReport:
        """Apply a prepared plan to its target."""
        executor = get_executor(
            report.direction,
            self.local_root,
            report.remote,
            self.config.transport,
            self.runner,
        )
        run_log = self._run_log(report)
        with run_log.phase("apply", target=report.target_label):
            try:
                report.result = executor.apply(report.plan)
            finally:
                report.ended_at = datetime.now()
        run_log.finish(dry_run=False)
        return report

    def run(self, direction: Direction, remote: Remote, dry_run: bool = False) -> SyncReport:
        """Prepare and, unless dry_run, execute a sync."""
        report = self.prepare(direction, remote)
        if dry_run:
            report.ended_at = datetime.now()
            self._run_log(report).finish(dry_run=True)
            return report
        return self.execute(report)

    @staticmethod
    def _run_log(report: SyncReport) -> RunLog:
        return RunLog(
            logger,
            phases=report.phase_seconds,
            direction=report.direction.value,
            remote=str(report.remote),
        )
