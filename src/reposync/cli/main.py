"""
reposync CLI Main Entry Point.

Provides the push and pull commands.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click
import humanize
from rich.console import Console
from rich.text import Text

from reposync import __version__
from reposync.core.config import ReposyncConfig, load_config
from reposync.core.errors import ReposyncError
from reposync.core.models import Direction, Plan, Remote, Snapshot
from reposync.core.session import SyncReport, SyncSession

console = Console()
err_console = Console(stderr=True)


def get_session(ctx: click.Context) -> SyncSession:
    """Get or create session from context."""
    if "session" not in ctx.obj:
        ctx.obj["session"] = SyncSession(
            config=ctx.obj["config"],
            local_root=ctx.obj["local_dir"],
        )
    return ctx.obj["session"]


def printable(text: str) -> str:
    """Escape undecodable file name bytes so the text can be written to a terminal."""
    return text.encode("utf-8", "backslashreplace").decode("utf-8")


def emit(line: str, style: str | None = None) -> None:
    """Print a line verbatim, without markup parsing or wrapping."""
    console.print(Text(printable(line), style=style), soft_wrap=True)


@click.group()
@click.version_option(version=__version__, prog_name="reposync")
@click.option(
    "--local-dir",
    "-l",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Local code root directory (default: current directory)",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Print verbose logging")
@click.option("--dry", "-d", "--dry-run", "dry", is_flag=True, help="Print the plan without executing it")
@click.option("--json", "json_output", is_flag=True, help="Print dry-run plans as JSON")
@click.pass_context
def cli(
    ctx: click.Context,
    local_dir: Path | None,
    config: Path | None,
    verbose: bool,
    dry: bool,
    json_output: bool,
) -> None:
    """
    reposync - Mirror a git checkout to or from a remote host.

    Only content that git does not ignore is synchronized. Remote trees are
    addressed as HOST:PATH and reached over ssh and sftp.
    """
    ctx.ensure_object(dict)

    loaded: ReposyncConfig = ReposyncConfig.load(config) if config else load_config()
    if verbose:
        loaded.logging.level = "DEBUG"
    else:
        loaded.logging.console_enabled = False

    ctx.obj["config"] = loaded
    ctx.obj["local_dir"] = local_dir if local_dir is not None else Path.cwd()
    ctx.obj["verbose"] = verbose
    ctx.obj["dry"] = dry
    ctx.obj["json_output"] = json_output


@cli.command("push")
@click.argument("remote")
@click.pass_context
def push(ctx: click.Context, remote: str) -> None:
    """Upload the local tree to REMOTE (HOST:PATH)."""
    run_sync(ctx, Direction.PUSH, remote)


@cli.command("pull")
@click.argument("remote")
@click.pass_context
def pull(ctx: click.Context, remote: str) -> None:
    """Download REMOTE (HOST:PATH) into the local tree."""
    run_sync(ctx, Direction.PULL, remote)


cli.add_command(push, "up")
cli.add_command(pull, "down")


def run_sync(ctx: click.Context, direction: Direction, descriptor: str) -> None:
    """Run one sync and report the outcome; failures exit with status 1."""
    verbose = ctx.obj.get("verbose", False)
    dry = ctx.obj.get("dry", False)

    try:
        remote = Remote.parse(descriptor)
        session = get_session(ctx)
        if verbose:
            emit(f"local dir = {session.local_root.as_posix()}")

        report = session.prepare(direction, remote)
        if verbose:
            print_scan_summary("local", report.local_snapshot)
            print_scan_summary("remote", report.remote_snapshot)

        if dry:
            if ctx.obj.get("json_output", False):
                click.echo(json.dumps(report.to_dict(), indent=2, default=str))
            else:
                print_plan(report.plan, report.source_label, report.target_label)
            return

        session.execute(report)
    except ReposyncError as exc:
        err_console.print(Text(printable(f"error: {exc}")), soft_wrap=True)
        ctx.exit(1)

    if verbose:
        print_sync_summary(report)


def print_scan_summary(side: str, snapshot: Snapshot) -> None:
    emit(
        f"scanned {side} directory and found {len(snapshot.directories)} directories "
        f"and {len(snapshot.files)} files "
        f"({humanize.naturalsize(snapshot.total_size_bytes, binary=True)})"
    )


def print_plan(plan: Plan, source_prefix: str, target_prefix: str) -> None:
    """Print one line per planned action, in execution order."""
    for path in plan.remove_files:
        emit(f"remove file: {target_prefix}/{path}", style="red")
    for path in plan.remove_directories:
        emit(f"remove directory: {target_prefix}/{path}", style="red")
    for path in plan.create_directories:
        emit(f"create directory: {target_prefix}/{path}", style="green")
    for path in plan.copy_files:
        emit(f"copy file: {source_prefix}/{path} -> {target_prefix}/{path}", style="cyan")


def print_sync_summary(report: SyncReport) -> None:
    result = report.result
    if result is None:
        return
    target = report.target_name
    emit(f"removed {len(result.removed_files)} files on {target}")
    emit(f"removed {len(result.removed_directories)} directories on {target}")
    if result.kept_directories:
        emit(f"kept {len(result.kept_directories)} non-empty directories on {target}")
    if result.skipped_directories:
        emit(f"skipped removing {len(result.skipped_directories)} directories on {target}")
    emit(f"created {len(result.created_directories)} directories on {target}")
    emit(f"copied {len(result.copied_files)} files to {target}")


def main() -> None:
    """Main entry point; exit status 1 on failure, 130 when interrupted."""
    try:
        exit_code = cli.main(obj={}, standalone_mode=False)
    except (KeyboardInterrupt, click.exceptions.Abort):
        err_console.print("\n[yellow]Operation cancelled[/yellow]")
        sys.exit(130)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except Exception as e:
        err_console.print(Text(printable(f"error: {e}")), soft_wrap=True)
        sys.exit(1)
    sys.exit(exit_code if isinstance(exit_code, int) else 0)


if __name__ == "__main__":
    main()
