"""CLI entry point: gradlelock.

Subcommands:
    gradlelock update snapshot.json [ROOT]           # rewrite outdated lock files
    gradlelock update snapshot.json [ROOT] --check   # exit 1 if any would change
    gradlelock render snapshot.json app/gradle.lockfile
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click
import structlog

from gradlelock.core.logging import setup_logging
from gradlelock.engines.lock_updater.discovery import discover_lock_files, module_path_for
from gradlelock.engines.lock_updater.snapshot import BuildSnapshot, load_snapshot
from gradlelock.engines.lock_updater.updater import (
    DependencyLockUpdater,
    LockJob,
    read_lock_file,
)
from gradlelock.exceptions import GradleLockError, ModuleNotFoundInSnapshotError

log = structlog.get_logger("gradlelock.cli")

_DEFAULT_JOBS = 4


def _default_jobs() -> int:
    """Worker count from GRADLELOCK_JOBS, falling back to 4 on bad values."""
    raw = os.environ.get("GRADLELOCK_JOBS")
    if raw is None:
        return _DEFAULT_JOBS
    try:
        jobs = int(raw)
    except ValueError:
        log.warning("cli.bad_jobs_env", value=raw)
        return _DEFAULT_JOBS
    return max(1, jobs)


def _load(snapshot_path: str) -> BuildSnapshot:
    try:
        return load_snapshot(Path(snapshot_path))
    except GradleLockError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
@click.option(
    "--log-format",
    type=click.Choice(["console", "json"]),
    default=None,
    help="Log renderer (default: $GRADLELOCK_LOG_FORMAT or console)",
)
def main(verbose: bool, log_format: str | None) -> None:
    """Keep gradle.lockfile files in step with the resolved dependency graph."""
    setup_logging(level="DEBUG" if verbose else None, fmt=log_format)


@main.command()
@click.argument("snapshot", type=click.Path(exists=True, dir_okay=False))
@click.argument(
    "root", required=False, default=".", type=click.Path(exists=True, file_okay=False)
)
@click.option("--check", is_flag=True, help="Write nothing; exit 1 if any lock file is outdated")
@click.option("-j", "--jobs", type=int, default=None, help="Parallel workers (default: 4)")
def update(snapshot: str, root: str, check: bool, jobs: int | None) -> None:
    """Reconcile every gradle.lockfile under ROOT with SNAPSHOT."""
    build = _load(snapshot)
    root_path = Path(root).resolve()
    updater = DependencyLockUpdater(build.siblings)

    lock_jobs: list[LockJob] = []
    for lock_path in discover_lock_files(root_path):
        module_path = module_path_for(root_path, lock_path)
        try:
            project = build.project(module_path)
        except ModuleNotFoundInSnapshotError as e:
            log.warning("cli.module_skipped", path=str(lock_path), reason=str(e))
            continue
        lock_jobs.append(LockJob(path=lock_path, project=project))

    if not lock_jobs:
        click.echo("No lock files to update.")
        return

    results = updater.update_many(
        lock_jobs, write=not check, max_workers=jobs or _default_jobs()
    )
    changed = [r for r in results if r.changed]
    skipped = [r for r in results if r.skipped]

    for r in changed:
        label = "outdated" if check else "updated"
        click.echo(f"{label}: {r.path.relative_to(root_path)}")
    for r in skipped:
        click.echo(f"skipped (unreadable): {r.path.relative_to(root_path)}", err=True)
    click.echo(f"{len(changed)} of {len(results)} lock file(s) {'outdated' if check else 'updated'}.")

    if check and changed:
        sys.exit(1)


@main.command()
@click.argument("snapshot", type=click.Path(exists=True, dir_okay=False))
@click.argument("lockfile", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--module",
    "module_path",
    default=None,
    help="Module path in the snapshot (default: the lock file's directory relative to cwd)",
)
def render(snapshot: str, lockfile: str, module_path: str | None) -> None:
    """Print the reconciled LOCKFILE to stdout without writing it."""
    build = _load(snapshot)
    lock_path = Path(lockfile).resolve()
    if module_path is None:
        try:
            module_path = module_path_for(Path.cwd(), lock_path)
        except ValueError:
            raise click.ClickException(
                f"{lockfile} is outside the current directory; pass --module"
            ) from None

    try:
        project = build.project(module_path.strip(":/").replace(":", "/"))
    except ModuleNotFoundInSnapshotError as e:
        raise click.ClickException(str(e)) from e

    try:
        text = read_lock_file(lock_path)
    except GradleLockError as e:
        raise click.ClickException(str(e)) from e

    result = DependencyLockUpdater(build.siblings).update(text, project)
    click.echo(result.text, nl=False)


if __name__ == "__main__":
    main()
