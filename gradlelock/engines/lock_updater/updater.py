"""DependencyLockUpdater — reconcile gradle.lockfile text with a resolved project."""

from __future__ import annotations

from collections.abc import Iterable, Set
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

import structlog

from gradlelock.engines.lock_updater.discovery import LOCK_FILE_NAME
from gradlelock.engines.lock_updater.models import (
    LockUpdateResult,
    ProjectModel,
    SiblingModule,
)
from gradlelock.engines.lock_updater.parser import parse_lock_file
from gradlelock.engines.lock_updater.reconciler import reconcile
from gradlelock.engines.lock_updater.serializer import render_lock_file
from gradlelock.exceptions import LockFileUnreadableError

log = structlog.get_logger("gradlelock.engine")


def update_dependency_lock(
    text: str,
    project: ProjectModel,
    siblings: Set[SiblingModule],
) -> str | None:
    """Return the reconciled lock file text, or None when nothing changes.

    Blank lock files are left alone. The caller is responsible for writing
    the returned text back.
    """
    if not text.strip():
        return None

    parsed = parse_lock_file(text)
    reconciled = reconcile(parsed, project, siblings)
    rendered = render_lock_file(reconciled, parsed.comments, text)
    if rendered == text:
        return None
    return rendered


def read_lock_file(path: Path) -> str:
    """Read a lock file as UTF-8, raising LockFileUnreadableError on failure."""
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise LockFileUnreadableError(f"{path} is not valid UTF-8: {exc.reason}") from exc
    except OSError as exc:
        raise LockFileUnreadableError(f"cannot read {path}: {exc}") from exc


@dataclass(frozen=True)
class LockJob:
    """One lock file and the project it belongs to."""

    path: Path
    project: ProjectModel


class DependencyLockUpdater:
    """Reconcile lock files of one build against its sibling modules."""

    def __init__(self, siblings: Iterable[SiblingModule]) -> None:
        self._siblings = frozenset(siblings)

    @property
    def siblings(self) -> frozenset[SiblingModule]:
        return self._siblings

    @staticmethod
    def is_acceptable(path: Path) -> bool:
        return path.name == LOCK_FILE_NAME

    def update(self, text: str, project: ProjectModel) -> LockUpdateResult:
        new_text = update_dependency_lock(text, project, self._siblings)
        if new_text is None:
            return LockUpdateResult(path=None, text=text, changed=False)
        return LockUpdateResult(path=None, text=new_text, changed=True)

    def update_file(
        self, path: Path, project: ProjectModel, write: bool = True
    ) -> LockUpdateResult:
        """Reconcile the lock file at *path*; write it back if it changed and *write*."""
        if not self.is_acceptable(path):
            raise ValueError(f"not a Gradle lock file: {path}")

        try:
            text = read_lock_file(path)
        except LockFileUnreadableError as e:
            # Leave the file alone; a corrupted lock must not stop the other modules
            log.warning("lock.update.unreadable", path=str(path), error=str(e))
            return LockUpdateResult(path=path, text="", changed=False, skipped=True)

        result = self.update(text, project)
        result.path = path

        if not result.changed:
            log.info("lock.update.unchanged", path=str(path), project=project.name)
        elif write:
            path.write_text(result.text, encoding="utf-8")
            log.info("lock.update.written", path=str(path), project=project.name)
        else:
            log.info("lock.update.outdated", path=str(path), project=project.name)
        return result

    def update_many(
        self,
        jobs: Iterable[LockJob],
        write: bool = True,
        max_workers: int = 4,
    ) -> list[LockUpdateResult]:
        """Reconcile several lock files concurrently; results keep job order."""
        jobs = list(jobs)
        if not jobs:
            return []
        with ThreadPoolExecutor(max_workers=max(1, max_workers)) as pool:
            futures = [
                pool.submit(self.update_file, job.path, job.project, write) for job in jobs
            ]
            return [f.result() for f in futures]
