"""Dependency lock updater engine — keep gradle.lockfile in step with the resolved graph."""

from gradlelock.engines.lock_updater.models import (
    DependencyCoordinate,
    LockUpdateResult,
    ProjectModel,
    SiblingModule,
)
from gradlelock.engines.lock_updater.updater import (
    DependencyLockUpdater,
    LockJob,
    update_dependency_lock,
)

__all__ = [
    "DependencyCoordinate",
    "DependencyLockUpdater",
    "LockJob",
    "LockUpdateResult",
    "ProjectModel",
    "SiblingModule",
    "update_dependency_lock",
]
