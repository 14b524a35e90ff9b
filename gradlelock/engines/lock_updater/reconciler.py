"""Reconcile a parsed lock file with the live resolved dependency graph."""

from __future__ import annotations

from collections.abc import Set

import structlog

from gradlelock.engines.lock_updater.models import (
    ConfigurationName,
    ParsedLockFile,
    ProjectModel,
    ReconciledLock,
    ResolvedDependency,
    SiblingModule,
)

log = structlog.get_logger("gradlelock.engine")


def is_sibling_module(
    resolved: ResolvedDependency,
    project: ProjectModel,
    siblings: Set[SiblingModule],
) -> bool:
    """True when *resolved* points at another module of the same build."""
    if resolved.group != project.group:
        return False
    return SiblingModule(group=resolved.group, name=resolved.artifact) in siblings


def recomputed_configurations(
    parsed: ParsedLockFile, project: ProjectModel
) -> set[ConfigurationName]:
    """Tracked configuration names that can be recomputed from the project."""
    tracked = parsed.locked_configuration_names
    return {
        conf.name
        for conf in project.configurations
        if conf.is_resolvable and conf.name in tracked
    }


def reconcile(
    parsed: ParsedLockFile,
    project: ProjectModel,
    siblings: Set[SiblingModule],
) -> ReconciledLock:
    """Merge *parsed* lock data with the resolved configurations of *project*.

    Configurations that are no longer present or cannot be resolved keep
    their previous lock data untouched; removing such stale locks is a
    separate cleanup step. Resolvable configurations already tracked by the
    lock file are recomputed from the resolved graph.
    """
    recomputed = recomputed_configurations(parsed, project)
    result = ReconciledLock()

    # ── pass-through of configurations we cannot recompute ──────────────
    for gav, confs in parsed.locked.items():
        for conf in confs - recomputed:
            result.lock(gav, conf)
    result.empty |= parsed.previous_empty - recomputed

    # ── recompute resolvable, tracked configurations ────────────────────
    tracked = parsed.locked_configuration_names
    for conf in project.configurations:
        if not conf.is_resolvable or conf.name not in tracked:
            continue
        recorded = False
        for resolved in conf.resolved_dependencies:
            if is_sibling_module(resolved, project, siblings):
                continue
            result.lock(resolved.coordinate, conf.name)
            recorded = True
        if not recorded:
            result.empty.add(conf.name)

    log.debug(
        "lock.reconcile.done",
        project=project.name,
        recomputed=len(recomputed),
        preserved=len(tracked - recomputed),
        entries=len(result.locked),
        empty=len(result.empty),
    )
    return result
