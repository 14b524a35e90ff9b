"""Parser for Gradle dependency lock files (gradle.lockfile).

Line grammar:
  # comment                                  -> kept verbatim
  group:artifact:version=conf1,conf2         -> locked coordinate
  empty=conf1,conf2                          -> configurations locking nothing

Anything else is dropped. A hand-edited or corrupted lock file must never
block a build, so parsing never raises.
"""

from __future__ import annotations

import structlog

from gradlelock.engines.lock_updater.models import (
    EMPTY,
    ConfigurationName,
    DependencyCoordinate,
    ParsedLockFile,
)

log = structlog.get_logger("gradlelock.engine")

COMMENT_PREFIX = "# "


def is_comment(line: str) -> bool:
    return line.startswith(COMMENT_PREFIX)


def parse_configurations(line: str) -> set[ConfigurationName]:
    """Return the configuration names on the right-hand side of *line*."""
    parts = line.split("=")
    if len(parts) != 2:
        return set()
    return {conf.strip() for conf in parts[1].split(",") if conf.strip()}


def parse_coordinate(line: str) -> DependencyCoordinate | None:
    """Return the coordinate on the left-hand side of *line*, if it is one."""
    parts = line.split("=")
    if len(parts) != 2:
        return None
    gav = parts[0].split(":")
    if len(gav) != 3:
        return None
    return DependencyCoordinate(*gav)


def parse_lock_file(text: str) -> ParsedLockFile:
    parsed = ParsedLockFile()

    # Only "\n" ends a line; other Unicode line breaks belong to the line
    for lineno, raw in enumerate(text.split("\n"), start=1):
        line = raw.removesuffix("\r")
        if is_comment(line):
            parsed.comments.append(line)
            continue
        if not line.strip():
            continue

        parts = line.split("=")
        if len(parts) != 2:
            log.debug("lock.parse.line_dropped", lineno=lineno, reason="separator")
            continue

        configurations = parse_configurations(line)
        if parts[0] == EMPTY:
            parsed.previous_empty |= configurations
            continue

        gav = parse_coordinate(line)
        if gav is None:
            log.debug("lock.parse.line_dropped", lineno=lineno, reason="coordinate")
            continue
        parsed.locked.setdefault(gav, set()).update(configurations)

    return parsed
