"""Render a reconciled lock back into canonical gradle.lockfile text."""

from __future__ import annotations

from collections.abc import Iterable

from gradlelock.engines.lock_updater.models import (
    EMPTY,
    ConfigurationName,
    DependencyCoordinate,
    ReconciledLock,
)


def format_lock_entry(
    coordinate: DependencyCoordinate | None,
    configurations: Iterable[ConfigurationName],
) -> str | None:
    """Render one lock line.

    ``coordinate=None`` renders the ``empty=`` sentinel, which is emitted even
    when it lists nothing. A coordinate without configurations renders to
    ``None`` and is dropped.
    """
    joined = ",".join(sorted(configurations))
    if coordinate is None:
        return f"{EMPTY}={joined}"
    if not joined:
        return None
    return f"{coordinate}={joined}"


def render_lock_file(
    reconciled: ReconciledLock,
    comments: list[str],
    original_text: str,
) -> str:
    entries = [
        format_lock_entry(entry.coordinate, entry.configurations)
        for entry in reconciled.entries
    ]

    lines = list(comments)
    if comments and entries:
        lines.append("")
    lines.extend(entries)
    lines.append(format_lock_entry(None, reconciled.empty))

    text = "\n".join(lines)
    if original_text.endswith("\n"):
        text += "\n"
    return text
