"""Locate gradle.lockfile files inside a build."""

from __future__ import annotations

from pathlib import Path

LOCK_FILE_NAME = "gradle.lockfile"

# Directories never holding a module's own lock file
_SKIP_DIRS = {".git", ".gradle", "build", "node_modules"}


def discover_lock_files(root: Path) -> list[Path]:
    """Return every gradle.lockfile under *root*, sorted by path."""
    hits: list[Path] = []
    for hit in sorted(root.glob(f"**/{LOCK_FILE_NAME}")):
        rel_parts = hit.relative_to(root).parts[:-1]
        if any(part in _SKIP_DIRS for part in rel_parts):
            continue
        if hit.is_file():
            hits.append(hit)
    return hits


def module_path_for(root: Path, lock_path: Path) -> str:
    """Map a lock file to its module path ("" for the root module)."""
    rel = lock_path.parent.relative_to(root).as_posix()
    return "" if rel == "." else rel
