"""Custom exceptions for gradlelock."""


class GradleLockError(Exception):
    """Base exception for all gradlelock errors."""


class SnapshotError(GradleLockError):
    """Raised when a resolver snapshot cannot be read or validated."""


class ModuleNotFoundInSnapshotError(GradleLockError):
    """Raised when a lock file belongs to a module the snapshot does not describe."""

    def __init__(self, module_path: str, known: list[str]):
        self.module_path = module_path
        self.known = known
        super().__init__(
            f"Module '{module_path or ':'}' not found in snapshot "
            f"(known modules: {', '.join(p or ':' for p in known) or 'none'})"
        )


class LockFileUnreadableError(GradleLockError):
    """Raised when a lock file cannot be read or is not valid UTF-8."""
