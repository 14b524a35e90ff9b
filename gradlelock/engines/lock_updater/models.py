"""Data models for the dependency lock updater engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

ConfigurationName = str

# Left-hand side of the sentinel line listing configurations with nothing to lock
EMPTY = "empty"


@dataclass(frozen=True, order=True)
class DependencyCoordinate:
    """A concrete external artifact: group, artifact and version."""

    group: str
    artifact: str
    version: str

    def __str__(self) -> str:
        return f"{self.group}:{self.artifact}:{self.version}"


@dataclass(frozen=True)
class ResolvedDependency:
    """A single node of a resolved configuration graph."""

    group: str
    artifact: str
    version: str

    @property
    def coordinate(self) -> DependencyCoordinate:
        return DependencyCoordinate(self.group, self.artifact, self.version)


@dataclass(frozen=True)
class SiblingModule:
    """Another module of the same multi-module build."""

    group: str
    name: str


@dataclass
class ConfigurationModel:
    """A dependency scope as reported by the graph resolver."""

    name: ConfigurationName
    is_resolvable: bool
    resolved_dependencies: list[ResolvedDependency] = field(default_factory=list)


@dataclass
class ProjectModel:
    """One module of the build and its configurations."""

    name: str
    group: str | None
    configurations: list[ConfigurationModel] = field(default_factory=list)

    def configuration(self, name: ConfigurationName) -> ConfigurationModel | None:
        for conf in self.configurations:
            if conf.name == name:
                return conf
        return None

    @property
    def sibling(self) -> SiblingModule:
        return SiblingModule(group=self.group or "", name=self.name)


@dataclass
class LockEntry:
    """A locked coordinate and the configurations that lock it."""

    coordinate: DependencyCoordinate
    configurations: set[ConfigurationName]


@dataclass
class ParsedLockFile:
    """Everything recovered from the text of a lock file."""

    comments: list[str] = field(default_factory=list)
    locked: dict[DependencyCoordinate, set[ConfigurationName]] = field(default_factory=dict)
    previous_empty: set[ConfigurationName] = field(default_factory=set)

    @property
    def locked_configuration_names(self) -> set[ConfigurationName]:
        names = set(self.previous_empty)
        for confs in self.locked.values():
            names |= confs
        return names


@dataclass
class ReconciledLock:
    """Output of reconciliation, ready to be rendered."""

    locked: dict[DependencyCoordinate, set[ConfigurationName]] = field(default_factory=dict)
    empty: set[ConfigurationName] = field(default_factory=set)

    def lock(self, coordinate: DependencyCoordinate, configuration: ConfigurationName) -> None:
        self.locked.setdefault(coordinate, set()).add(configuration)

    @property
    def entries(self) -> list[LockEntry]:
        """Non-empty entries sorted by their rendered coordinate."""
        return [
            LockEntry(gav, set(confs))
            for gav, confs in sorted(self.locked.items(), key=lambda item: str(item[0]))
            if confs
        ]


@dataclass
class LockUpdateResult:
    """Outcome of updating one lock file."""

    path: Path | None
    text: str
    changed: bool
    skipped: bool = False
