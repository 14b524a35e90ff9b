"""Resolver snapshot — the resolved dependency graph of a whole build.

The graph resolver writes one JSON document per build:

    {"modules": [{"path": "app", "name": "app", "group": "com.acme",
                  "configurations": [{"name": "runtimeClasspath",
                                      "can_be_resolved": true,
                                      "resolved": [{"group": "...",
                                                    "artifact": "...",
                                                    "version": "..."}]}]}]}

Module paths may be given as directories ("sub/app") or Gradle project
paths (":sub:app"); both normalise to "sub/app". The root module is "".
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, ValidationError, field_validator

from gradlelock.engines.lock_updater.models import (
    ConfigurationModel,
    ProjectModel,
    ResolvedDependency,
    SiblingModule,
)
from gradlelock.exceptions import ModuleNotFoundInSnapshotError, SnapshotError


# Characters with meaning in a lock line; a value holding one cannot be read back
_COORDINATE_SEPARATORS = frozenset(":=,\n\r")
_CONFIGURATION_SEPARATORS = frozenset("=,\n\r")


def _lock_token(v: str, separators: frozenset[str]) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be empty")
    bad = sorted(separators.intersection(v))
    if bad:
        raise ValueError(f"must not contain {', '.join(repr(c) for c in bad)}")
    return v


class ResolvedDependencySchema(BaseModel):
    group: str
    artifact: str
    version: str

    @field_validator("group", "artifact", "version")
    @classmethod
    def _no_lock_separators(cls, v: str) -> str:
        return _lock_token(v, _COORDINATE_SEPARATORS)


class ConfigurationSchema(BaseModel):
    name: str
    can_be_resolved: bool = True
    resolved: list[ResolvedDependencySchema] = []

    @field_validator("name")
    @classmethod
    def _no_lock_separators(cls, v: str) -> str:
        return _lock_token(v, _CONFIGURATION_SEPARATORS)


class ModuleSchema(BaseModel):
    path: str = ""
    name: str
    group: str | None = None
    configurations: list[ConfigurationSchema] = []

    @field_validator("path", mode="before")
    @classmethod
    def _normalise_path(cls, v: str) -> str:
        if not isinstance(v, str):
            return v
        v = v.strip()
        if v.startswith(":") or (":" in v and "/" not in v):
            v = v.replace(":", "/")
        return v.strip("/")

    def to_model(self) -> ProjectModel:
        return ProjectModel(
            name=self.name,
            group=self.group,
            configurations=[
                ConfigurationModel(
                    name=conf.name,
                    is_resolvable=conf.can_be_resolved,
                    resolved_dependencies=[
                        ResolvedDependency(dep.group, dep.artifact, dep.version)
                        for dep in conf.resolved
                    ],
                )
                for conf in self.configurations
            ],
        )


class BuildSnapshotSchema(BaseModel):
    modules: list[ModuleSchema]


@dataclass
class BuildSnapshot:
    """Projects of one build keyed by module path, plus the sibling set."""

    projects: dict[str, ProjectModel] = field(default_factory=dict)
    siblings: frozenset[SiblingModule] = frozenset()

    def project(self, module_path: str) -> ProjectModel:
        try:
            return self.projects[module_path]
        except KeyError:
            raise ModuleNotFoundInSnapshotError(module_path, sorted(self.projects)) from None


def parse_snapshot(data: dict) -> BuildSnapshot:
    """Validate a decoded snapshot document and build the project models."""
    try:
        schema = BuildSnapshotSchema.model_validate(data)
    except ValidationError as exc:
        raise SnapshotError(f"invalid resolver snapshot: {exc}") from exc

    projects: dict[str, ProjectModel] = {}
    for module in schema.modules:
        if module.path in projects:
            raise SnapshotError(f"duplicate module path in snapshot: '{module.path}'")
        projects[module.path] = module.to_model()

    siblings = frozenset(project.sibling for project in projects.values())
    return BuildSnapshot(projects=projects, siblings=siblings)


def load_snapshot(path: Path) -> BuildSnapshot:
    """Read and validate a snapshot JSON file."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise SnapshotError(f"cannot read snapshot {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise SnapshotError(f"snapshot {path} is not valid JSON: {exc}") from exc
    return parse_snapshot(data)
