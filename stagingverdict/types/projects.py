"""Project and distribution data models."""

from dataclasses import dataclass, field


@dataclass
class RepositoryArchitecture:
    """A (repository, architecture) pair of a project."""

    repository: str
    name: str  # "x86_64", "aarch64", ...
    required_checks: list[str] = field(default_factory=list)


@dataclass
class Repository:
    """Repository of a project with its architectures."""

    name: str
    architectures: list[RepositoryArchitecture] = field(default_factory=list)
    required_checks: list[str] = field(default_factory=list)


@dataclass
class Project:
    """Project record as kept by the project store."""

    name: str
    description: str | None
    repositories: list[Repository] = field(default_factory=list)


@dataclass
class Distribution:
    """Distribution whose staging areas are evaluated."""

    root_project_name: str  # e.g. "openSUSE:Factory"
