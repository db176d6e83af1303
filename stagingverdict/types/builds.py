"""Build result data models."""

from dataclasses import dataclass, field

# Build states in which a repository is considered done
FINISHED_STATES = ("published", "unpublished")

# Package codes that make a package broken regardless of the repository state
BROKEN_CODES = ("broken", "failed")

# Status count codes that will not change without a new build trigger
FINAL_CODES = (
    "excluded",
    "broken",
    "failed",
    "unresolvable",
    "succeeded",
    "disabled",
)


@dataclass
class PackageStatus:
    """Build status of one package inside a build result."""

    package: str
    code: str  # "broken", "failed", "unresolvable", "succeeded", ...
    details: str | None = None


@dataclass
class BuildResult:
    """Build result of one (repository, architecture) pair."""

    repository: str
    arch: str
    code: str
    state: str  # "published", "unpublished", "building", "finished", ...
    dirty: bool = False
    statuses: list[PackageStatus] = field(default_factory=list)

    @property
    def building(self) -> bool:
        """Whether the repository is still building or waiting for a rebuild."""
        return self.state not in FINISHED_STATES or self.dirty

    def is_broken(self, status: PackageStatus) -> bool:
        """Whether a package status counts as broken for this result.

        An unresolvable package is only broken once the repository stopped
        building.
        """
        if status.code in BROKEN_CODES:
            return True
        return status.code == "unresolvable" and not self.building


@dataclass
class StatusCount:
    """Number of packages with a given code in a build summary."""

    code: str
    count: int


@dataclass
class BuildSummary:
    """Build summary of one (repository, architecture) pair."""

    repository: str
    arch: str
    status_counts: list[StatusCount] = field(default_factory=list)


@dataclass
class BrokenPackage:
    """Package of a staging area that is not building properly."""

    package: str
    project: str
    state: str
    details: str | None
    repository: str
    arch: str

    def to_dict(self) -> dict[str, str | None]:
        return {
            "package": self.package,
            "project": self.project,
            "state": self.state,
            "details": self.details,
            "repository": self.repository,
            "arch": self.arch,
        }


@dataclass
class BuildingRepository:
    """Repository of a staging area that is still building."""

    repository: str
    arch: str
    code: str
    state: str
    dirty: bool
    tobuild: int = 0
    final: int = 0

    def to_dict(self) -> dict[str, str | bool | int]:
        return {
            "repository": self.repository,
            "arch": self.arch,
            "code": self.code,
            "state": self.state,
            "dirty": self.dirty,
            "tobuild": self.tobuild,
            "final": self.final,
        }
