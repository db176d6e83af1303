"""Build status probe: broken packages and building repositories."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from stagingverdict.logging import get_logger
from stagingverdict.types.builds import (
    FINAL_CODES,
    BrokenPackage,
    BuildingRepository,
    BuildResult,
)

if TYPE_CHECKING:
    from stagingverdict.clients.builds import BuildResultsClient

logger = get_logger("verdict")


@dataclass
class BuildInfo:
    """Build health of a staging area."""

    broken_packages: list[BrokenPackage] = field(default_factory=list)
    building_repositories: list[BuildingRepository] = field(default_factory=list)


class BuildStatusProbe:
    """Classifies the build results of a staging area."""

    def __init__(self, builds: "BuildResultsClient") -> None:
        self.builds = builds

    def probe(self, area_name: str) -> BuildInfo:
        """
        Query the build backend for a staging area.

        One request for the failed results, plus one summary request per
        building repository. Backend errors propagate.

        Args:
            area_name: Staging area (project) name

        Returns:
            BuildInfo with broken packages and building repositories
        """
        info = BuildInfo()

        for result in self.builds.failed_results(area_name):
            for status in result.statuses:
                if result.is_broken(status):
                    info.broken_packages.append(
                        BrokenPackage(
                            package=status.package,
                            project=area_name,
                            state=status.code,
                            details=status.details,
                            repository=result.repository,
                            arch=result.arch,
                        )
                    )
            if result.building:
                info.building_repositories.append(self._summarize(area_name, result))

        # Unresolvable packages are expected while dependencies still build
        if info.building_repositories:
            info.broken_packages = [
                package
                for package in info.broken_packages
                if package.state != "unresolvable"
            ]

        logger.debug(
            f"{area_name}: {len(info.broken_packages)} broken packages, "
            f"{len(info.building_repositories)} building repositories"
        )
        return info

    def _summarize(self, area_name: str, result: BuildResult) -> BuildingRepository:
        """Tally the build summary of a building repository."""
        repo = BuildingRepository(
            repository=result.repository,
            arch=result.arch,
            code=result.code,
            state=result.state,
            dirty=result.dirty,
        )

        summary = self.builds.summary(area_name, result.repository, result.arch)
        for status_count in summary.status_counts:
            if status_count.code in FINAL_CODES:
                repo.final += status_count.count
            else:
                repo.tobuild += status_count.count
        return repo
