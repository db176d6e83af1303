"""Automated check aggregation over the repositories of a staging area."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from stagingverdict.types.checks import Check
from stagingverdict.types.projects import Repository, RepositoryArchitecture

if TYPE_CHECKING:
    from stagingverdict.clients.status_reports import StatusReportsClient


@dataclass
class CheckInfo:
    """Checks reported for a staging area and the ones still missing."""

    checks: list[Check] = field(default_factory=list)
    missing_checks: list[str] = field(default_factory=list)


class CheckAggregator:
    """Collects the latest status report of every checkable unit."""

    def __init__(self, status_reports: "StatusReportsClient") -> None:
        self.status_reports = status_reports

    def aggregate(
        self, project_name: str, repositories: list[Repository]
    ) -> CheckInfo:
        """
        Collect checks for each repository, then for each of its architectures.

        Nothing is deduplicated: a check reported by several units appears
        once per unit.

        Args:
            project_name: Staging area (project) name
            repositories: Repositories of the staging area, in project order

        Returns:
            CheckInfo in accumulation order
        """
        info = CheckInfo()
        for repo in repositories:
            self._add_status(info, project_name, repo)
            for repo_arch in repo.architectures:
                self._add_status(info, project_name, repo_arch)
        return info

    def _add_status(
        self,
        info: CheckInfo,
        project_name: str,
        checkable: Repository | RepositoryArchitecture,
    ) -> None:
        if isinstance(checkable, RepositoryArchitecture):
            report = self.status_reports.latest(
                project_name, checkable.repository, checkable.name
            )
        else:
            report = self.status_reports.latest(project_name, checkable.name)

        if report is not None:
            info.missing_checks.extend(report.missing_checks)
            info.checks.extend(report.checks)
        else:
            # Nothing reported yet: every required check is missing
            info.missing_checks.extend(checkable.required_checks)
