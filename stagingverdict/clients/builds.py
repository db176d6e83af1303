"""Build results resource client."""

from typing import TYPE_CHECKING, Any

from stagingverdict.clients.base import as_bool, as_dict, as_int, as_list, payload, require
from stagingverdict.exceptions import MalformedResponseError
from stagingverdict.types.builds import (
    BuildResult,
    BuildSummary,
    PackageStatus,
    StatusCount,
)

if TYPE_CHECKING:
    from stagingverdict.transport import HTTPTransport

FAILED_CODES = ("failed", "broken", "unresolvable")


class BuildResultsClient:
    """Client for the build backend result views."""

    def __init__(self, transport: "HTTPTransport") -> None:
        """
        Initialize the build results client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    def failed_results(self, project: str) -> list[BuildResult]:
        """
        Get the build results of a project, limited to failing packages.

        Every (repository, architecture) result is returned with its state and
        dirty flag, even when none of its packages fail.

        Args:
            project: Project name

        Returns:
            List of BuildResult objects, in backend order
        """
        params = [("view", "status")] + [("code", code) for code in FAILED_CODES]
        response = self.transport.get(f"/build/{project}/_result", params=params)

        data = as_dict(payload(response, "build results"), "build results")
        return [self._parse_result(result) for result in as_list(data.get("result"))]

    def summary(self, project: str, repository: str, arch: str) -> BuildSummary:
        """
        Get the build summary (package counts by status code) of a repository.

        Args:
            project: Project name
            repository: Repository name
            arch: Architecture name

        Returns:
            BuildSummary with status counts in backend order

        Raises:
            MalformedResponseError: If the backend returned no summary
        """
        response = self.transport.get(
            f"/build/{project}/_result",
            params={"view": "summary", "repository": repository, "arch": arch},
        )

        data = as_dict(payload(response, "build summary"), "build summary")
        results = as_list(data.get("result"))
        if not results:
            raise MalformedResponseError(
                f"no summary for {project}/{repository}/{arch}"
            )
        result = as_dict(results[0], "build summary")
        summary = as_dict(require(result, "summary", "build summary"), "build summary")
        return BuildSummary(
            repository=result.get("repository", repository),
            arch=result.get("arch", arch),
            status_counts=[
                StatusCount(
                    code=require(sc, "code", "statuscount"),
                    count=as_int(require(sc, "count", "statuscount"), "statuscount"),
                )
                for sc in as_list(summary.get("statuscount"))
            ],
        )

    def _parse_result(self, data: dict[str, Any]) -> BuildResult:
        """Parse a build result entry from API response."""
        return BuildResult(
            repository=require(data, "repository", "build result"),
            arch=require(data, "arch", "build result"),
            code=data.get("code", ""),
            state=require(data, "state", "build result"),
            dirty=as_bool(data.get("dirty", False)),
            statuses=[
                PackageStatus(
                    package=require(status, "package", "package status"),
                    code=require(status, "code", "package status"),
                    details=status.get("details"),
                )
                for status in as_list(data.get("status"))
            ],
        )
