"""Status reports resource client."""

from typing import TYPE_CHECKING, Any

from stagingverdict.clients.base import as_list, payload, require
from stagingverdict.exceptions import NotFoundError
from stagingverdict.types.checks import Check, StatusReport

if TYPE_CHECKING:
    from stagingverdict.transport import HTTPTransport


class StatusReportsClient:
    """Client for automated check reports."""

    def __init__(self, transport: "HTTPTransport") -> None:
        """
        Initialize the status reports client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    def latest(
        self,
        project: str,
        repository: str,
        arch: str | None = None,
    ) -> StatusReport | None:
        """
        Get the latest status report of a repository or repository architecture.

        Args:
            project: Project name
            repository: Repository name
            arch: Architecture name, or None for the repository itself

        Returns:
            StatusReport, or None if nothing was ever reported
        """
        path = f"/status_reports/projects/{project}/repositories/{repository}"
        if arch is not None:
            path += f"/{arch}"

        try:
            response = self.transport.get(f"{path}/reports/latest")
        except NotFoundError:
            return None

        return self._parse_report(payload(response, "status report"))

    def _parse_report(self, data: dict[str, Any]) -> StatusReport:
        """Parse status report data from API response."""
        return StatusReport(
            uuid=require(data, "uuid", "status report"),
            checks=[
                Check(
                    name=require(check, "name", "check"),
                    state=require(check, "state", "check"),
                    url=check.get("url"),
                    short_description=check.get("shortDescription"),
                )
                for check in as_list(data.get("checks"))
            ],
            missing_checks=as_list(data.get("missingChecks")),
        )
