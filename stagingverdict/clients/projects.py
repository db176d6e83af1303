"""Projects resource client."""

from typing import TYPE_CHECKING, Any

from stagingverdict.clients.base import as_dict, as_list, payload, require
from stagingverdict.exceptions import NotFoundError
from stagingverdict.types.projects import Project, Repository, RepositoryArchitecture

if TYPE_CHECKING:
    from stagingverdict.transport import HTTPTransport


class ProjectsClient:
    """Client for the project store."""

    def __init__(self, transport: "HTTPTransport") -> None:
        """
        Initialize the projects client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    def get(self, name: str) -> Project | None:
        """
        Get a project by its exact name.

        Args:
            name: Full project name (e.g., "openSUSE:Factory:Staging:A")

        Returns:
            Project, or None if no project has that name
        """
        try:
            response = self.transport.get(f"/projects/{name}")
        except NotFoundError:
            return None

        return self._parse_project(payload(response, "project"))

    def match(self, pattern: str) -> list[Project]:
        """
        List projects whose name matches a LIKE pattern.

        Args:
            pattern: Name pattern where "_" matches one character and "%" any run

        Returns:
            List of Project objects, in store order
        """
        response = self.transport.get("/projects", params={"match": pattern})

        data = payload(response, "project list")
        if isinstance(data, list):
            projects = data
        else:
            projects = as_list(as_dict(data, "project list").get("projects"))
        return [self._parse_project(project) for project in projects]

    def _parse_project(self, data: dict[str, Any]) -> Project:
        """Parse project data from API response."""
        name = require(data, "name", "project")
        return Project(
            name=name,
            description=data.get("description"),
            repositories=[
                self._parse_repository(repo) for repo in as_list(data.get("repositories"))
            ],
        )

    def _parse_repository(self, data: dict[str, Any]) -> Repository:
        repo_name = require(data, "name", "repository")
        architectures = []
        for arch in as_list(data.get("architectures")):
            # Plain architecture names carry no required checks
            if isinstance(arch, str):
                architectures.append(RepositoryArchitecture(repository=repo_name, name=arch))
            else:
                architectures.append(
                    RepositoryArchitecture(
                        repository=repo_name,
                        name=require(arch, "name", "architecture"),
                        required_checks=as_list(arch.get("requiredChecks")),
                    )
                )
        return Repository(
            name=repo_name,
            architectures=architectures,
            required_checks=as_list(data.get("requiredChecks")),
        )
