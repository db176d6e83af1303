"""
Staging projects of a distribution.

A staging project is a temporary project collecting several change requests
before they are merged into the distribution. Its name is built from the
distribution root project:

    <root>:Staging:<letter>        e.g. openSUSE:Factory:Staging:A
    <root>:Staging:adi:<token>     e.g. openSUSE:Factory:Staging:adi:12
"""

from typing import TYPE_CHECKING, Any

import yaml

from stagingverdict.exceptions import ConfigurationError
from stagingverdict.logging import get_logger
from stagingverdict.types.projects import Distribution, Project, Repository
from stagingverdict.verdict import StagingVerdict

if TYPE_CHECKING:
    from stagingverdict.client import StagingClient

logger = get_logger()

NAME_PREFIX = ":Staging:"
ADI_NAME_PREFIX = ":Staging:adi:"


class StagingProject:
    """A staging project associated to a distribution."""

    def __init__(
        self,
        project: Project,
        distribution: Distribution,
        client: "StagingClient | None" = None,
    ) -> None:
        """
        Args:
            project: Underlying project record
            distribution: Distribution the staging project belongs to
            client: Client used by verdict() (optional)
        """
        self.project = project
        self.distribution = distribution
        self.client = client
        self._meta: dict[str, Any] | None = None

    def __repr__(self) -> str:
        return f"StagingProject({self.name!r})"

    @classmethod
    def for_distribution(
        cls,
        client: "StagingClient",
        distribution: Distribution,
        only_letter: bool = True,
    ) -> list["StagingProject"]:
        """
        Find all staging projects of a distribution.

        Args:
            client: Client giving access to the project store
            distribution: Distribution to look at
            only_letter: Only single-letter staging projects, otherwise all

        Returns:
            List of StagingProject objects
        """
        wildcard = "_" if only_letter else "%"
        pattern = f"{distribution.root_project_name}{NAME_PREFIX}{wildcard}"
        return [
            cls(project, distribution, client)
            for project in client.projects.match(pattern)
        ]

    @classmethod
    def find(
        cls,
        client: "StagingClient",
        distribution: Distribution,
        id: str,
    ) -> "StagingProject | None":
        """
        Find a staging project by distribution and id.

        Args:
            client: Client giving access to the project store
            distribution: Distribution to look at
            id: Staging id, e.g. "A" or "adi:12"

        Returns:
            The staging project, or None if there is no such project
        """
        project = client.projects.get(f"{distribution.root_project_name}{NAME_PREFIX}{id}")
        if project is None:
            return None
        return cls(project, distribution, client)

    @property
    def name(self) -> str:
        return self.project.name

    @property
    def description(self) -> str | None:
        return self.project.description

    @property
    def repositories(self) -> list[Repository]:
        return self.project.repositories

    @property
    def adi_staging(self) -> bool:
        """Whether this is an adi staging project."""
        return ADI_NAME_PREFIX in self.name

    @property
    def prefix(self) -> str:
        """Part of the name shared by all staging projects of the distribution."""
        if self.adi_staging:
            return f"{self.distribution.root_project_name}{ADI_NAME_PREFIX}"
        return f"{self.distribution.root_project_name}{NAME_PREFIX}"

    @property
    def letter(self) -> str:
        """Letter of the staging project; the whole token for adi projects."""
        if self.adi_staging:
            return self.name[len(self.prefix):]
        return self.name[len(self.prefix):len(self.prefix) + 1]

    @property
    def id(self) -> str:
        """Name without the common prefix; adi ids keep an "adi:" marker."""
        if self.adi_staging:
            return "adi:" + self.name[len(self.prefix):]
        return self.name[len(self.prefix):]

    @property
    def meta(self) -> dict[str, Any]:
        """
        Metadata stored in the description field.

        Unparsable or non-mapping descriptions count as empty metadata.
        """
        if self._meta is None:
            self._meta = parse_meta(self.description, self.name)
        return self._meta

    def verdict(self) -> StagingVerdict:
        """
        Start a new evaluation of this staging project.

        Returns:
            A fresh StagingVerdict

        Raises:
            ConfigurationError: If the staging project has no client
        """
        if self.client is None:
            raise ConfigurationError(f"{self.name} has no client to evaluate with")
        return StagingVerdict(self, self.client)


def parse_meta(description: str | None, name: str = "") -> dict[str, Any]:
    """
    Parse staging metadata from a project description.

    Args:
        description: YAML text, e.g. "requests:\\n- id: 42\\n"
        name: Project name, for logging

    Returns:
        Parsed mapping, or {} if the text is empty, malformed or not a mapping
    """
    try:
        meta = yaml.safe_load(description or "")
    except yaml.YAMLError as e:
        logger.warning(f"{name}: ignoring malformed staging metadata: {e}")
        return {}
    if not isinstance(meta, dict):
        return {}
    return meta
