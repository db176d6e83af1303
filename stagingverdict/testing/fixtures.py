"""
Pytest fixtures and factories for stagingverdict testing.
"""

from typing import Generator

import pytest

from stagingverdict.staging import ADI_NAME_PREFIX, NAME_PREFIX, StagingProject
from stagingverdict.testing.mock import MockStagingClient
from stagingverdict.types.builds import BuildResult, PackageStatus
from stagingverdict.types.checks import Check, StatusReport
from stagingverdict.types.projects import (
    Distribution,
    Project,
    Repository,
    RepositoryArchitecture,
)
from stagingverdict.types.requests import ChangeRequest, RequestAction, Review


# ============================================================================
# Factories
# ============================================================================


def create_mock_repository(
    name: str = "standard",
    archs: tuple[str, ...] = ("x86_64",),
    required_checks: list[str] | None = None,
    arch_required_checks: list[str] | None = None,
) -> Repository:
    """Create a Repository with the given architectures."""
    return Repository(
        name=name,
        architectures=[
            RepositoryArchitecture(
                repository=name,
                name=arch,
                required_checks=list(arch_required_checks or []),
            )
            for arch in archs
        ],
        required_checks=list(required_checks or []),
    )


def create_mock_project(
    name: str = "openSUSE:Factory:Staging:A",
    request_ids: list[int] | None = None,
    description: str | None = None,
    repositories: list[Repository] | None = None,
) -> Project:
    """
    Create a Project whose description lists the given request ids.

    An explicit description takes precedence over request_ids.
    """
    if description is None and request_ids is not None:
        description = "requests:\n" + "".join(f"- id: {rid}\n" for rid in request_ids)
    return Project(
        name=name,
        description=description,
        repositories=repositories if repositories is not None else [],
    )


def create_mock_staging(
    client: MockStagingClient | None = None,
    letter: str = "A",
    root_project_name: str = "openSUSE:Factory",
    adi: bool = False,
    **project_kwargs,
) -> StagingProject:
    """Create a StagingProject named after the distribution naming rules."""
    prefix = ADI_NAME_PREFIX if adi else NAME_PREFIX
    project = create_mock_project(
        name=f"{root_project_name}{prefix}{letter}", **project_kwargs
    )
    return StagingProject(
        project,
        Distribution(root_project_name=root_project_name),
        client,
    )


def create_mock_review(
    id: int = 1,
    state: str = "new",
    **scopes: str,
) -> Review:
    """Create a Review; scopes are by_group/by_user/by_project/by_package."""
    return Review(id=id, state=state, **scopes)


def create_mock_request(
    number: int = 1,
    state: str = "review",
    package: str | None = "vim",
    reviews: list[Review] | None = None,
) -> ChangeRequest:
    """Create a ChangeRequest submitting one package to openSUSE:Factory."""
    return ChangeRequest(
        number=number,
        state=state,
        reviews=reviews if reviews is not None else [],
        actions=[
            RequestAction(
                type="submit",
                target_project="openSUSE:Factory",
                target_package=package,
            )
        ],
    )


def create_mock_build_result(
    repository: str = "standard",
    arch: str = "x86_64",
    state: str = "published",
    dirty: bool = False,
    statuses: dict[str, str] | None = None,
) -> BuildResult:
    """Create a BuildResult; statuses maps package names to codes."""
    return BuildResult(
        repository=repository,
        arch=arch,
        code=state,
        state=state,
        dirty=dirty,
        statuses=[
            PackageStatus(package=package, code=code)
            for package, code in (statuses or {}).items()
        ],
    )


def create_mock_report(
    checks: dict[str, str] | None = None,
    missing_checks: list[str] | None = None,
    uuid: str = "report-uuid",
) -> StatusReport:
    """Create a StatusReport; checks maps names to states."""
    return StatusReport(
        uuid=uuid,
        checks=[Check(name=name, state=state) for name, state in (checks or {}).items()],
        missing_checks=list(missing_checks or []),
    )


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def mock_client() -> Generator[MockStagingClient, None, None]:
    """
    Provide a MockStagingClient for testing.

    Example:
        ```python
        def test_my_feature(mock_client):
            mock_client.builds.configure_failed_results(response=[...])
            result = my_function(mock_client)
            assert mock_client.was_called("builds.failed_results")
        ```
    """
    client = MockStagingClient()
    yield client
    client.reset()


@pytest.fixture
def factory() -> Distribution:
    """Provide the openSUSE:Factory distribution."""
    return Distribution(root_project_name="openSUSE:Factory")


@pytest.fixture
def sample_request() -> ChangeRequest:
    """Provide a request with all reviews accepted."""
    return create_mock_request(
        number=42,
        reviews=[create_mock_review(id=1, state="accepted", by_group="factory-staging")],
    )


@pytest.fixture
def sample_staging(
    mock_client: MockStagingClient, sample_request: ChangeRequest
) -> StagingProject:
    """
    Provide staging A of openSUSE:Factory selecting sample_request.

    The mock client is configured so that the request is found.
    """
    mock_client.requests.configure_find_by_numbers(response=[sample_request])
    return create_mock_staging(
        mock_client,
        request_ids=[sample_request.number],
        repositories=[create_mock_repository()],
    )
