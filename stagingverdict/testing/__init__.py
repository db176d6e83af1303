"""stagingverdict testing utilities.

Provides a mock client, factories and fixtures for testing code that
evaluates staging projects.
"""

from stagingverdict.testing.fixtures import (
    create_mock_build_result,
    create_mock_project,
    create_mock_report,
    create_mock_repository,
    create_mock_request,
    create_mock_review,
    create_mock_staging,
)
from stagingverdict.testing.mock import MockCall, MockResponse, MockStagingClient

__all__ = [
    # Mock client
    "MockStagingClient",
    "MockCall",
    "MockResponse",
    # Helper functions
    "create_mock_project",
    "create_mock_repository",
    "create_mock_staging",
    "create_mock_request",
    "create_mock_review",
    "create_mock_build_result",
    "create_mock_report",
]
