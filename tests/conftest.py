"""Shared fixtures for the stagingverdict test suite."""

from stagingverdict.testing.fixtures import (  # noqa: F401
    factory,
    mock_client,
    sample_request,
    sample_staging,
)
