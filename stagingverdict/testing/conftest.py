"""
Pytest plugin for stagingverdict testing fixtures.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["stagingverdict.testing.conftest"]
"""

from stagingverdict.testing.fixtures import (
    factory,
    mock_client,
    sample_request,
    sample_staging,
)

__all__ = [
    "mock_client",
    "factory",
    "sample_request",
    "sample_staging",
]
