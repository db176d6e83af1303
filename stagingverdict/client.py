"""
stagingverdict main client.

Provides the primary interface to the collaborators a staging verdict is
computed from: project store, build backend, request store and status
report store.
"""

import os
from typing import Any

from stagingverdict.clients import (
    BuildResultsClient,
    ProjectsClient,
    RequestsClient,
    StatusReportsClient,
)
from stagingverdict.exceptions import ConfigurationError
from stagingverdict.transport import HTTPTransport, RetryConfig


class StagingClient:
    """
    Main client for the staging collaborators.

    Aggregates all resource clients over a single transport.

    Example:
        ```python
        from stagingverdict import Distribution, StagingClient, StagingProject

        client = StagingClient.from_env()
        factory = Distribution(root_project_name="openSUSE:Factory")

        for staging in StagingProject.for_distribution(client, factory):
            print(staging.letter, staging.verdict().overall_state.value)
        ```
    """

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        base_url: str,
        username: str | None = None,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Base URL of the API
            username: Account name for basic authentication (optional)
            token: Password or API token for basic authentication (optional)
            timeout: Request timeout in seconds (default: 30.0)
            retry_config: Configuration for retry behavior (optional)
        """
        self.base_url = base_url
        self.username = username
        self.timeout = timeout

        self._transport = HTTPTransport(
            base_url=base_url,
            username=username,
            token=token,
            timeout=timeout,
            retry_config=retry_config,
        )

        self.projects = ProjectsClient(self._transport)
        self.builds = BuildResultsClient(self._transport)
        self.requests = RequestsClient(self._transport)
        self.status_reports = StatusReportsClient(self._transport)

    @classmethod
    def from_env(
        cls,
        retry_config: RetryConfig | None = None,
    ) -> "StagingClient":
        """
        Create a client from environment variables.

        Environment variables:
            STAGING_API_URL: Base URL of the API (required)
            STAGING_API_USER: Account name (optional, requires STAGING_API_TOKEN)
            STAGING_API_TOKEN: Password or token (optional, requires STAGING_API_USER)
            STAGING_API_TIMEOUT: Request timeout in seconds (optional, default: 30)

        Args:
            retry_config: Configuration for retry behavior (optional)

        Returns:
            Configured StagingClient instance

        Raises:
            ConfigurationError: If required environment variables are missing
                or invalid
        """
        base_url = os.environ.get("STAGING_API_URL")
        username = os.environ.get("STAGING_API_USER")
        token = os.environ.get("STAGING_API_TOKEN")
        timeout_str = os.environ.get("STAGING_API_TIMEOUT")

        if not base_url:
            raise ConfigurationError("STAGING_API_URL environment variable not set")

        if bool(username) != bool(token):
            raise ConfigurationError(
                "STAGING_API_USER and STAGING_API_TOKEN must be set together"
            )

        timeout = cls.DEFAULT_TIMEOUT
        if timeout_str:
            try:
                timeout = float(timeout_str)
            except ValueError:
                raise ConfigurationError(
                    f"Invalid STAGING_API_TIMEOUT: {timeout_str}. Must be a number of seconds"
                ) from None

        return cls(
            base_url=base_url,
            username=username,
            token=token,
            timeout=timeout,
            retry_config=retry_config,
        )

    @property
    def transport(self) -> HTTPTransport:
        """Get the underlying HTTP transport (for advanced use cases)."""
        return self._transport

    def close(self) -> None:
        """Close the client and release resources."""
        self._transport.close()

    def __enter__(self) -> "StagingClient":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit - closes the client."""
        self.close()
