"""stagingverdict - acceptance verdicts for distribution staging projects."""

from stagingverdict.client import StagingClient
from stagingverdict.exceptions import (
    AuthenticationError,
    BackendError,
    ConfigurationError,
    MalformedResponseError,
    NotFoundError,
    RateLimitedError,
    ServerError,
    StagingError,
)
from stagingverdict.logging import configure_logging, get_logger
from stagingverdict.staging import StagingProject
from stagingverdict.transport import HTTPTransport, RetryConfig
from stagingverdict.types.projects import Distribution
from stagingverdict.verdict import OverallState, StagingReport, StagingVerdict

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Main Client
    "StagingClient",
    # Staging
    "Distribution",
    "StagingProject",
    "StagingVerdict",
    "StagingReport",
    "OverallState",
    # Exceptions
    "StagingError",
    "ConfigurationError",
    "BackendError",
    "AuthenticationError",
    "NotFoundError",
    "RateLimitedError",
    "ServerError",
    "MalformedResponseError",
    # Transport
    "HTTPTransport",
    "RetryConfig",
    # Logging
    "configure_logging",
    "get_logger",
]
