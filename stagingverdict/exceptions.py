"""stagingverdict exception classes."""


class StagingError(Exception):
    """Base exception for all stagingverdict errors."""

    def __init__(
        self, code: str, message: str, request_id: str | None = None
    ) -> None:
        self.code = code
        self.message = message
        self.request_id = request_id
        super().__init__(f"[{code}] {message}")


class ConfigurationError(StagingError):
    """Raised when client configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class BackendError(StagingError):
    """Raised when a collaborator (build backend, request store, ...) fails.

    Raised as is for rejected queries (4xx without a dedicated subclass).
    A backend error aborts the whole verdict computation.
    """

    pass


class AuthenticationError(BackendError):
    """Raised when credentials are rejected or lack access (401, 403)."""

    pass


class NotFoundError(BackendError):
    """Raised when a resource is not found."""

    pass


class RateLimitedError(BackendError):
    """Raised when rate limited."""

    def __init__(
        self,
        code: str,
        message: str,
        retry_after: int,
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, request_id)
        self.retry_after = retry_after


class ServerError(BackendError):
    """Raised on server errors (5xx) and connection failures."""

    pass


class MalformedResponseError(BackendError):
    """Raised when a response body is not JSON or lacks a required field."""

    def __init__(self, message: str) -> None:
        super().__init__("MALFORMED_RESPONSE", message)
