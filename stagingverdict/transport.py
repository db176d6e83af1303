"""
HTTP Transport for stagingverdict.

Handles HTTP communication with the build backend, request store and
status report store, with automatic retry logic and error handling.
"""

import random
import time
from dataclasses import dataclass, field
from typing import Any

import httpx

from stagingverdict.exceptions import (
    AuthenticationError,
    BackendError,
    MalformedResponseError,
    NotFoundError,
    RateLimitedError,
    ServerError,
)
from stagingverdict.logging import log_http_request, log_http_response

Params = dict[str, Any] | list[tuple[str, Any]] | None


@dataclass
class RetryConfig:
    """Configuration for automatic retry behavior."""

    max_retries: int = 3
    backoff_factor: float = 2.0
    retry_on: list[int] = field(default_factory=lambda: [429, 500, 502, 503])
    respect_retry_after: bool = True
    max_backoff: float = 60.0  # Maximum backoff time in seconds
    jitter: float = 0.1  # Jitter factor (0.1 = ±10%)


class HTTPTransport:
    """
    Read-only HTTP transport layer with retry logic.

    Handles:
    - Optional HTTP basic authentication
    - Exponential backoff with jitter for retries
    - Retry-After header respect for rate limiting
    - Error responses and undecodable bodies as BackendError subclasses
    """

    def __init__(
        self,
        base_url: str,
        username: str | None = None,
        token: str | None = None,
        timeout: float = 30.0,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """
        Initialize HTTP transport.

        Args:
            base_url: Base URL for API requests (e.g., "https://api.example.org")
            username: Account name for basic authentication (optional)
            token: Password or API token for basic authentication (optional)
            timeout: Request timeout in seconds
            retry_config: Configuration for retry behavior
        """
        self.base_url = base_url.rstrip("/")
        self.username = username
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig()

        auth = httpx.BasicAuth(username, token) if username and token else None
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            auth=auth,
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def get(self, path: str, params: Params = None) -> dict[str, Any]:
        """
        Make a GET request, retrying transient failures.

        Args:
            path: API path (e.g., "/build/home:foo/_result")
            params: Query parameters; a list of pairs allows repeated keys

        Returns:
            Decoded JSON object

        Raises:
            BackendError: On error responses, undecodable bodies, or when
                retries are exhausted
        """
        url = f"{self.base_url}{path}"
        attempt = 0
        while True:
            retry_after = None
            try:
                response = self._send(path, url, params)
            except httpx.RequestError as e:
                error: BackendError = ServerError("CONNECTION_ERROR", str(e))
                error.__cause__ = e
            else:
                if response.status_code < 400:
                    return self._decode(response, url)
                error = self._error_for(response)
                if response.status_code not in self.retry_config.retry_on:
                    raise error
                retry_after = response.headers.get("Retry-After")

            if attempt >= self.retry_config.max_retries:
                raise error
            time.sleep(self._wait_time(attempt, retry_after))
            attempt += 1

    def _send(self, path: str, url: str, params: Params) -> httpx.Response:
        log_http_request("GET", url, params=params)
        started = time.monotonic()
        response = self._client.request("GET", path, params=params)
        log_http_response(
            response.status_code, url, elapsed_ms=(time.monotonic() - started) * 1000
        )
        return response

    def _decode(self, response: httpx.Response, url: str) -> dict[str, Any]:
        """Decode a successful response body, which must be a JSON object."""
        try:
            body = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"{url}: body is not JSON") from e
        if not isinstance(body, dict):
            raise MalformedResponseError(
                f"{url}: expected a JSON object, got {type(body).__name__}"
            )
        return body

    def _wait_time(self, attempt: int, retry_after: str | None) -> float:
        """
        Seconds to sleep before the next attempt.

        A numeric Retry-After header wins; otherwise backoff_factor ** attempt
        with jitter, capped at max_backoff.
        """
        config = self.retry_config
        if retry_after and config.respect_retry_after:
            try:
                return float(retry_after)
            except ValueError:
                pass  # HTTP-date form, use backoff

        wait = config.backoff_factor ** attempt
        wait += random.uniform(-1, 1) * wait * config.jitter
        return min(wait, config.max_backoff)

    def _error_for(self, response: httpx.Response) -> BackendError:
        """
        Map an error response to a BackendError subclass.

        The body may carry {"error": {"code": ..., "message": ...}}; the
        request id comes from the X-Request-Id header.
        """
        status = response.status_code
        try:
            body = response.json()
        except ValueError:
            body = None
        details = body.get("error") if isinstance(body, dict) else None
        if not isinstance(details, dict):
            details = {}

        code = details.get("code", f"HTTP_{status}")
        message = details.get("message", f"HTTP {status}")
        request_id = response.headers.get("X-Request-Id")

        if status == 429:
            try:
                retry_after = int(response.headers.get("Retry-After", "60"))
            except ValueError:
                retry_after = 60
            return RateLimitedError(code, message, retry_after, request_id)
        if status >= 500:
            return ServerError(code, message, request_id)
        if status == 404:
            return NotFoundError(code, message, request_id)
        if status in (401, 403):
            return AuthenticationError(code, message, request_id)
        return BackendError(code, message, request_id)
