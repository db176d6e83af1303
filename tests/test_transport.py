"""
Property-based tests for HTTP Transport retry behavior.

Feature: stagingverdict
"""

from unittest.mock import MagicMock, patch

import httpx
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from stagingverdict.exceptions import (
    AuthenticationError,
    BackendError,
    MalformedResponseError,
    NotFoundError,
    RateLimitedError,
    ServerError,
)
from stagingverdict.transport import HTTPTransport, RetryConfig

BASE_URL = "https://api.example.org"

# Test strategies
backoff_factor_strategy = st.floats(min_value=1.1, max_value=5.0)
attempt_strategy = st.integers(min_value=0, max_value=5)
retry_after_strategy = st.integers(min_value=1, max_value=120)


def make_response(status_code: int, body: object = None, headers: dict | None = None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body if body is not None else {}
    response.headers = headers or {}
    return response


@given(
    backoff_factor=backoff_factor_strategy,
    attempt=attempt_strategy,
)
@settings(max_examples=100)
def test_exponential_backoff_timing(backoff_factor: float, attempt: int) -> None:
    """
    Exponential backoff timing

    For any retry configuration with backoff_factor B and attempt number N,
    the wait time before attempt N SHALL be approximately B^N seconds (with jitter).
    """
    config = RetryConfig(
        backoff_factor=backoff_factor,
        jitter=0.1,
        max_backoff=1000.0,  # High max to not interfere with test
    )
    transport = HTTPTransport(base_url=BASE_URL, retry_config=config)

    expected_base = backoff_factor ** attempt
    actual = transport._wait_time(attempt, None)

    assert expected_base * 0.9 <= actual <= expected_base * 1.1, (
        f"Backoff time {actual} not in expected range "
        f"for attempt {attempt} with factor {backoff_factor}"
    )


@given(retry_after=retry_after_strategy)
@settings(max_examples=100)
def test_retry_after_header_respected(retry_after: int) -> None:
    """A Retry-After header value is used as the wait time verbatim."""
    transport = HTTPTransport(
        base_url=BASE_URL, retry_config=RetryConfig(respect_retry_after=True)
    )

    assert transport._wait_time(0, str(retry_after)) == float(retry_after)


def test_retry_after_date_falls_back_to_backoff() -> None:
    config = RetryConfig(backoff_factor=2.0, jitter=0.0)
    transport = HTTPTransport(base_url=BASE_URL, retry_config=config)

    assert transport._wait_time(2, "Wed, 21 Oct 2026 07:28:00 GMT") == 4.0


def test_backoff_respects_max_backoff() -> None:
    """Test that backoff time is capped at max_backoff."""
    config = RetryConfig(backoff_factor=10.0, max_backoff=5.0, jitter=0.0)
    transport = HTTPTransport(base_url=BASE_URL, retry_config=config)

    assert transport._wait_time(3, None) == 5.0


@given(status_code=st.sampled_from([400, 401, 403, 404, 409, 422]))
@settings(max_examples=30)
def test_no_retry_on_client_errors(status_code: int) -> None:
    """Client errors other than 429 are raised on the first attempt."""
    transport = HTTPTransport(base_url=BASE_URL, retry_config=RetryConfig(max_retries=3))

    with patch.object(transport._client, "request",
                      return_value=make_response(status_code)) as request, \
            patch("stagingverdict.transport.time.sleep") as sleep:
        with pytest.raises(BackendError):
            transport.get("/projects/openSUSE:Factory")

    assert request.call_count == 1
    assert sleep.call_count == 0


@given(status_code=st.sampled_from([429, 500, 502, 503]))
@settings(max_examples=30)
def test_retryable_errors_use_every_retry(status_code: int) -> None:
    """Retryable status codes are attempted max_retries + 1 times."""
    transport = HTTPTransport(base_url=BASE_URL, retry_config=RetryConfig(max_retries=2))

    with patch.object(transport._client, "request",
                      return_value=make_response(status_code)) as request, \
            patch("stagingverdict.transport.time.sleep") as sleep:
        with pytest.raises(BackendError):
            transport.get("/requests")

    assert request.call_count == 3
    assert sleep.call_count == 2


def test_rate_limit_sleeps_for_retry_after() -> None:
    transport = HTTPTransport(base_url=BASE_URL, retry_config=RetryConfig(max_retries=1))
    responses = [
        make_response(429, headers={"Retry-After": "7"}),
        make_response(200, {"data": []}),
    ]

    with patch.object(transport._client, "request", side_effect=responses), \
            patch("stagingverdict.transport.time.sleep") as sleep:
        assert transport.get("/requests") == {"data": []}

    sleep.assert_called_once_with(7.0)


def test_get_returns_parsed_json() -> None:
    """A successful GET returns the decoded body and forwards query parameters."""
    transport = HTTPTransport(base_url=BASE_URL)
    response = make_response(200, {"data": {"name": "openSUSE:Factory"}})

    with patch.object(transport._client, "request", return_value=response) as request:
        result = transport.get("/projects/openSUSE:Factory", params={"match": "x"})

    assert result == {"data": {"name": "openSUSE:Factory"}}
    request.assert_called_once_with(
        "GET", "/projects/openSUSE:Factory", params={"match": "x"}
    )


def test_get_retries_then_succeeds() -> None:
    """A 503 followed by a 200 yields the second response after one backoff."""
    transport = HTTPTransport(base_url=BASE_URL, retry_config=RetryConfig(max_retries=3))
    responses = [make_response(503), make_response(200, {"data": {}})]

    with patch.object(transport._client, "request", side_effect=responses) as request, \
            patch("stagingverdict.transport.time.sleep") as sleep:
        result = transport.get("/requests")

    assert result == {"data": {}}
    assert request.call_count == 2
    assert sleep.call_count == 1


def test_get_gives_up_after_max_retries() -> None:
    """Persistent server errors surface as ServerError after the last retry."""
    transport = HTTPTransport(base_url=BASE_URL, retry_config=RetryConfig(max_retries=2))

    with patch.object(transport._client, "request", return_value=make_response(500)) as request, \
            patch("stagingverdict.transport.time.sleep"):
        with pytest.raises(ServerError):
            transport.get("/build/home:foo/_result")

    assert request.call_count == 3


def test_get_does_not_retry_not_found() -> None:
    """A 404 is raised immediately."""
    transport = HTTPTransport(base_url=BASE_URL)

    with patch.object(transport._client, "request", return_value=make_response(404)) as request, \
            patch("stagingverdict.transport.time.sleep") as sleep:
        with pytest.raises(NotFoundError):
            transport.get("/projects/missing")

    assert request.call_count == 1
    assert sleep.call_count == 0


def test_connection_errors_become_server_errors() -> None:
    """Network failures are retried, then reported as CONNECTION_ERROR."""
    transport = HTTPTransport(base_url=BASE_URL, retry_config=RetryConfig(max_retries=1))
    error = httpx.ConnectError("connection refused")

    with patch.object(transport._client, "request", side_effect=error) as request, \
            patch("stagingverdict.transport.time.sleep"):
        with pytest.raises(ServerError) as exc_info:
            transport.get("/requests")

    assert exc_info.value.code == "CONNECTION_ERROR"
    assert request.call_count == 2


def test_basic_auth_configured_only_with_both_credentials() -> None:
    """Basic authentication needs both user and token."""
    with_auth = HTTPTransport(base_url=BASE_URL, username="alice", token="secret")
    without_auth = HTTPTransport(base_url=BASE_URL, username="alice")

    assert isinstance(with_auth._client.auth, httpx.BasicAuth)
    assert without_auth._client.auth is None


def test_non_json_body_is_malformed() -> None:
    """A successful response that is not JSON is a backend failure."""
    transport = HTTPTransport(base_url=BASE_URL)
    response = make_response(200)
    response.json.side_effect = ValueError("not json")

    with patch.object(transport._client, "request", return_value=response):
        with pytest.raises(MalformedResponseError) as exc_info:
            transport.get("/build/home:foo/_result")

    assert exc_info.value.code == "MALFORMED_RESPONSE"
    assert isinstance(exc_info.value, BackendError)


@pytest.mark.parametrize("body", [[], "ok", 42])
def test_non_object_body_is_malformed(body: object) -> None:
    transport = HTTPTransport(base_url=BASE_URL)

    with patch.object(transport._client, "request", return_value=make_response(200, body)):
        with pytest.raises(MalformedResponseError):
            transport.get("/requests")


# Status code to exception type mapping for property test
STATUS_CODE_TO_EXCEPTION = {
    400: BackendError,
    401: AuthenticationError,
    403: AuthenticationError,
    404: NotFoundError,
    409: BackendError,
    422: BackendError,
    429: RateLimitedError,
    500: ServerError,
    502: ServerError,
    503: ServerError,
}


@given(
    status_code=st.sampled_from(sorted(STATUS_CODE_TO_EXCEPTION)),
    error_code=st.text(min_size=1, max_size=50, alphabet=st.characters(
        whitelist_categories=("Lu", "Ll", "Nd"),
        whitelist_characters="_"
    )),
    error_message=st.text(min_size=1, max_size=200),
    request_id=st.text(min_size=1, max_size=50, alphabet=st.characters(
        whitelist_categories=("Lu", "Ll", "Nd"),
        whitelist_characters="-"
    )),
    retry_after=st.integers(min_value=1, max_value=3600),
)
@settings(max_examples=100)
def test_property_error_response_mapping(
    status_code: int,
    error_code: str,
    error_message: str,
    request_id: str,
    retry_after: int,
) -> None:
    """
    Error response mapping

    Every error response maps to a BackendError of the status' type carrying
    the error code, message and request id, plus retry_after for rate limiting.
    """
    transport = HTTPTransport(base_url=BASE_URL)

    mock_response = make_response(
        status_code,
        {"error": {"code": error_code, "message": error_message}},
        {"Retry-After": str(retry_after), "X-Request-Id": request_id},
    )

    error = transport._error_for(mock_response)

    assert type(error) is STATUS_CODE_TO_EXCEPTION[status_code]
    assert error.code == error_code
    assert error.message == error_message
    assert error.request_id == request_id

    if status_code == 429:
        assert isinstance(error, RateLimitedError)
        assert error.retry_after == retry_after


def test_error_response_without_json_body() -> None:
    """Bodies that are not JSON fall back to a code and message from the status."""
    transport = HTTPTransport(base_url=BASE_URL)
    response = make_response(502)
    response.json.side_effect = ValueError("not json")

    error = transport._error_for(response)

    assert isinstance(error, ServerError)
    assert error.code == "HTTP_502"
    assert error.message == "HTTP 502"
    assert error.request_id is None
