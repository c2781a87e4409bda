import pytest

from copyworx.analysis.errors import classify_error, classify_upstream_error, upstream_status
from copyworx.exceptions import (
    AnalysisTimeout,
    CopyWorxError,
    UpstreamAuthFailure,
    UpstreamError,
    UpstreamRateLimited,
    UpstreamUnavailable,
)


class ProviderError(Exception):
    def __init__(self, message, code=None):
        super().__init__(message)
        self.code = code


class HTTPError(Exception):
    def __init__(self, status_code):
        super().__init__(f"HTTP {status_code}")
        self.response = type("Response", (), {"status_code": status_code})()


@pytest.mark.parametrize(
    "status,expected_class,expected_status",
    [
        (429, UpstreamRateLimited, 429),
        (401, UpstreamAuthFailure, 401),
        (403, UpstreamAuthFailure, 403),
        (500, UpstreamUnavailable, 500),
        (503, UpstreamUnavailable, 503),
        (400, UpstreamError, 400),
    ],
)
def test_upstream_status_mapping(status, expected_class, expected_status):
    error = classify_upstream_error(ProviderError("failed", code=status))

    assert type(error) is expected_class
    assert error.status_code == expected_status
    assert error.upstream_status == status


def test_auth_failure_is_not_retryable():
    error = classify_upstream_error(ProviderError("denied", code=401))

    assert error.retryable is False
    assert "contact support" in error.details


def test_status_is_read_from_response_attribute():
    assert upstream_status(HTTPError(429)) == 429


def test_status_is_read_from_chained_cause():
    try:
        try:
            raise ProviderError("quota", code=429)
        except ProviderError as inner:
            raise RuntimeError("wrapped") from inner
    except RuntimeError as outer:
        assert upstream_status(outer) == 429


def test_non_http_code_is_ignored():
    assert upstream_status(ProviderError("odd", code="INVALID_ARGUMENT")) is None
    assert classify_upstream_error(ValueError("plain")) is None


def test_service_errors_pass_through():
    timeout = AnalysisTimeout()

    assert classify_error(timeout) is timeout


def test_unknown_errors_become_generic_500():
    error = classify_error(RuntimeError("secret internal detail"), endpoint="tone-shift")

    assert type(error) is CopyWorxError
    assert error.status_code == 500
    assert "secret" not in error.details
    assert error.to_dict() == {
        "error": "Internal server error",
        "details": "An unexpected error occurred. Please try again.",
    }
