"""Exception hierarchy for the CopyWorx service.

Every error the service reports to a caller is a ``CopyWorxError``. Each class
carries the HTTP status, the short ``error`` title and the human-readable
``details`` string returned in the ``{error, details}`` response body, plus a
``retryable`` hint for callers.
"""

from typing import Any, Dict, Optional


class CopyWorxError(Exception):
    """Base class for all service errors. Unclassified failures surface as this."""

    status_code: int = 500
    error: str = "Internal server error"
    default_details: str = "An unexpected error occurred. Please try again."
    retryable: bool = True

    def __init__(
        self,
        details: Optional[str] = None,
        *,
        error: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.details = details or self.default_details
        if error is not None:
            self.error = error
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.details)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.error, "details": self.details}


class ConfigurationError(CopyWorxError):
    """The process is missing required configuration, such as the model API key."""

    error = "Server configuration error"
    default_details = "API key not configured. Please contact support."
    retryable = False


class InvalidInput(CopyWorxError):
    """The caller sent a request the service cannot act on."""

    status_code = 400
    error = "Bad request"
    default_details = "Please provide a valid request body."
    retryable = False


class AnalysisTimeout(CopyWorxError):
    """The upstream model did not answer within the endpoint's time budget."""

    status_code = 408
    error = "Request timeout"
    default_details = "The request timed out. Please try again with shorter text."


class UpstreamError(CopyWorxError):
    """The language-model API rejected or failed the call."""

    error = "AI service error"
    default_details = "AI service error. Please try again."

    def __init__(self, details: Optional[str] = None, *, upstream_status: Optional[int] = None):
        super().__init__(details, status_code=upstream_status or None)
        self.upstream_status = upstream_status


class UpstreamRateLimited(UpstreamError):
    status_code = 429
    default_details = "Rate limit exceeded. Please wait a moment and try again."


class UpstreamAuthFailure(UpstreamError):
    status_code = 401
    default_details = "Authentication error. Please contact support."
    retryable = False


class UpstreamUnavailable(UpstreamError):
    status_code = 503
    default_details = "AI service temporarily unavailable. Please try again in a moment."


class MalformedUpstreamResponse(CopyWorxError):
    """The model answered, but not with something the service could parse."""

    error = "AI processing error"
    default_details = "Failed to parse AI response. Please try again."


class Unauthorized(CopyWorxError):
    status_code = 401
    error = "Unauthorized"
    default_details = "You must be logged in to access this resource"
    retryable = False


class NotFound(CopyWorxError):
    status_code = 404
    error = "Not found"
    retryable = False


class DatabaseNotConfigured(CopyWorxError):
    status_code = 503
    error = "Database not configured"
    default_details = "Supabase is not set up"
    retryable = False
