"""
Error classification for the analysis pipeline.

Every failure leaving the pipeline is a ``CopyWorxError``. Upstream failures
are recognised by the HTTP status carried on the provider exception and mapped
to the matching ``Upstream*`` class; anything unrecognised becomes a generic
500 whose cause is logged but never shown to the caller.
"""

from typing import Optional

from ..exceptions import (
    CopyWorxError,
    UpstreamAuthFailure,
    UpstreamError,
    UpstreamRateLimited,
    UpstreamUnavailable,
)
from ..utils.logging import get_logger

logger = get_logger(__name__)


def _as_status(value) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int) and 100 <= value <= 599:
        return value
    # google.api_core exposes HTTP codes as http.HTTPStatus (an int) or an int-like enum
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if 100 <= number <= 599 else None


def upstream_status(exc: BaseException) -> Optional[int]:
    """Return the HTTP status attached to a provider exception, if any.

    Checks ``status_code``, ``code`` and ``response.status_code`` on the
    exception and then on its chained causes.
    """
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        for attr in ("status_code", "code"):
            status = _as_status(getattr(current, attr, None))
            if status is not None:
                return status
        response = getattr(current, "response", None)
        if response is not None:
            status = _as_status(getattr(response, "status_code", None))
            if status is not None:
                return status
        current = current.__cause__ or current.__context__
    return None


def classify_upstream_error(exc: BaseException) -> Optional[UpstreamError]:
    """Map a failed model call to an ``UpstreamError``.

    Returns None when the exception carries no HTTP status, in which case the
    caller should treat it as an unknown failure.
    """
    status = upstream_status(exc)
    if status is None:
        return None
    if status == 429:
        return UpstreamRateLimited(upstream_status=status)
    if status in (401, 403):
        return UpstreamAuthFailure(upstream_status=status)
    if status in (500, 503):
        return UpstreamUnavailable(upstream_status=status)
    return UpstreamError(upstream_status=status)


def classify_error(exc: BaseException, *, endpoint: str = "unknown") -> CopyWorxError:
    """Turn any exception into the ``CopyWorxError`` reported to the caller."""
    if isinstance(exc, CopyWorxError):
        return exc

    upstream = classify_upstream_error(exc)
    if upstream is not None:
        logger.warning(
            "Upstream model call failed",
            endpoint=endpoint,
            upstream_status=upstream.upstream_status,
            error_type=type(exc).__name__,
        )
        return upstream

    logger.error(
        "Unexpected error in analysis pipeline",
        endpoint=endpoint,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return CopyWorxError()
