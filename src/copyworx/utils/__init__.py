"""Utility modules for the CopyWorx service."""

from .logging import get_logger, setup_logging
from .retry import retry_with_backoff

__all__ = ["get_logger", "retry_with_backoff", "setup_logging"]
