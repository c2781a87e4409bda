"""HTTP surface of the CopyWorx service."""

from .server import create_app

__all__ = ["create_app"]
