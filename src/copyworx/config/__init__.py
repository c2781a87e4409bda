"""Configuration package for CopyWorx."""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
