"""CopyWorx: AI copy analysis against brand voices and target personas."""

__version__ = "0.1.0"
