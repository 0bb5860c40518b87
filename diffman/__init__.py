"""Unified diff parser and in-memory patch engine."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("diffman")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
