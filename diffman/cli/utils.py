"""Shared helpers for diffman CLI commands."""

import logging
import sys
from pathlib import Path
from typing import Optional

from diffman.config import DiffmanConfig, load_config
from diffman.diff.exceptions import DiffmanError


class DiffFileError(DiffmanError):
    """Raised when the diff file itself can't be read."""

    pass


def setup_logging(level: str) -> None:
    """Send diffman log records to stderr at the given level."""
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))

    diffman_logger = logging.getLogger("diffman")
    diffman_logger.setLevel(level)

    # Remove any existing handlers to avoid duplicates on reconfigure
    diffman_logger.handlers.clear()
    diffman_logger.addHandler(console_handler)
    diffman_logger.propagate = False


def load_settings(config_path: Optional[Path], verbose: bool) -> DiffmanConfig:
    """Load configuration and set up logging from it."""
    config = load_config(config_path)
    setup_logging("DEBUG" if verbose else config.log_level)
    return config


def read_diff_file(path: Path) -> str:
    """Read the whole diff file.

    Raises:
        DiffFileError: If the file can't be read or decoded.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeError) as e:
        raise DiffFileError(f"Failed to read diff file {path}: {e}") from e
