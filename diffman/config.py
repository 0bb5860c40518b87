"""Configuration management for diffman.

Handles user-level configuration stored in ~/.diffman/config.yaml:

    encoding: utf-8      # Encoding used to read and write target files
    log_level: WARNING   # Level of the diffman log output
"""

import codecs
import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from diffman.diff.exceptions import DiffmanError


logger = logging.getLogger(__name__)

_CONFIG_DIR = Path.home() / ".diffman"

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigError(DiffmanError):
    """Raised when there's an error with the configuration file."""

    pass


class DiffmanConfig(BaseModel):
    """Settings read from config.yaml."""

    encoding: str = "utf-8"
    log_level: str = "WARNING"

    @field_validator("encoding")
    @classmethod
    def check_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError:
            raise ValueError(f"unknown encoding: {value}")
        return value

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level


def get_config_dir() -> Path:
    """Get the diffman configuration directory.

    Returns:
        Path to ~/.diffman/
    """
    return _CONFIG_DIR


def get_config_file_path() -> Path:
    """Get path to config.yaml file.

    Returns:
        Path to ~/.diffman/config.yaml
    """
    return get_config_dir() / "config.yaml"


def load_config(path: Optional[Path] = None) -> DiffmanConfig:
    """Load configuration from a YAML file.

    Args:
        path: Config file to read. Defaults to ~/.diffman/config.yaml.

    Returns:
        DiffmanConfig. Defaults when the file doesn't exist.

    Raises:
        ConfigError: If the file can't be read, isn't a YAML mapping, or holds
            invalid values.
    """
    config_file = path if path is not None else get_config_file_path()

    if not config_file.exists():
        logger.debug("No config file at %s, using defaults", config_file)
        return DiffmanConfig()

    try:
        with open(config_file, "r") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config from {config_file}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config in {config_file} must be a mapping")

    try:
        config = DiffmanConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {config_file}: {e}") from e

    logger.debug("Config loaded from %s", config_file)
    return config
