"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var
from .errors import ConfigurationError
from .logging import configure_logging
from .matching import (
    DEFAULT_IMAGE_EXTENSIONS,
    DEFAULT_IMAGE_FOLDER,
    DEFAULT_WORLD_FOLDER,
    MatchingConfig,
    get_matching_config,
    parse_extensions,
)
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "DEFAULT_IMAGE_EXTENSIONS",
    "DEFAULT_IMAGE_FOLDER",
    "DEFAULT_WORLD_FOLDER",
    "ConfigurationError",
    "DatabaseConfig",
    "MatchingConfig",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_matching_config",
    "get_storage_config",
    "optional_env_var",
    "parse_extensions",
]
