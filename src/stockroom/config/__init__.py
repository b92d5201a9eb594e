"""Application configuration helpers."""

from __future__ import annotations

from .catalog import CatalogConfig, get_catalog_config
from .env import choice_env_var, decimal_env_var, optional_env_var
from .errors import ConfigurationError
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "CatalogConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "StorageConfig",
    "choice_env_var",
    "configure_logging",
    "decimal_env_var",
    "get_catalog_config",
    "get_database_config",
    "get_storage_config",
    "optional_env_var",
]
