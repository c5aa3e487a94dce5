"""Application configuration helpers."""

from __future__ import annotations

from .actor import get_cli_actor
from .env import env_flag, env_float, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .reconciliation import ReconciliationConfig, get_reconciliation_config
from .storage import (
    DatabaseConfig,
    StorageConfig,
    get_database_config,
    get_database_uri,
    get_storage_config,
)

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "ReconciliationConfig",
    "StorageConfig",
    "env_flag",
    "env_float",
    "get_cli_actor",
    "get_database_config",
    "get_database_uri",
    "get_reconciliation_config",
    "get_storage_config",
    "optional_env_var",
    "require_env_vars",
]
