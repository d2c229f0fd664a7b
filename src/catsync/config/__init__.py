"""Application configuration helpers."""

from __future__ import annotations

from .category_tree import CategoryTreeConfig, get_category_tree_config
from .env import optional_int_env_var
from .errors import ConfigurationError
from .storage import DatabaseConfig, data_dir, get_database_config, sqlite_database_uri

__all__ = [
    "CategoryTreeConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "data_dir",
    "get_category_tree_config",
    "get_database_config",
    "optional_int_env_var",
    "sqlite_database_uri",
]
