"""Category tree defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass

from catsync.domain.model.category import DEFAULT_PATH_SEPARATOR, DEFAULT_ROOT_CATEGORY_ID

from .env import optional_int_env_var
from .errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class CategoryTreeConfig:
    root_category_id: int = DEFAULT_ROOT_CATEGORY_ID
    path_separator: str = DEFAULT_PATH_SEPARATOR


def get_category_tree_config() -> CategoryTreeConfig:
    root_id = optional_int_env_var("CATSYNC_ROOT_CATEGORY_ID", DEFAULT_ROOT_CATEGORY_ID)
    if root_id < 1:
        raise ConfigurationError("CATSYNC_ROOT_CATEGORY_ID must be a positive integer")
    separator = os.getenv("CATSYNC_PATH_SEPARATOR") or DEFAULT_PATH_SEPARATOR
    return CategoryTreeConfig(root_category_id=root_id, path_separator=separator)
