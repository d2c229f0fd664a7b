"""Database location settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "catsync"
DEFAULT_DB_FILENAME: Final[str] = "catsync.db"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def data_dir() -> Path:
    """Return the directory for the default SQLite database.

    ``CATSYNC_DATA_DIR`` wins; otherwise the platform's per-user data directory
    (``LOCALAPPDATA`` on Windows, ``XDG_DATA_HOME`` elsewhere) gets a ``catsync``
    subdirectory.
    """

    override = os.getenv("CATSYNC_DATA_DIR")
    if override:
        return Path(override).expanduser().resolve()
    if os.name == "nt":
        platform_dir = os.getenv("LOCALAPPDATA") or str(Path.home() / "AppData" / "Local")
    else:
        platform_dir = os.getenv("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    return (Path(platform_dir) / APP_DIR_NAME).expanduser().resolve()


def sqlite_database_uri(directory: Path, filename: str = DEFAULT_DB_FILENAME) -> str:
    """Build a pysqlite URI for ``filename`` in ``directory``, creating the directory."""

    directory.mkdir(parents=True, exist_ok=True)
    return f"sqlite+pysqlite:///{directory / filename}"


def get_database_config() -> DatabaseConfig:
    env_uri = os.getenv("DATABASE_URI")
    if env_uri:
        return DatabaseConfig(uri=env_uri)
    return DatabaseConfig(uri=sqlite_database_uri(data_dir()))
