from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from catsync.config import (
    CategoryTreeConfig,
    ConfigurationError,
    data_dir,
    get_category_tree_config,
    get_database_config,
    optional_int_env_var,
    sqlite_database_uri,
)

if TYPE_CHECKING:
    from pathlib import Path


def test_optional_int_env_var_defaults_when_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXAMPLE_INT", raising=False)

    assert optional_int_env_var("EXAMPLE_INT", 5) == 5


def test_optional_int_env_var_treats_blank_as_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_INT", "   ")

    assert optional_int_env_var("EXAMPLE_INT", 5) == 5


def test_optional_int_env_var_parses_value(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_INT", " 42 ")

    assert optional_int_env_var("EXAMPLE_INT", 5) == 42


def test_optional_int_env_var_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_INT", "forty-two")

    with pytest.raises(ConfigurationError) as exc:
        optional_int_env_var("EXAMPLE_INT", 5)

    assert "EXAMPLE_INT" in str(exc.value)


def test_category_tree_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CATSYNC_ROOT_CATEGORY_ID", raising=False)
    monkeypatch.delenv("CATSYNC_PATH_SEPARATOR", raising=False)

    assert get_category_tree_config() == CategoryTreeConfig(root_category_id=1, path_separator="->")


def test_category_tree_config_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CATSYNC_ROOT_CATEGORY_ID", "3")
    monkeypatch.setenv("CATSYNC_PATH_SEPARATOR", "/")

    config = get_category_tree_config()

    assert config.root_category_id == 3
    assert config.path_separator == "/"


def test_category_tree_config_rejects_non_positive_root(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CATSYNC_ROOT_CATEGORY_ID", "0")

    with pytest.raises(ConfigurationError):
        get_category_tree_config()


def test_database_uri_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "postgresql+psycopg://localhost/catsync")

    assert get_database_config().uri == "postgresql+psycopg://localhost/catsync"


def test_database_uri_defaults_to_sqlite_in_data_dir(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)
    monkeypatch.setenv("CATSYNC_DATA_DIR", str(tmp_path / "data"))

    uri = get_database_config().uri

    assert uri == f"sqlite+pysqlite:///{(tmp_path / 'data').resolve()}/catsync.db"
    assert (tmp_path / "data").is_dir()


def test_data_dir_from_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("CATSYNC_DATA_DIR", str(tmp_path))

    assert data_dir() == tmp_path.resolve()


def test_data_dir_defaults_under_xdg_data_home(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    monkeypatch.delenv("CATSYNC_DATA_DIR", raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    assert data_dir() == (tmp_path / "catsync").resolve()
    assert not (tmp_path / "catsync").exists()


def test_sqlite_database_uri_creates_directory(tmp_path: Path) -> None:
    directory = tmp_path / "nested" / "data"

    uri = sqlite_database_uri(directory, "other.db")

    assert uri == f"sqlite+pysqlite:///{directory}/other.db"
    assert directory.is_dir()
