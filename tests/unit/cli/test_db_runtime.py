"""Tests for database runtime adapters."""

from unittest.mock import Mock, patch

import pytest

from src.cli.commands.db.runtime import DbRuntime, get_db_runtime
from src.cli.shell_commands.postgres import PostgresCommands
from src.infra.postgres.connection import PostgresConnection


def test_db_runtime_is_immutable(paths):
    """Test that DbRuntime is frozen/immutable."""
    runtime = DbRuntime(
        console=Mock(),
        get_settings=Mock(),
        connect=Mock(),
        commands=Mock(),
        paths=paths,
    )

    with pytest.raises(AttributeError):
        runtime.sleep = Mock()  # type: ignore[misc]


def test_get_db_runtime_uses_given_paths(paths):
    runtime = get_db_runtime(paths)

    assert runtime.paths is paths
    assert not hasattr(runtime, "name")
    assert runtime.connect is PostgresConnection
    assert isinstance(runtime.commands, PostgresCommands)


def test_get_settings_reads_project_files_lazily(paths):
    runtime = get_db_runtime(paths)
    paths.env_file.write_text("CLOUD_DB_NAME=late_value\n")

    assert runtime.get_settings().cloud.name == "late_value"


@patch("src.cli.commands.db.runtime.get_paths")
def test_get_db_runtime_defaults_to_project_paths(mock_get_paths, paths):
    mock_get_paths.return_value = paths

    runtime = get_db_runtime()

    assert runtime.paths is paths
    mock_get_paths.assert_called_once_with()
