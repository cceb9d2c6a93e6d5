import os
from unittest.mock import MagicMock, Mock

import pytest

from src.cli.shared.console import CLIConsole
from src.infra.constants import ToolchainPaths
from src.infra.postgres.connection import DB_ENV_KEYS, DbEndpoint, DbSettings

# Database variables from the developer's shell must not leak into tests
for _key in DB_ENV_KEYS:
    os.environ.pop(_key, None)


@pytest.fixture
def output():
    """CLIConsole double that records calls instead of printing."""
    return Mock(spec=CLIConsole)


@pytest.fixture
def paths(tmp_path):
    """ToolchainPaths rooted in a temporary project."""
    (tmp_path / "package.json").write_text('{"name": "demo", "version": "1.2.3"}\n')
    return ToolchainPaths(tmp_path)


@pytest.fixture
def db_settings():
    """Fully configured database settings."""
    return DbSettings(
        local=DbEndpoint(prefix="LOCAL_DB", name="appdb", user="dev", host="localhost"),
        cloud=DbEndpoint(
            prefix="CLOUD_DB",
            name="clouddb",
            user="admin",
            host="db.example.com",
            port=5433,
            password="secret",
        ),
        app_user="payload",
        app_pass="payload",
    )


@pytest.fixture
def mock_connection():
    """PostgresConnection double usable as a context manager."""
    conn = MagicMock()
    conn.__enter__.return_value = conn
    conn.__exit__.return_value = False
    conn.execute.return_value = []
    return conn
