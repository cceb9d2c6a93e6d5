"""Database runtime adapters for CLI workflows."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.cli.shared.console import CLIConsole, console
from src.cli.shell_commands.postgres import PostgresCommands
from src.infra.constants import ToolchainPaths, get_paths

if TYPE_CHECKING:
    from src.infra.postgres.connection import DbEndpoint, DbSettings, PostgresConnection


@dataclass(frozen=True)
class DbRuntime:
    """Dependencies of the database workflows.

    Tests build one with fakes; the CLI uses get_db_runtime().
    """

    console: CLIConsole
    get_settings: Callable[[], DbSettings]
    connect: Callable[[DbEndpoint], PostgresConnection]
    commands: PostgresCommands
    paths: ToolchainPaths
    sleep: Callable[[float], None] = time.sleep


def get_db_runtime(paths: ToolchainPaths | None = None) -> DbRuntime:
    """Build a DbRuntime for the project the CLI is run from."""
    from src.cli.shell_commands import ShellCommands
    from src.infra.postgres.connection import PostgresConnection, load_db_settings

    paths = paths or get_paths()
    return DbRuntime(
        console=console,
        get_settings=lambda: load_db_settings(paths),
        connect=PostgresConnection,
        commands=ShellCommands(paths.project_root).postgres,
        paths=paths,
    )
