"""pg_dump / pg_restore command abstractions.

SQL statements go through psycopg2 (see src.infra.postgres.connection);
moving data between servers is left to the Postgres client tools.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from src.infra.constants import DEFAULT_CONSTANTS

from .types import CommandResult

if TYPE_CHECKING:
    from src.infra.postgres.connection import DbEndpoint

    from .runner import CommandRunner


def _connection_args(endpoint: DbEndpoint) -> list[str]:
    return [
        "-h",
        endpoint.require("host"),
        "-p",
        str(endpoint.port),
        "-U",
        endpoint.require("user"),
    ]


def _password_env(endpoint: DbEndpoint) -> dict[str, str | None]:
    return {"PGPASSWORD": endpoint.password}


class PostgresCommands:
    """Postgres client tool commands."""

    def __init__(self, runner: CommandRunner) -> None:
        self._runner = runner

    def dump(
        self,
        endpoint: DbEndpoint,
        output_dir: Path,
        *,
        jobs: int = DEFAULT_CONSTANTS.DUMP_JOBS,
        exclude_table_data: str | None = DEFAULT_CONSTANTS.DUMP_EXCLUDE_TABLE_DATA,
    ) -> CommandResult:
        """Dump a database in directory format without owners or ACLs.

        Args:
            endpoint: Server and database to dump
            output_dir: Target directory (must not exist yet)
            jobs: Parallel dump jobs
            exclude_table_data: Table pattern whose rows are skipped

        Returns:
            CommandResult of the pg_dump invocation
        """
        cmd = [
            "pg_dump",
            *_connection_args(endpoint),
            "-d",
            endpoint.require("name"),
            "--no-owner",
            "--no-acl",
            "-Fd",
            "-j",
            str(jobs),
        ]
        if exclude_table_data:
            cmd.append(f"--exclude-table-data={exclude_table_data}")
        cmd.extend(["-f", str(output_dir)])
        return self._runner.run(cmd, env=_password_env(endpoint))

    def restore(
        self,
        endpoint: DbEndpoint,
        dump_dir: Path,
        *,
        jobs: int = DEFAULT_CONSTANTS.DUMP_JOBS,
    ) -> CommandResult:
        """Restore a directory-format dump into an existing database."""
        cmd = [
            "pg_restore",
            *_connection_args(endpoint),
            "-d",
            endpoint.require("name"),
            "--no-owner",
            "--no-acl",
            "-j",
            str(jobs),
            str(dump_dir),
        ]
        return self._runner.run(cmd, env=_password_env(endpoint))
