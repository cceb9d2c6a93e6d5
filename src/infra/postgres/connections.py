"""Closing client connections to the cloud database."""

import time
from collections.abc import Callable
from typing import Any

from rich.table import Table

from src.cli.shared.console import CLIConsole, console
from src.infra.constants import DEFAULT_CONSTANTS

from . import sql
from .connection import DbSettings, PostgresConnection

ACTIVITY_COLUMNS = ("pid", "usename", "application_name", "client_addr", "state")


class PostgresConnectionCloser:
    """Terminates every session on the cloud database.

    New connections are blocked with a connection limit of 0 while existing
    sessions are terminated. The limit is restored only once no sessions
    remain.
    """

    def __init__(
        self,
        connection: PostgresConnection,
        settings: DbSettings,
        output: CLIConsole = console,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._connection = connection
        self._settings = settings
        self._console = output
        self._sleep = sleep
        self._database = settings.cloud.require("name")

    def count(self) -> int:
        return int(
            self._connection.scalar(
                "SELECT COUNT(*) FROM pg_stat_activity WHERE datname = %s",
                (self._database,),
            )
            or 0
        )

    def list_connections(self) -> list[dict[str, Any]]:
        return self._connection.execute(
            f"SELECT {', '.join(ACTIVITY_COLUMNS)} FROM pg_stat_activity WHERE datname = %s",
            (self._database,),
        )

    def close_all(self) -> int:
        """Close all sessions and return how many remain afterwards."""
        out = self._console
        conn = self._connection
        database = self._database

        out.info("Checking current connections...")
        self._print_connections(self.list_connections(), "Active connections")

        count = self.count()
        out.info(f"Found {count} active connections")

        remaining = 0
        if count > 0:
            out.warn("Proceeding to close all connections...")
            out.info("Setting connection limit to 0...")
            conn.execute_script(sql.connection_limit(database, 0))

            out.info("Terminating all existing connections...")
            conn.execute_script(sql.terminate_connections(database))

            out.info("Verifying connections are closed...")
            self._sleep(DEFAULT_CONSTANTS.CONNECTION_CLOSE_GRACE)
            remaining = self.count()

            if remaining == 0:
                out.ok("All connections successfully closed")
                limit = self._settings.max_connections
                out.info(f"Resetting connection limit to {limit}...")
                conn.execute_script(sql.connection_limit(database, limit))
                out.ok("Database connection limit restored")
            else:
                out.error(
                    f"Some connections could not be closed ({remaining} remaining)"
                )
                self._print_connections(
                    self.list_connections(), "Remaining connections"
                )
        else:
            out.ok("No active connections found")

        self._print_status()
        return remaining

    def _print_status(self) -> None:
        row = self._connection.execute(
            "SELECT current_setting('max_connections') AS max_connections, "
            "(SELECT count(*) FROM pg_stat_activity WHERE datname = %s) AS current_connections",
            (self._database,),
        )
        status = row[0] if row else {}
        table = Table(title="Final connection status")
        table.add_column("max_connections", style="cyan")
        table.add_column("current_connections", style="green")
        table.add_row(
            str(status.get("max_connections", "-")),
            str(status.get("current_connections", "-")),
        )
        self._console.print(table)

    def _print_connections(self, rows: list[dict[str, Any]], title: str) -> None:
        if not rows:
            return
        table = Table(title=title)
        for column in ACTIVITY_COLUMNS:
            table.add_column(column)
        for row in rows:
            table.add_row(*(str(row.get(column) or "") for column in ACTIVITY_COLUMNS))
        self._console.print(table)
