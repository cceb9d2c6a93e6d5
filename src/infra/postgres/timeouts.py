"""Timeout and keepalive configuration for the cloud database."""

from rich.table import Table

from src.cli.shared.console import CLIConsole, console
from src.infra.steps import run_step

from .connection import DbSettings, PostgresConnection

# Settings reported after applying timeouts
REPORTED_SETTINGS: tuple[str, ...] = (
    "statement_timeout",
    "idle_in_transaction_session_timeout",
    "idle_session_timeout",
    "tcp_keepalives_idle",
    "tcp_keepalives_interval",
    "tcp_keepalives_count",
)


def timeout_statements(settings: DbSettings) -> list[str]:
    """Build the ALTER statements, one per parameter, in application order."""
    s = settings
    database = s.cloud.require("name")
    statements = [
        f"ALTER DATABASE {database} SET statement_timeout = '{s.statement_timeout}'",
        f"ALTER DATABASE {database} SET idle_in_transaction_session_timeout = '{s.idle_transaction_timeout}'",
        f"ALTER ROLE {s.cloud.require('user')} SET idle_session_timeout = '{s.idle_session_timeout}'",
    ]
    if s.app_user:
        statements.append(
            f"ALTER ROLE {s.app_user} SET idle_session_timeout = '{s.idle_session_timeout}'"
        )
    statements.extend(
        [
            f"ALTER SYSTEM SET idle_session_timeout = '{s.master_idle_timeout}'",
            f"ALTER SYSTEM SET tcp_keepalives_idle = {s.tcp_keepalives_idle}",
            f"ALTER SYSTEM SET tcp_keepalives_interval = {s.tcp_keepalives_interval}",
            f"ALTER SYSTEM SET tcp_keepalives_count = {s.tcp_keepalives_count}",
        ]
    )
    return statements


class PostgresTimeouts:
    """Applies statement, idle and keepalive timeouts."""

    def __init__(
        self,
        connection: PostgresConnection,
        settings: DbSettings,
        output: CLIConsole = console,
    ) -> None:
        self._connection = connection
        self._settings = settings
        self._console = output

    def apply(self) -> dict[str, str]:
        """Apply every timeout statement, then read the settings back.

        Each parameter is set individually so a failure names the offending
        statement.

        Returns:
            Mapping of setting name to its current value

        Raises:
            ToolchainError: If a statement fails
        """
        conn = self._connection
        database = self._settings.cloud.require("name")

        self._console.print_subheader("Setting database timeout parameters")
        for statement in timeout_statements(self._settings):
            run_step(
                self._console,
                statement,
                lambda statement=statement: conn.execute_script(
                    statement, database=database
                ),
            )

        current = self.current_settings()
        self._print_settings(current)
        self._console.ok("Timeout parameters set successfully!")
        return current

    def current_settings(self) -> dict[str, str]:
        """Read the reported settings through a fresh session."""
        conn = self._connection
        database = self._settings.cloud.require("name")
        # New values only apply to new sessions
        conn.close()
        return {
            name: str(conn.scalar(f"SHOW {name}", database=database))
            for name in REPORTED_SETTINGS
        }

    def _print_settings(self, current: dict[str, str]) -> None:
        table = Table(title="Current timeout settings")
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="green")
        for name, value in current.items():
            table.add_row(name, value)
        self._console.print(table)
