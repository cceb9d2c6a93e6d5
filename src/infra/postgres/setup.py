"""Fresh cloud database setup.

Drops the cloud database if it exists, recreates it and prepares it for
the application user.
"""

from src.cli.shared.console import CLIConsole, console
from src.infra.constants import DEFAULT_CONSTANTS
from src.infra.errors import ToolchainError
from src.infra.steps import run_step

from . import sql
from .connection import DbSettings, PostgresConnection


class PostgresFreshSetup:
    """Recreates the cloud database from scratch.

    This includes:
    - Blocking and terminating connections to an existing database
    - Dropping it with FORCE
    - Creating it with the configured connection limit
    - Installing extensions
    - Creating the application user and granting privileges
    """

    def __init__(
        self,
        connection: PostgresConnection,
        settings: DbSettings,
        output: CLIConsole = console,
    ) -> None:
        self._connection = connection
        self._settings = settings
        self._console = output

    def run(self) -> None:
        """Run the setup sequence, stopping at the first failed step.

        Raises:
            ToolchainError: If any step fails
        """
        s = self._settings
        conn = self._connection
        out = self._console
        database = s.cloud.require("name")
        app_user, app_pass = s.require_app_user()

        self._console.print_subheader(f"Fresh setup of {database}")

        exists = run_step(
            out,
            "Check if database exists",
            lambda: conn.database_exists(database),
        )

        if exists:
            out.warn(f"Database '{database}' already exists. Removing...")
            run_step(
                out,
                "Revoke new connections",
                lambda: conn.execute_script(sql.connection_limit(database, 0)),
            )
            run_step(
                out,
                "Terminate existing connections",
                lambda: conn.execute_script(sql.terminate_connections(database)),
            )
            run_step(
                out,
                "Drop existing database",
                lambda: conn.execute_script(
                    f"DROP DATABASE IF EXISTS {database} WITH (FORCE);"
                ),
            )
        else:
            out.info("Database does not exist, proceeding with creation")

        try:
            run_step(
                out,
                "Create fresh database",
                lambda: conn.execute_script(f"CREATE DATABASE {database};"),
            )
        except ToolchainError as e:
            raise ToolchainError(f"Failed to create database {database}", e.details) from e

        run_step(
            out,
            f"Set connection limit to {s.max_connections}",
            lambda: conn.execute_script(
                sql.connection_limit(database, s.max_connections)
            ),
        )
        run_step(
            out,
            "Set up extensions",
            lambda: conn.execute_script(
                "\n".join(
                    f'CREATE EXTENSION IF NOT EXISTS "{extension}";'
                    for extension in DEFAULT_CONSTANTS.EXTENSIONS
                ),
                database=database,
            ),
        )
        run_step(
            out,
            f"Create {app_user} user",
            lambda: conn.execute_script(sql.ensure_login_role(app_user, app_pass)),
        )
        run_step(
            out,
            f"Grant permissions to {app_user}",
            lambda: conn.execute_script(
                sql.grant_database(database, app_user)
                + sql.grant_public_schema(app_user),
                database=database,
            ),
        )

        out.ok("Database setup completed successfully!")
