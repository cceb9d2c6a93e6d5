"""Database cloning between the local and cloud servers.

A clone is a directory-format pg_dump of the source database restored into
a freshly recreated target database, followed by privilege grants.
"""

import shutil
from collections.abc import Callable
from pathlib import Path

from loguru import logger

from src.cli.shared.console import CLIConsole, console
from src.cli.shell_commands.postgres import PostgresCommands
from src.infra.steps import run_step

from . import sql
from .connection import DbEndpoint, DbSettings, PostgresConnection

# Role that owns schema public on the cloud server after a clone
CLOUD_SCHEMA_OWNER = "postgres"


class PostgresCloner:
    """Copies a database from one server to the other.

    - clone_to_cloud: local -> cloud, then grants for the application user
    - clone_to_local: cloud -> local (read-only on the cloud side)
    """

    def __init__(
        self,
        settings: DbSettings,
        commands: PostgresCommands,
        connect: Callable[[DbEndpoint], PostgresConnection],
        dump_dir: Path,
        output: CLIConsole = console,
    ) -> None:
        self._settings = settings
        self._commands = commands
        self._connect = connect
        self._console = output
        self.dump_dir = dump_dir

    def clone_to_cloud(self) -> str:
        """Replace the cloud database with a copy of the local one.

        Returns:
            The application connection string for the cloud database
        """
        s = self._settings
        s.require_app_user()
        source = s.local.validate_required()
        target = s.cloud.validate_required()

        self._console.print_subheader("Cloning local database to cloud")
        self._transfer(source, target, self._grant_cloud)
        self._console.ok("Database clone completed successfully!")
        return s.app_connection_string()

    def clone_to_local(self) -> str:
        """Replace the local database with a copy of the cloud one.

        Returns:
            The local connection string
        """
        s = self._settings
        source = s.cloud.validate_required()
        target = s.local.validate_required()

        self._console.print_subheader("Cloning cloud database to local")
        self._console.info(f"The cloud database ({source.label}) is only read from")
        self._transfer(source, target, self._grant_local)
        self._console.ok("Reverse database migration completed successfully!")
        return s.local_connection_string()

    def _transfer(
        self,
        source: DbEndpoint,
        target: DbEndpoint,
        grant: Callable[[PostgresConnection, DbEndpoint], None],
    ) -> None:
        out = self._console
        target_db = target.require("name")
        self._remove_dump_dir()
        self.dump_dir.parent.mkdir(parents=True, exist_ok=True)

        try:
            run_step(
                out,
                f"Dump {source.label}",
                lambda: self._commands.dump(source, self.dump_dir).raise_for_status(),
            )

            with self._connect(target) as conn:
                run_step(
                    out,
                    f"Terminate connections to {target_db}",
                    lambda: conn.execute_script(sql.terminate_connections(target_db)),
                )
                run_step(
                    out,
                    f"Drop database {target_db}",
                    lambda: conn.execute_script(f"DROP DATABASE IF EXISTS {target_db};"),
                )
                run_step(
                    out,
                    f"Create database {target_db}",
                    lambda: conn.execute_script(f"CREATE DATABASE {target_db};"),
                )
                run_step(
                    out,
                    f"Restore dump into {target_db}",
                    lambda: self._commands.restore(
                        target, self.dump_dir
                    ).raise_for_status(),
                )
                self._remove_dump_dir()
                run_step(out, "Set up permissions", lambda: grant(conn, target))
        finally:
            self._remove_dump_dir()

    def _grant_cloud(self, conn: PostgresConnection, target: DbEndpoint) -> None:
        app_user, app_pass = self._settings.require_app_user()
        database = target.require("name")
        conn.execute_script(
            "\n".join(
                [
                    sql.schema_owner(CLOUD_SCHEMA_OWNER),
                    sql.grant_public_schema(CLOUD_SCHEMA_OWNER),
                    sql.ensure_login_role(app_user, app_pass),
                    sql.grant_database(database, app_user),
                    sql.grant_public_schema(app_user),
                ]
            ),
            database=database,
        )

    def _grant_local(self, conn: PostgresConnection, target: DbEndpoint) -> None:
        user = target.require("user")
        conn.execute_script(
            "\n".join([sql.schema_owner(user), sql.grant_public_schema(user)]),
            database=target.require("name"),
        )

    def _remove_dump_dir(self) -> None:
        if self.dump_dir.exists():
            logger.debug(f"Removing dump directory {self.dump_dir}")
            shutil.rmtree(self.dump_dir, ignore_errors=True)
