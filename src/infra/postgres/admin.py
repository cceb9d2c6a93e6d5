"""Small administrative operations on the cloud database."""

from typing import Any

from loguru import logger

from . import sql
from .connection import DbSettings, PostgresConnection


def list_databases(connection: PostgresConnection) -> list[dict[str, Any]]:
    """Return every database on the server with its pretty-printed size."""
    return connection.execute(
        """
        SELECT datname, pg_size_pretty(pg_database_size(datname)) AS size
        FROM pg_database
        ORDER BY datname
        """
    )


def create_database(connection: PostgresConnection, settings: DbSettings) -> bool:
    """Create the cloud database unless it exists.

    Returns:
        False if the database was already there
    """
    database = settings.cloud.require("name")
    if connection.database_exists(database):
        return False
    logger.info(f"Creating database {database}")
    connection.execute_script(f"CREATE DATABASE {database};")
    connection.execute_script(sql.connection_limit(database, settings.max_connections))
    return True


def reset_database(connection: PostgresConnection, settings: DbSettings) -> bool:
    """Drop and recreate the cloud database if it exists.

    Returns:
        False if there was no database to reset
    """
    database = settings.cloud.require("name")
    if not connection.database_exists(database):
        return False
    logger.info(f"Resetting database {database}")
    connection.execute_script(f"DROP DATABASE {database};")
    connection.execute_script(f"CREATE DATABASE {database};")
    return True


def register_database(connection: PostgresConnection, settings: DbSettings) -> bool:
    """Hand ownership of the cloud database to the application user.

    Returns:
        False if the database does not exist
    """
    database = settings.cloud.require("name")
    app_user, _ = settings.require_app_user()
    if not connection.database_exists(database):
        return False
    connection.execute_script(f"ALTER DATABASE {database} OWNER TO {app_user};")
    return True
