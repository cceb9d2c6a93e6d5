"""PostgreSQL database management infrastructure.

This module provides the operations behind the CLI `db` commands: connection
management, cloning between the local and cloud servers, fresh setup,
timeout configuration and closing client connections.
"""

from .clone import PostgresCloner
from .connection import DbEndpoint, DbSettings, PostgresConnection, load_db_settings
from .connections import PostgresConnectionCloser
from .setup import PostgresFreshSetup
from .timeouts import PostgresTimeouts

__all__ = [
    "DbEndpoint",
    "DbSettings",
    "PostgresConnection",
    "load_db_settings",
    "PostgresCloner",
    "PostgresFreshSetup",
    "PostgresTimeouts",
    "PostgresConnectionCloser",
]
