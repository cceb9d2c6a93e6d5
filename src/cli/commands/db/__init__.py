"""Database CLI workflow helpers."""

from .runtime import DbRuntime, get_db_runtime
from .workflows import (
    current_database,
    run_clone,
    run_close_connections,
    run_create,
    run_list,
    run_migrate,
    run_migrate_reverse,
    run_register,
    run_reset,
    run_set_timeouts,
    run_setup_fresh,
    run_test_connection,
    run_update_config,
)

__all__ = [
    "DbRuntime",
    "get_db_runtime",
    "current_database",
    "run_clone",
    "run_close_connections",
    "run_create",
    "run_list",
    "run_migrate",
    "run_migrate_reverse",
    "run_register",
    "run_reset",
    "run_set_timeouts",
    "run_setup_fresh",
    "run_test_connection",
    "run_update_config",
]
