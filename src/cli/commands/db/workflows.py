"""Shared database workflows for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table

from src.cli.commands.db.runtime import DbRuntime
from src.infra.errors import ToolchainError

if TYPE_CHECKING:
    from src.infra.postgres.connection import DbSettings


def _cloud_settings(runtime: DbRuntime) -> DbSettings:
    settings = runtime.get_settings()
    settings.cloud.validate_required()
    return settings.ensure_cloud_password()


def _print_connection_string(runtime: DbRuntime, title: str, value: str) -> None:
    runtime.console.print(Panel(value, title=title, border_style="green"))


def run_update_config(runtime: DbRuntime, key: str | None = None) -> str | None:
    """Select a database pair and write db.config.json and db.conf.

    Returns:
        The selected pair key, or None if the selection was cancelled
    """
    from src.infra.config.db_registry import (
        available_pairs,
        load_db_registry,
        merge_registry,
        render_db_env,
        save_db_registry,
    )

    out = runtime.console
    paths = runtime.paths
    paths.ensure_temp_dir()

    existing = load_db_registry(paths.db_config_json, out)
    pairs = available_pairs(existing)

    if key is None:
        key = out.select(
            "Select database:",
            [
                (k, pair.name, f"{pair.local.host} -> {pair.production.host}")
                for k, pair in pairs.items()
            ],
        )
        if key is None:
            return None

    if key not in pairs:
        raise ToolchainError(
            f"Invalid database pair selected: {key}",
            details=f"Available pairs: {', '.join(pairs) or 'none'}",
        )

    pair = pairs[key]
    registry = merge_registry(existing, key, pair)
    save_db_registry(paths.db_config_json, registry)
    paths.db_env_file.write_text(render_db_env(pair, registry.settings), encoding="utf-8")

    out.ok("Database configuration updated successfully!")
    out.info(f"Configuration file: {paths.db_config_json}")
    out.info(f"Environment file: {paths.db_env_file}")
    out.info(f"Connected to: {pair.name}")
    out.info(f"Local: {pair.local.db_name} on {pair.local.host}")
    out.info(f"Production: {pair.production.db_name} on {pair.production.host}")
    return key


def run_clone(runtime: DbRuntime, settings: DbSettings | None = None) -> str:
    """Copy the local database over the cloud database."""
    from src.infra.postgres.clone import PostgresCloner

    settings = settings or _cloud_settings(runtime)
    cloner = PostgresCloner(
        settings,
        runtime.commands,
        runtime.connect,
        runtime.paths.dump_dir,
        runtime.console,
    )
    connection_string = cloner.clone_to_cloud()
    _print_connection_string(runtime, "Application connection string", connection_string)
    return connection_string


def run_migrate_reverse(runtime: DbRuntime) -> str:
    """Copy the cloud database over the local database."""
    from src.infra.postgres.clone import PostgresCloner

    settings = _cloud_settings(runtime)
    cloner = PostgresCloner(
        settings,
        runtime.commands,
        runtime.connect,
        runtime.paths.dump_dir,
        runtime.console,
    )
    connection_string = cloner.clone_to_local()
    _print_connection_string(runtime, "Local connection string", connection_string)
    return connection_string


def run_set_timeouts(runtime: DbRuntime) -> dict[str, str]:
    from src.infra.postgres.timeouts import PostgresTimeouts

    settings = _cloud_settings(runtime)
    with runtime.connect(settings.cloud) as conn:
        return PostgresTimeouts(conn, settings, runtime.console).apply()


def run_setup_fresh(runtime: DbRuntime, settings: DbSettings | None = None) -> str:
    """Recreate the cloud database, then apply timeouts."""
    from src.infra.postgres.setup import PostgresFreshSetup
    from src.infra.postgres.timeouts import PostgresTimeouts

    settings = settings or _cloud_settings(runtime)
    with runtime.connect(settings.cloud) as conn:
        PostgresFreshSetup(conn, settings, runtime.console).run()
        PostgresTimeouts(conn, settings, runtime.console).apply()

    connection_string = settings.app_connection_string()
    _print_connection_string(runtime, "Application connection string", connection_string)
    return connection_string


def run_migrate(runtime: DbRuntime) -> str:
    """Fresh setup of the cloud database followed by a clone into it."""
    settings = _cloud_settings(runtime)
    runtime.console.print_subheader("Step 1: setting up fresh database")
    run_setup_fresh(runtime, settings)
    runtime.console.print_subheader("Step 2: cloning local data")
    return run_clone(runtime, settings)


def run_close_connections(runtime: DbRuntime) -> int:
    """Terminate sessions on the cloud database.

    Returns:
        Number of sessions still connected afterwards
    """
    from src.infra.postgres.connections import PostgresConnectionCloser

    settings = _cloud_settings(runtime)
    with runtime.connect(settings.cloud) as conn:
        closer = PostgresConnectionCloser(
            conn, settings, runtime.console, sleep=runtime.sleep
        )
        return closer.close_all()


def run_test_connection(runtime: DbRuntime) -> bool:
    settings = _cloud_settings(runtime)
    runtime.console.info(f"Testing connection to {settings.cloud.label}...")
    with runtime.connect(settings.cloud) as conn:
        success, message = conn.test_connection(settings.cloud.name)

    if success:
        runtime.console.print(f"[dim]{message}[/dim]")
        runtime.console.ok("Database connection successful")
    else:
        runtime.console.error(f"Database connection failed: {message}")
    return success


def run_list(runtime: DbRuntime) -> list[dict[str, Any]]:
    from src.infra.postgres.admin import list_databases

    settings = _cloud_settings(runtime)
    with runtime.connect(settings.cloud) as conn:
        rows = list_databases(conn)

    table = Table(title=f"Databases on {settings.cloud.host}")
    table.add_column("Database", style="cyan")
    table.add_column("Size", style="green")
    for row in rows:
        table.add_row(str(row["datname"]), str(row["size"]))
    runtime.console.print(table)
    runtime.console.ok("Database listing completed")
    return rows


def run_create(runtime: DbRuntime) -> bool:
    from src.infra.postgres.admin import create_database

    settings = _cloud_settings(runtime)
    database = settings.cloud.name
    with runtime.connect(settings.cloud) as conn:
        created = create_database(conn, settings)

    if created:
        runtime.console.ok(f"Database {database} created successfully")
    else:
        runtime.console.warn(f"Database {database} already exists")
    return created


def run_reset(runtime: DbRuntime) -> bool:
    from src.infra.postgres.admin import reset_database

    settings = _cloud_settings(runtime)
    database = settings.cloud.name
    with runtime.connect(settings.cloud) as conn:
        reset = reset_database(conn, settings)

    if reset:
        runtime.console.ok(f"Database {database} reset successfully")
    else:
        runtime.console.warn(f"Database {database} does not exist")
    return reset


def run_register(runtime: DbRuntime) -> bool:
    from src.infra.postgres.admin import register_database

    settings = _cloud_settings(runtime)
    database = settings.cloud.name
    with runtime.connect(settings.cloud) as conn:
        registered = register_database(conn, settings)

    if registered:
        runtime.console.ok(f"Database {database} registered successfully")
    else:
        runtime.console.warn(f"Database {database} does not exist")
    return registered


def current_database(runtime: DbRuntime) -> str | None:
    """Name of the configured database pair shown in the menu header."""
    from src.infra.config.db_registry import current_database_name, load_db_registry

    path = runtime.paths.db_config_json
    if not path.exists():
        runtime.console.warn("No database configuration file found")
        runtime.console.hint("Select 'Update configuration' to set up your database")
        return None
    return current_database_name(load_db_registry(path, runtime.console))
