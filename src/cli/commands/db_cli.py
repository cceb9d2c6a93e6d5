"""PostgreSQL database management commands.

This module provides the `db` command group: an interactive menu when run
without a sub-command, plus one command per database workflow.
"""

from collections.abc import Callable
from typing import Annotated

import typer

from src.cli.commands.db import (
    DbRuntime,
    current_database,
    get_db_runtime,
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
from src.cli.context import get_cli_context
from src.cli.shared.console import console, with_error_handling


def _get_runtime(ctx: typer.Context | None = None) -> DbRuntime:
    """Return the DB runtime for the current project."""
    return get_db_runtime(get_cli_context(ctx).paths)


# Menu entries: (key, label, description)
MENU_ACTIONS: list[tuple[str, str, str]] = [
    ("config", "Update configuration", "Update db.conf with new database configuration"),
    ("migrate", "Migrate (local -> production)", "Migrate local database to production"),
    ("migrate-reverse", "Migrate reverse (production -> local)", "Migrate production database to local"),
    ("setup-fresh", "Setup fresh database", "Setup a fresh database with proper configuration"),
    ("set-timeouts", "Set timeouts", "Configure database timeout settings"),
    ("close-connections", "Close connections", "View and close active database connections"),
    ("clone", "Clone database", "Clone local database to production"),
]

MENU_HANDLERS: dict[str, Callable[[DbRuntime], object]] = {
    "config": run_update_config,
    "migrate": run_migrate,
    "migrate-reverse": run_migrate_reverse,
    "setup-fresh": run_setup_fresh,
    "set-timeouts": run_set_timeouts,
    "close-connections": run_close_connections,
    "clone": run_clone,
}


# ---------------------------------------------------------------------------
# Typer App
# ---------------------------------------------------------------------------

db_app = typer.Typer(
    name="db",
    help="🗄️  PostgreSQL database management (local <-> cloud).",
    invoke_without_command=True,
    rich_markup_mode="rich",
)


@db_app.callback()
@with_error_handling
def menu(ctx: typer.Context) -> None:
    """Open the interactive database menu when no command is given."""
    if ctx.invoked_subcommand is not None:
        return

    console.print_header("Database Configuration Manager")
    runtime = _get_runtime(ctx)

    name = current_database(runtime)
    if name:
        console.info(f"Current database: {name}")
        console.rule()

    action = console.select("Select action:", MENU_ACTIONS)
    if action is None:
        raise typer.Exit(0)

    result = MENU_HANDLERS[action](runtime)
    if action == "close-connections" and result:
        raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@db_app.command()
@with_error_handling
def config(
    ctx: typer.Context,
    key: Annotated[
        str | None,
        typer.Argument(help="Database pair key from db.config.json (prompted when omitted)"),
    ] = None,
) -> None:
    """Select a database pair and write db.config.json and db.conf.

    Examples:
        next-toolchain db config
        next-toolchain db config portfolio
    """
    console.print_header("Database Configuration Manager")
    if run_update_config(_get_runtime(ctx), key) is None:
        console.print("[dim]Operation cancelled[/dim]")


@db_app.command()
@with_error_handling
def clone(ctx: typer.Context) -> None:
    """Clone the local database to the cloud (DESTRUCTIVE for the cloud copy).

    Dumps the local database, drops and recreates the cloud database,
    restores the dump and grants privileges to the application user.
    """
    console.print_header("Cloning Database (local -> cloud)")
    run_clone(_get_runtime(ctx))


@db_app.command()
@with_error_handling
def migrate(ctx: typer.Context) -> None:
    """Set up a fresh cloud database and clone the local data into it."""
    console.print_header("Migrating Database (local -> cloud)")
    run_migrate(_get_runtime(ctx))
    console.print("\n[bold green]🎉 Migration completed successfully![/bold green]")


@db_app.command(name="migrate-reverse")
@with_error_handling
def migrate_reverse(ctx: typer.Context) -> None:
    """Copy the cloud database over the local database."""
    console.print_header("Migrating Database (cloud -> local)")
    run_migrate_reverse(_get_runtime(ctx))


@db_app.command(name="setup-fresh")
@with_error_handling
def setup_fresh(ctx: typer.Context) -> None:
    """Drop and recreate the cloud database with extensions, user and timeouts.

    WARNING: This permanently deletes all data in the cloud database!
    """
    console.print_header("Setting Up Fresh Database")
    run_setup_fresh(_get_runtime(ctx))


@db_app.command(name="set-timeouts")
@with_error_handling
def set_timeouts(ctx: typer.Context) -> None:
    """Apply statement, idle-session and TCP keepalive settings."""
    console.print_header("Setting Database Timeouts")
    run_set_timeouts(_get_runtime(ctx))


@db_app.command(name="close-connections")
@with_error_handling
def close_connections(ctx: typer.Context) -> None:
    """Terminate every client session on the cloud database.

    Exits with status 1 when some sessions could not be closed.
    """
    console.print_header("Closing Database Connections")
    remaining = run_close_connections(_get_runtime(ctx))
    if remaining:
        raise typer.Exit(1)


@db_app.command(name="test-connection")
@with_error_handling
def test_connection(ctx: typer.Context) -> None:
    """Check that the cloud database accepts connections."""
    if not run_test_connection(_get_runtime(ctx)):
        raise typer.Exit(1)


@db_app.command(name="list")
@with_error_handling
def list_dbs(ctx: typer.Context) -> None:
    """List databases on the cloud server with their sizes."""
    run_list(_get_runtime(ctx))


@db_app.command()
@with_error_handling
def create(ctx: typer.Context) -> None:
    """Create the cloud database if it does not exist."""
    run_create(_get_runtime(ctx))


@db_app.command()
@with_error_handling
def reset(
    ctx: typer.Context,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt"),
    ] = False,
) -> None:
    """Drop and recreate the cloud database (DESTRUCTIVE).

    Examples:
        next-toolchain db reset
        next-toolchain db reset -y
    """
    if not console.confirm_action(
        "Reset the cloud database",
        "This will permanently delete all tables and data in the cloud database.",
        force=yes,
    ):
        console.print("[dim]Operation cancelled[/dim]")
        raise typer.Exit(0)
    run_reset(_get_runtime(ctx))


@db_app.command()
@with_error_handling
def register(ctx: typer.Context) -> None:
    """Make the application user the owner of the cloud database."""
    run_register(_get_runtime(ctx))
