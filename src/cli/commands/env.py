"""Project .env management commands."""

from typing import Annotated

import typer
from rich.table import Table

from src.cli.context import get_cli_context
from src.cli.shared.console import console, with_error_handling
from src.infra.config.env_registry import (
    current_project,
    load_env_registry,
    save_env_registry,
    write_env,
)
from src.infra.errors import ToolchainError

env_app = typer.Typer(
    help="🌍 Switch the project .env between registered configurations",
    invoke_without_command=True,
    rich_markup_mode="rich",
)


def _use(ctx: typer.Context, key: str | None) -> None:
    paths = get_cli_context(ctx).paths
    paths.ensure_temp_dir()

    console.print_header("Next Toolchain Environment Configuration")
    registry = load_env_registry(paths.env_config_json)

    name = current_project(paths.env_file, registry)
    if name:
        console.info(f"Current project: {name}")
        console.rule()

    if key is None:
        key = console.select(
            "Select project:",
            [(k, p.name, p.description) for k, p in registry.projects.items()],
        )
        if key is None:
            console.print("[dim]Operation cancelled[/dim]")
            raise typer.Exit(0)

    project = registry.projects.get(key)
    if project is None:
        raise ToolchainError(
            f"Invalid project selected: {key}",
            details=f"Registered projects: {', '.join(registry.projects) or 'none'}",
        )

    write_env(paths.env_file, project)
    save_env_registry(paths.env_config_json, registry)

    console.ok("Project configuration updated successfully!")
    console.info(f"Configuration file: {paths.env_file}")
    console.info(f"Project: {project.name}")
    console.info(f"Registry stored in: {paths.env_config_json}")
    console.warn(
        "Remember to keep your .env file secure and never commit it to version control"
    )


@env_app.callback()
@with_error_handling
def main(ctx: typer.Context) -> None:
    """Select a project and write its variables to .env."""
    if ctx.invoked_subcommand is None:
        _use(ctx, None)


@env_app.command()
@with_error_handling
def use(
    ctx: typer.Context,
    key: Annotated[
        str | None,
        typer.Argument(help="Project key from env.config.json (prompted when omitted)"),
    ] = None,
) -> None:
    """Write a registered project's variables to .env.

    Examples:
        next-toolchain env use
        next-toolchain env use example
    """
    _use(ctx, key)


@env_app.command(name="list")
@with_error_handling
def list_projects(ctx: typer.Context) -> None:
    """Show the projects registered in env.config.json."""
    paths = get_cli_context(ctx).paths
    paths.ensure_temp_dir()
    registry = load_env_registry(paths.env_config_json)
    active = current_project(paths.env_file, registry)

    table = Table(title="Registered projects")
    table.add_column("Key", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Description")
    table.add_column("Active", justify="center")
    for key, project in registry.projects.items():
        table.add_row(key, project.name, project.description, "✓" if project.name == active else "")
    console.print(table)
