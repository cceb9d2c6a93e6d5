"""Main CLI application module.

This module provides the main entry point for the next-toolchain CLI.

Command Groups:
- db: PostgreSQL management (interactive menu when run bare)
- env: Project .env switching
- package: npm versioning and publishing

Single Commands:
- screenshot: Website screenshots
- index-files: Barrel index generation
"""

import os
import sys
from typing import Annotated

import typer
from loguru import logger

from src.cli.context import build_cli_context

from .commands import db_app, env_app, index_files, package_app, screenshot

LOG_LEVEL_ENV = "NEXT_TOOLCHAIN_LOG_LEVEL"

# Create the main CLI application
app = typer.Typer(
    help="🛠️  Next Toolchain CLI - database, environment and publishing tools",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def configure_logging(verbose: bool = False) -> None:
    """Route loguru output to stderr at the requested level."""
    level = "DEBUG" if verbose else os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    logger.remove()
    logger.add(sys.stderr, level=level)


@app.callback()
def root(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logs"),
    ] = False,
) -> None:
    configure_logging(verbose)
    ctx.obj = build_cli_context()


# Register command groups
app.add_typer(db_app, name="db")
app.add_typer(env_app, name="env")
app.add_typer(package_app, name="package")

# Register single commands
app.command(name="screenshot")(screenshot)
app.command(name="index-files")(index_files)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
