"""npm package versioning and publishing commands."""

from typing import Annotated

import typer

from src.cli.context import get_cli_context
from src.cli.shared.console import console, with_error_handling
from src.infra.package import BumpType, NpmPublisher, update_package_version

package_app = typer.Typer(
    help="📦 Version and publish the npm package",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@package_app.command()
@with_error_handling
def version(
    ctx: typer.Context,
    bump: Annotated[
        BumpType | None,
        typer.Argument(metavar="TYPE", help="Version part to bump: patch, minor or major"),
    ] = None,
) -> None:
    """Bump the version in package.json.

    Examples:
        next-toolchain package version patch
        next-toolchain package version minor
    """
    if bump is None:
        console.error("Please specify version type: patch, minor, or major")
        raise typer.Exit(1)

    paths = get_cli_context(ctx).paths
    new_version = update_package_version(paths.package_json, bump)
    console.ok(f"Updated version to {new_version}")


@package_app.command()
@with_error_handling
def publish(
    ctx: typer.Context,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Run npm publish --dry-run"),
    ] = False,
) -> None:
    """Publish the package to npm with public access.

    Requires an authenticated npm session ('npm login').
    """
    console.print_header("Publishing to npm")
    NpmPublisher(get_cli_context(ctx).commands).publish(dry_run=dry_run)
