"""Barrel index generation command."""

from pathlib import Path
from typing import Annotated

import typer

from src.cli.shared.console import console, with_error_handling
from src.infra.index_files import build_index_file


@with_error_handling
def index_files(
    directories: Annotated[
        list[Path] | None,
        typer.Argument(help="Directories to generate index.ts for"),
    ] = None,
) -> None:
    """📑 Generate index.ts files re-exporting each directory's modules.

    Examples:
        next-toolchain index-files src/components src/lib
    """
    if not directories:
        console.error("Please specify at least one directory")
        raise typer.Exit(1)

    for directory in directories:
        if not directory.exists():
            console.error(f"Path {directory} does not exist")
            continue
        if not directory.is_dir():
            console.error(f"Path {directory} is not a directory")
            continue
        if not any(directory.iterdir()):
            console.warn(f"Directory {directory} is empty")
            continue

        console.info(f"Building index file for {directory}...")
        try:
            build_index_file(directory)
        except OSError as e:
            console.error(f"Failed to build index file for {directory}: {e}")
