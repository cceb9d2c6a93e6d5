"""Website screenshot command."""

from pathlib import Path
from typing import Annotated

import typer

from src.cli.context import get_cli_context
from src.cli.shared.console import console, with_error_handling


@with_error_handling
def screenshot(
    ctx: typer.Context,
    urls: Annotated[
        list[str] | None,
        typer.Option("--urls", "-u", help="URLs to capture (repeat or comma separate)"),
    ] = None,
    file: Annotated[
        Path | None,
        typer.Option("--file", "-f", help="Text file with URLs (one per line)"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output directory (defaults to .next-toolchain-temp/screenshots)"),
    ] = None,
    width: Annotated[int | None, typer.Option("--width", "-w", help="Viewport width")] = None,
    height: Annotated[int | None, typer.Option("--height", "-h", help="Viewport height")] = None,
    full_page: Annotated[
        bool | None,
        typer.Option("--full-page/--no-full-page", help="Capture the full page height"),
    ] = None,
    timeout: Annotated[
        int | None,
        typer.Option("--timeout", help="Navigation timeout in milliseconds"),
    ] = None,
) -> None:
    """📸 Take screenshots of websites, with cookie authentication support.

    Options left unset fall back to screenshot.config.conf, then defaults.

    Examples:
        next-toolchain screenshot -u https://example.com
        next-toolchain screenshot -f urls.txt --no-full-page
    """
    from src.infra.screenshot import collect_urls, load_screenshot_config, take_screenshots

    url_list = collect_urls(urls, file)
    if not url_list:
        console.error("No URLs provided. Use --urls or --file option.")
        raise typer.Exit(1)

    paths = get_cli_context(ctx).paths
    config = load_screenshot_config(paths.screenshot_config)

    overrides: dict[str, object] = {}
    if width is not None or height is not None:
        overrides["viewport"] = config.viewport.model_copy(
            update={
                k: v for k, v in (("width", width), ("height", height)) if v is not None
            }
        )
    if timeout is not None:
        overrides["timeout"] = timeout
    if full_page is not None:
        overrides["full_page"] = full_page
    config = config.model_copy(update=overrides)

    take_screenshots(url_list, output or paths.screenshots_dir, config)
