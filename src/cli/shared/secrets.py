"""Password lookup for database credentials."""

import getpass
import os

import typer

from src.cli.shared.console import console


def get_password(prompt: str, env_var: str | None = None) -> str:
    """Get a password from the environment, prompting when it is not set.

    Args:
        prompt: Prompt shown when falling back to interactive input
        env_var: Environment variable checked first (e.g. CLOUD_DB_PASS)

    Raises:
        typer.Exit: If nothing is entered or input is cancelled
    """
    if env_var:
        password = os.environ.get(env_var)
        if password:
            console.print(f"[dim]Using password from {env_var}[/dim]")
            return password
        console.print(f"[dim]{env_var} not set in environment or db.conf[/dim]")

    try:
        password = getpass.getpass(prompt)
    except (EOFError, KeyboardInterrupt):
        console.print("\n[dim]Password input cancelled[/dim]")
        raise typer.Exit(1) from None

    if not password:
        console.error("No password entered")
        raise typer.Exit(1)
    return password
