"""Shared utilities for CLI commands.

This module provides common utilities used across all command modules,
including console output, confirmation dialogs and numbered menus.
"""

from collections.abc import Callable, Sequence

import typer
from rich.console import Console, ConsoleRenderable
from rich.panel import Panel
from rich.rule import Rule
from rich.status import Status
from rich.table import Table


class CLIConsole:
    """Rich console wrapper for consistent CLI output."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize the CLI console."""
        self.console = console or Console()

    def print(self, msg: ConsoleRenderable | str | None = None) -> None:
        self.console.print(msg)

    def status(self, status: str) -> Status:
        return self.console.status(status)

    def rule(self) -> None:
        self.console.print(Rule(style="dim"))

    def info(self, msg: str) -> None:
        self.console.print(f"[cyan]ℹ[/cyan]  {msg}")

    def ok(self, msg: str) -> None:
        self.console.print(f"[green]✅[/green] {msg}")

    def error(self, msg: str) -> None:
        self.console.print(f"[red]❌[/red] {msg}")

    def warn(self, msg: str) -> None:
        self.console.print(f"[yellow]⚠️[/yellow]  {msg}")

    def hint(self, msg: str) -> None:
        self.console.print(f"[cyan]💡[/cyan] [dim]{msg}[/dim]")

    def confirm_action(
        self,
        action: str,
        details: str | None = None,
        extra_warning: str | None = None,
        force: bool = False,
    ) -> bool:
        """Prompt user to confirm a potentially destructive action.

        Args:
            action: Description of the action (e.g., "Drop the cloud database")
            details: Additional details about what will be affected
            extra_warning: Extra warning message (e.g., for data loss)
            force: If True, skip the confirmation prompt

        Returns:
            True if the user confirmed, False otherwise
        """
        if force:
            return True

        warning_lines = [f"[bold red]⚠️  {action}[/bold red]"]

        if details:
            warning_lines.append(f"\n{details}")

        if extra_warning:
            warning_lines.append(f"\n[yellow]{extra_warning}[/yellow]")

        self.console.print(
            Panel(
                "\n".join(warning_lines),
                title="Confirmation Required",
                border_style="red",
            )
        )

        try:
            response = self.console.input(
                "\n[bold]Are you sure you want to proceed?[/bold] \\[y/N]: "
            )
            return response.strip().lower() in ("y", "yes")
        except (KeyboardInterrupt, EOFError):
            self.console.print("\n[dim]Cancelled.[/dim]")
            return False

    def handle_error(
        self, message: str, details: str | None = None, exit_code: int = 1
    ) -> None:
        """Handle an error by printing a message and exiting.

        Args:
            message: Error message to display
            details: Optional additional details
            exit_code: Exit code to use
        """
        self.error(f"[bold red]{message}[/bold red]")
        if details:
            self.console.print(Panel(details, title="Details", border_style="red"))
        raise typer.Exit(exit_code)

    def select(
        self,
        title: str,
        options: Sequence[tuple[str, str, str]],
    ) -> str | None:
        """Show a numbered menu and return the key of the chosen option.

        Args:
            title: Question to display
            options: List of (key, name, description) tuples

        Returns:
            The selected key, or None if cancelled (0, Ctrl-C or EOF)
        """
        if not options:
            return None

        menu = Table.grid(padding=(0, 2))
        menu.add_column(justify="right", style="bold cyan")
        menu.add_column(style="bold")
        menu.add_column(style="dim")
        for number, (_, name, description) in enumerate(options, 1):
            menu.add_row(f"{number}.", name, description)
        menu.add_row("0.", "Cancel", "")

        self.console.print(f"\n[yellow]{title}[/yellow]\n")
        self.console.print(menu)

        while True:
            try:
                response = self.console.input("\nEnter choice [1]: ").strip() or "1"
            except (KeyboardInterrupt, EOFError):
                response = "0"

            if response == "0":
                self.console.print("[dim]Cancelled.[/dim]")
                return None
            if response.isdigit() and 1 <= int(response) <= len(options):
                return options[int(response) - 1][0]
            self.console.print(
                f"[red]Please enter a number between 0 and {len(options)}[/red]"
            )

    def print_header(self, title: str, style: str = "blue") -> None:
        """Print a styled header panel.

        Args:
            title: Header title text
            style: Border style color
        """
        self.console.print(
            Panel.fit(
                f"[bold {style}]{title}[/bold {style}]",
                border_style=style,
            )
        )

    def print_subheader(self, title: str) -> None:
        """Print a subheader.

        Args:
            title: Subheader title text
        """
        self.console.print(f"\n[bold underline]{title}[/bold underline]\n")


def with_error_handling(func: Callable[..., None]) -> Callable[..., None]:
    """Decorator to wrap command functions with standard error handling.

    Catches toolchain failures and formats them consistently.

    Args:
        func: The command function to wrap

    Returns:
        Wrapped function with error handling
    """
    from functools import wraps

    from src.infra.errors import ToolchainError

    @wraps(func)
    def wrapper(*args: object, **kwargs: object) -> None:
        try:
            func(*args, **kwargs)
        except ToolchainError as e:
            console.handle_error(e.message, e.details)
        except KeyboardInterrupt:
            console.print("\n[dim]Operation cancelled by user.[/dim]")
            raise typer.Exit(130) from None

    return wrapper


# Shared console instance for consistent output
console = CLIConsole()
