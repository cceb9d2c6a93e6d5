"""Shell command abstractions for the toolchain.

This package provides a typed interface for the external tools the
toolchain drives. It is organized into specialized modules for each tool:

- npm: npm registry operations
- postgres: pg_dump / pg_restore

Usage:
    from src.cli.shell_commands import ShellCommands

    commands = ShellCommands(project_root=Path("."))
    if commands.npm.whoami() is None:
        print("Run 'npm login' first")
"""

from pathlib import Path

from .npm import NpmCommands
from .postgres import PostgresCommands
from .runner import CommandRunner
from .types import CommandResult


class ShellCommands:
    """Unified interface for all shell command operations.

    Attributes:
        npm: npm registry commands
        postgres: Postgres client tool commands
    """

    def __init__(self, project_root: Path) -> None:
        """Initialize the shell commands executor.

        Args:
            project_root: Path to the project root directory.
                         Commands will be executed from this directory by default.
        """
        self._project_root = Path(project_root)
        self._runner = CommandRunner(self._project_root)

        self.npm = NpmCommands(self._runner)
        self.postgres = PostgresCommands(self._runner)

    @property
    def project_root(self) -> Path:
        """Get the project root path."""
        return self._project_root

    @property
    def runner(self) -> CommandRunner:
        """Get the underlying command runner."""
        return self._runner


__all__ = [
    "ShellCommands",
    "CommandRunner",
    "CommandResult",
    "NpmCommands",
    "PostgresCommands",
]
