"""Data types for shell command results."""

from __future__ import annotations

from dataclasses import dataclass

from src.infra.errors import CommandError

__all__ = [
    "CommandResult",
]


@dataclass
class CommandResult:
    """Result of a command execution.

    Attributes:
        command: The executed command and its arguments
        success: Whether the command exited with status 0
        stdout: Captured standard output
        stderr: Captured standard error
        returncode: Process exit status
    """

    command: list[str]
    success: bool
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0

    def raise_for_status(self) -> CommandResult:
        """Raise CommandError if the command failed, else return self."""
        if not self.success:
            raise CommandError(self.command, self.returncode, self.stderr)
        return self
