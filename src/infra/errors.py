"""Error types raised by toolchain infrastructure code.

Every failure is terminal for the invocation that hit it: the CLI layer
prints the message and exits with status 1.
"""

from __future__ import annotations


class ToolchainError(Exception):
    """Raised when a toolchain operation fails."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(message)


class CommandError(ToolchainError):
    """Raised when an external command exits with a non-zero status."""

    def __init__(self, command: list[str], returncode: int, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(
            f"Command failed ({returncode}): {command[0]}",
            details=stderr.strip() or None,
        )
