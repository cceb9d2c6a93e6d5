"""npm command abstractions."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from .types import CommandResult

if TYPE_CHECKING:
    from .runner import CommandRunner


class NpmCommands:
    """npm registry commands used by the package publisher."""

    def __init__(self, runner: CommandRunner) -> None:
        self._runner = runner

    def whoami(self) -> str | None:
        """Return the logged-in npm user, or None when not authenticated."""
        result = self._runner.run(["npm", "whoami"])
        if not result.success:
            return None
        return result.stdout.strip() or None

    def publish(
        self,
        *,
        access: str = "public",
        dry_run: bool = False,
        on_output: Callable[[str], None] | None = None,
    ) -> CommandResult:
        """Run ``npm publish`` from the project root, streaming its output."""
        cmd = ["npm", "publish", "--access", access]
        if dry_run:
            cmd.append("--dry-run")
        return self._runner.run_streaming(cmd, on_output=on_output)
