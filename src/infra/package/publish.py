"""Publishing the project to the npm registry."""

from src.cli.shared.console import CLIConsole, console
from src.cli.shell_commands import ShellCommands
from src.infra.errors import ToolchainError


class NpmPublisher:
    """Publishes the package in the project root with ``npm publish``."""

    def __init__(self, commands: ShellCommands, output: CLIConsole = console) -> None:
        self._commands = commands
        self._console = output

    def check_auth(self) -> str:
        """Return the logged-in npm user.

        Raises:
            ToolchainError: If npm has no authenticated user
        """
        user = self._commands.npm.whoami()
        if user is None:
            raise ToolchainError(
                "Failed to check npm authentication",
                details="Please login to npm first using 'npm login'",
            )
        return user

    def publish(self, *, dry_run: bool = False) -> None:
        """Publish with public access, streaming npm's output.

        Raises:
            ToolchainError: If not logged in or npm publish fails
        """
        user = self.check_auth()
        self._console.info(f"Logged in to npm as {user}")

        result = self._commands.npm.publish(
            dry_run=dry_run,
            on_output=lambda line: self._console.print(f"[dim]{line}[/dim]"),
        )
        if not result.success:
            raise ToolchainError("Failed to publish to npm", details=result.stderr or result.stdout or None)

        if dry_run:
            self._console.ok("Dry run completed, nothing was published")
        else:
            self._console.ok("Successfully published to npm!")
