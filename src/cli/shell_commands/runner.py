"""Command runner for executing shell commands.

This module provides the base command execution functionality used by
all specialized command modules.
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path

from loguru import logger

from .types import CommandResult


class CommandRunner:
    """Low-level command executor with consistent result handling.

    All specialized command modules (npm, pg_dump/pg_restore) use
    this runner for actual command execution.
    """

    def __init__(self, project_root: Path) -> None:
        """Initialize the command runner.

        Args:
            project_root: Path to the project root directory.
                         Commands will be executed from this directory by default.
        """
        self.project_root = project_root

    @staticmethod
    def _build_env(env: Mapping[str, str | None] | None) -> dict[str, str] | None:
        """Overlay extra variables on the current environment, dropping None values."""
        if not env:
            return None
        return {k: v for k, v in {**os.environ, **env}.items() if v is not None}

    def run(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str | None] | None = None,
        capture_output: bool = True,
        check: bool = False,
    ) -> CommandResult:
        """Execute a shell command and return structured result.

        Args:
            cmd: Command and arguments as a sequence
            cwd: Working directory (defaults to project_root)
            env: Extra environment variables for the child process
            capture_output: Whether to capture stdout/stderr
            check: Whether to raise CommandError on non-zero exit code

        Returns:
            CommandResult with success status, output, and return code

        Raises:
            CommandError: If check=True and command fails
        """
        logger.debug(f"Running command: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                list(cmd),
                cwd=cwd or self.project_root,
                env=self._build_env(env),
                capture_output=capture_output,
                text=True,
            )
        except FileNotFoundError:
            # Executable not on PATH
            command_result = CommandResult(
                command=list(cmd),
                success=False,
                stderr=f"{cmd[0]}: command not found",
                returncode=127,
            )
        else:
            command_result = CommandResult(
                command=list(cmd),
                success=result.returncode == 0,
                stdout=result.stdout or "",
                stderr=result.stderr or "",
                returncode=result.returncode,
            )

        if not command_result.success:
            logger.debug(
                f"Command exited with {command_result.returncode}: {command_result.stderr.strip()}"
            )
        if check:
            command_result.raise_for_status()
        return command_result

    def run_streaming(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str | None] | None = None,
        on_output: Callable[[str], None] | None = None,
    ) -> CommandResult:
        """Execute a shell command with real-time output streaming.

        This method runs a command and calls the on_output callback for each
        line of output, allowing real-time progress display.

        Args:
            cmd: Command and arguments as a sequence
            cwd: Working directory (defaults to project_root)
            env: Extra environment variables for the child process
            on_output: Callback function called with each line of output.
                      If None, output is collected but not streamed.

        Returns:
            CommandResult with success status, collected output, and return code
        """
        logger.debug(f"Streaming command: {' '.join(cmd)}")
        try:
            process = subprocess.Popen(
                list(cmd),
                cwd=cwd or self.project_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,  # Merge stderr into stdout
                text=True,
                env=self._build_env(env),
            )
        except FileNotFoundError:
            return CommandResult(
                command=list(cmd),
                success=False,
                stderr=f"{cmd[0]}: command not found",
                returncode=127,
            )

        stdout_lines: list[str] = []

        if process.stdout:
            for line in iter(process.stdout.readline, ""):
                line = line.rstrip("\n")
                if line:
                    stdout_lines.append(line)
                    if on_output:
                        on_output(line)

        process.wait()

        return CommandResult(
            command=list(cmd),
            success=process.returncode == 0,
            stdout="\n".join(stdout_lines),
            stderr="",  # stderr is merged into stdout
            returncode=process.returncode or 0,
        )
