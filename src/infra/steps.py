"""Sequential step execution with console reporting."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

from loguru import logger

from src.infra.errors import ToolchainError

if TYPE_CHECKING:
    from src.cli.shared.console import CLIConsole

T = TypeVar("T")


def run_step(console: CLIConsole, description: str, fn: Callable[[], T]) -> T:
    """Run one step of a sequence, reporting its outcome.

    Args:
        console: Console used for progress output
        description: Human readable step description (e.g. "Dropping database")
        fn: Zero-argument callable doing the work

    Returns:
        Whatever ``fn`` returns

    Raises:
        ToolchainError: If ``fn`` raises; the sequence must stop here
    """
    console.info(description)
    logger.debug(f"Running step: {description}")
    try:
        result = fn()
    except ToolchainError as e:
        console.error(f"Failed to {description.lower()}: {e.message}")
        raise
    except Exception as e:
        console.error(f"Failed to {description.lower()}: {e}")
        raise ToolchainError(f"Step failed: {description}", details=str(e)) from e
    console.ok(description)
    return result
