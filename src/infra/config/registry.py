"""Load/save helpers shared by the JSON registries."""

from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from loguru import logger
from pydantic import ValidationError

from src.cli.shared.console import CLIConsole, console

from .models import CamelModel

RegistryT = TypeVar("RegistryT", bound=CamelModel)


def save_registry(path: Path, registry: CamelModel) -> None:
    """Write a registry as 2-space indented JSON, creating parent folders."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(registry.to_json() + "\n", encoding="utf-8")
    logger.debug(f"Wrote {path}")


def load_registry(
    path: Path,
    model: type[RegistryT],
    default: Callable[[], RegistryT],
    output: CLIConsole = console,
) -> RegistryT:
    """Load a registry file, bootstrapping it from defaults when needed.

    - Missing file: written from ``default()``
    - Unreadable or invalid file: reported, then overwritten with ``default()``

    Returns:
        The registry on disk after bootstrapping
    """
    if not path.exists():
        registry = default()
        save_registry(path, registry)
        output.info(f"Created initial configuration file {path.name}")
        return registry

    try:
        return model.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, ValueError, ValidationError) as e:
        logger.warning(f"Could not read {path}: {e}")
        output.error(f"Error reading configuration file {path.name}")
        output.warn("The file might be corrupted or in an invalid format")
        output.info("Creating a new configuration file with default settings...")
        registry = default()
        save_registry(path, registry)
        output.ok("New configuration file created successfully!")
        return registry
