"""Toolchain constants and path resolution.

This module centralizes the file names, directories and default values
shared by the toolchain commands.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from src.utils.paths import get_project_root


@dataclass(frozen=True)
class ToolchainConstants:
    """Constants for the toolchain commands.

    All attributes are class-level and immutable.
    """

    # Unified working folder, created under the project root
    TEMP_DIR: str = ".next-toolchain-temp"

    # Registry and settings files inside TEMP_DIR
    DB_CONFIG_FILE: str = "db.config.json"
    ENV_CONFIG_FILE: str = "env.config.json"
    SCREENSHOT_CONFIG_FILE: str = "screenshot.config.conf"
    DB_ENV_FILE: str = "db.conf"

    DUMP_DIR_NAME: str = "temp_dump"
    SCREENSHOTS_DIR_NAME: str = "screenshots"

    # pg_dump / pg_restore
    DUMP_JOBS: int = 4
    DUMP_EXCLUDE_TABLE_DATA: str = "*_migrations"

    # Postgres
    MAINTENANCE_DB: str = "postgres"
    DEFAULT_PORT: int = 5432
    CONNECT_TIMEOUT: int = 5
    EXTENSIONS: tuple[str, ...] = ("uuid-ossp", "hstore")

    # Seconds to wait before re-counting connections after termination
    CONNECTION_CLOSE_GRACE: float = 2.0


class ToolchainPaths:
    """Path resolver for the files the toolchain reads and writes.

    All paths are derived from the project root.
    """

    def __init__(self, project_root: Path) -> None:
        """Initialize toolchain paths.

        Args:
            project_root: Path to the project root directory
        """
        self._project_root = project_root
        self._constants = DEFAULT_CONSTANTS

        self.temp_dir = project_root / self._constants.TEMP_DIR
        self.db_config_json = self.temp_dir / self._constants.DB_CONFIG_FILE
        self.env_config_json = self.temp_dir / self._constants.ENV_CONFIG_FILE
        self.screenshot_config = self.temp_dir / self._constants.SCREENSHOT_CONFIG_FILE
        self.db_env_file = self.temp_dir / self._constants.DB_ENV_FILE
        self.dump_dir = self.temp_dir / self._constants.DUMP_DIR_NAME
        self.screenshots_dir = self.temp_dir / self._constants.SCREENSHOTS_DIR_NAME

    @property
    def project_root(self) -> Path:
        """Get path to project root."""
        return self._project_root

    @property
    def env_file(self) -> Path:
        """Get path to the project's .env file."""
        return self.project_root / ".env"

    @property
    def package_json(self) -> Path:
        """Get path to package.json."""
        return self.project_root / "package.json"

    def ensure_temp_dir(self) -> Path:
        """Create the unified temp folder if needed and return it."""
        self.temp_dir.mkdir(parents=True, exist_ok=True)
        return self.temp_dir


DEFAULT_CONSTANTS = ToolchainConstants()


def get_paths() -> ToolchainPaths:
    """Build paths for the project the CLI is run from."""
    return ToolchainPaths(get_project_root())
