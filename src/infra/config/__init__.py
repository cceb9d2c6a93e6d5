"""JSON registries for database pairs and project environments."""

from .db_registry import (
    current_database_name,
    default_registry,
    load_db_registry,
    merge_registry,
    render_db_env,
)
from .env_registry import current_project, load_env_registry, write_env
from .models import (
    DBConfig,
    DBPair,
    DbRegistryFile,
    DbToolSettings,
    EnvRegistryFile,
    ProjectEnvConfig,
)

__all__ = [
    "DBConfig",
    "DBPair",
    "DbRegistryFile",
    "DbToolSettings",
    "EnvRegistryFile",
    "ProjectEnvConfig",
    "default_registry",
    "load_db_registry",
    "merge_registry",
    "render_db_env",
    "current_database_name",
    "load_env_registry",
    "current_project",
    "write_env",
]
