"""Pydantic models for the JSON registries kept in the unified temp folder.

JSON keys are camelCase (``dbName``, ``maxConnections``) so files written by
earlier toolchain releases keep loading; Python code uses snake_case.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)


class DBConfig(CamelModel):
    """Connection parameters for one side of a database pair."""

    name: str
    db_name: str
    user: str
    host: str
    port: str | None = None
    password: str | None = None


class DBPair(CamelModel):
    """A named local/production pair of databases."""

    name: str
    local: DBConfig
    production: DBConfig


class DbToolSettings(CamelModel):
    """Settings written to db.conf alongside the selected pair."""

    max_connections: int = 10
    statement_timeout: str = "15s"
    idle_transaction_timeout: str = "2min"
    idle_session_timeout: str = "3min"
    master_idle_timeout: str = "5min"
    tcp_keepalives_idle: int = 60
    tcp_keepalives_interval: int = 30
    tcp_keepalives_count: int = 3
    app_user: str = "payload"
    app_pass: str = "payload"


class DbRegistryFile(CamelModel):
    """Contents of db.config.json."""

    databases: dict[str, DBPair] = Field(default_factory=dict)
    settings: DbToolSettings = Field(default_factory=DbToolSettings)
    # Key of the pair last written to db.conf
    current: str | None = None


class ProjectEnvConfig(CamelModel):
    """Environment variables for one project.

    ``variables`` is either the .env text or a list of ``KEY=VALUE`` lines.
    """

    name: str
    description: str = ""
    variables: str | list[str]

    def render(self) -> str:
        if isinstance(self.variables, list):
            return "\n".join(self.variables)
        return self.variables


class EnvRegistryFile(CamelModel):
    """Contents of env.config.json."""

    projects: dict[str, ProjectEnvConfig] = Field(default_factory=dict)
