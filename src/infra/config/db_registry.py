"""Database pair registry (db.config.json) and db.conf rendering."""

from pathlib import Path

from src.cli.shared.console import CLIConsole, console

from .models import DBConfig, DBPair, DbRegistryFile, DbToolSettings
from .registry import load_registry, save_registry

BUILTIN_PAIRS: dict[str, DBPair] = {
    "portfolio": DBPair(
        name="Portfolio",
        local=DBConfig(
            name="Local Portfolio",
            db_name="user",
            user="user",
            host="localhost",
        ),
        production=DBConfig(
            name="Production Portfolio",
            db_name="user",
            user="user",
            host="shinkansen.proxy.rlwy.net",
            port="55719",
            password="user",
        ),
    ),
}


def default_registry() -> DbRegistryFile:
    return DbRegistryFile(
        databases={key: pair.model_copy(deep=True) for key, pair in BUILTIN_PAIRS.items()},
        settings=DbToolSettings(),
    )


def load_db_registry(path: Path, output: CLIConsole = console) -> DbRegistryFile:
    """Load db.config.json, creating or recovering it from defaults."""
    registry = load_registry(path, DbRegistryFile, default_registry, output)
    if not registry.databases:
        output.warn(f"No database configurations found in {path.name}")
        output.hint("Run 'next-toolchain db config' to set up your database configurations")
    return registry


def save_db_registry(path: Path, registry: DbRegistryFile) -> None:
    save_registry(path, registry)


def available_pairs(registry: DbRegistryFile | None) -> dict[str, DBPair]:
    """Pairs offered for selection: built-ins overlaid by the registry file."""
    pairs = dict(BUILTIN_PAIRS)
    if registry is not None:
        pairs.update(registry.databases)
    return pairs


def merge_registry(
    existing: DbRegistryFile | None, key: str, pair: DBPair
) -> DbRegistryFile:
    """Merge a selected pair into the existing registry.

    Existing pairs are kept and ``key`` is replaced. Settings start from the
    defaults, overlaid by whatever the existing file set explicitly.
    """
    databases = dict(existing.databases) if existing else {}
    databases[key] = pair

    settings = DbToolSettings()
    if existing is not None:
        settings = settings.model_copy(
            update=existing.settings.model_dump(exclude_unset=True)
        )

    return DbRegistryFile(databases=databases, settings=settings, current=key)


def current_pair(registry: DbRegistryFile) -> DBPair | None:
    """The pair last written to db.conf, else the first configured pair."""
    if registry.current and registry.current in registry.databases:
        return registry.databases[registry.current]
    return next(iter(registry.databases.values()), None)


def current_database_name(registry: DbRegistryFile) -> str | None:
    pair = current_pair(registry)
    return pair.name if pair else None


def _endpoint_lines(prefix: str, config: DBConfig) -> list[str]:
    lines = [
        f'{prefix}_NAME="{config.db_name}"',
        f'{prefix}_USER="{config.user}"',
        f'{prefix}_HOST="{config.host}"',
    ]
    if config.port:
        lines.append(f'{prefix}_PORT="{config.port}"')
    if config.password:
        lines.append(f'{prefix}_PASS="{config.password}"')
    return lines


def render_db_env(pair: DBPair, settings: DbToolSettings) -> str:
    """Render the db.conf environment file for ``pair``."""
    lines = [
        "# Database configuration managed by next-toolchain db",
        "",
        "# Local database configuration",
        *_endpoint_lines("LOCAL_DB", pair.local),
        "",
        "# Cloud database configuration",
        *_endpoint_lines("CLOUD_DB", pair.production),
        "",
        "# Database settings",
        f"DB_MAX_CONNECTIONS={settings.max_connections}",
        f'DB_STATEMENT_TIMEOUT="{settings.statement_timeout}"',
        f'DB_IDLE_TRANSACTION_TIMEOUT="{settings.idle_transaction_timeout}"',
        f'DB_IDLE_SESSION_TIMEOUT="{settings.idle_session_timeout}"',
        f'DB_MASTER_IDLE_TIMEOUT="{settings.master_idle_timeout}"',
        f"DB_TCP_KEEPALIVES_IDLE={settings.tcp_keepalives_idle}",
        f"DB_TCP_KEEPALIVES_INTERVAL={settings.tcp_keepalives_interval}",
        f"DB_TCP_KEEPALIVES_COUNT={settings.tcp_keepalives_count}",
        "",
        "# Application user settings",
        f'APP_USER="{settings.app_user}"',
        f'APP_PASS="{settings.app_pass}"',
    ]
    return "\n".join(lines) + "\n"
