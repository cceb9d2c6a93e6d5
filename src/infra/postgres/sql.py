"""SQL statements shared by the database workflows.

Identifiers come from the operator's own db.conf and are interpolated
as-is.
"""


def terminate_connections(database: str) -> str:
    return f"""
        SELECT pg_terminate_backend(pid)
        FROM pg_stat_activity
        WHERE datname = '{database}'
          AND pid <> pg_backend_pid();
    """


def connection_limit(database: str, limit: int) -> str:
    return f"ALTER DATABASE {database} CONNECTION LIMIT {limit};"


def ensure_login_role(user: str, password: str) -> str:
    """Create ``user`` with ``password`` unless the role already exists."""
    return f"""
        DO $$
        BEGIN
            IF NOT EXISTS (SELECT FROM pg_catalog.pg_roles WHERE rolname = '{user}') THEN
                CREATE USER {user} WITH PASSWORD '{password}';
            END IF;
        END
        $$;
    """


def grant_public_schema(role: str) -> str:
    """Grant full access to existing and future objects in schema public."""
    return f"""
        GRANT ALL PRIVILEGES ON ALL TABLES IN SCHEMA public TO {role};
        GRANT ALL PRIVILEGES ON ALL SEQUENCES IN SCHEMA public TO {role};
        ALTER DEFAULT PRIVILEGES IN SCHEMA public GRANT ALL PRIVILEGES ON TABLES TO {role};
        ALTER DEFAULT PRIVILEGES IN SCHEMA public GRANT ALL PRIVILEGES ON SEQUENCES TO {role};
    """


def grant_database(database: str, role: str) -> str:
    return f"GRANT ALL PRIVILEGES ON DATABASE {database} TO {role};"


def schema_owner(role: str) -> str:
    return f"ALTER SCHEMA public OWNER TO {role};"
