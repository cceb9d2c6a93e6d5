from pathlib import Path

PROJECT_MARKERS = ("package.json", ".git")


def make_postgres_url(
    user: str, password: str | None, host: str, port: int, dbname: str
) -> str:
    credentials = f"{user}:{password}" if password else user
    return f"postgresql://{credentials}@{host}:{port}/{dbname}"


def get_project_root(start: Path | None = None) -> Path:
    """Get the project root directory.

    Walks up from the working directory to find the project the toolchain
    is run against, identified by a package.json or a .git directory.

    Returns:
        Path to the project root directory (the working directory when no
        marker is found)
    """
    current = (start or Path.cwd()).resolve()

    for parent in [current, *current.parents]:
        if any((parent / marker).exists() for marker in PROJECT_MARKERS):
            return parent

    return current
