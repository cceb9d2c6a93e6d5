"""Semantic version bumps for package.json."""

import json
import re
from enum import Enum
from pathlib import Path

from loguru import logger

from src.infra.errors import ToolchainError

VERSION_PATTERN = re.compile(r"^(\d+)\.(\d+)\.(\d+)$")


class BumpType(str, Enum):
    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"


def bump_version(version: str, bump: BumpType) -> str:
    """Return ``version`` bumped by one ``bump`` step.

    Examples:
        >>> bump_version("1.2.3", BumpType.PATCH)
        '1.2.4'
        >>> bump_version("1.2.3", BumpType.MINOR)
        '1.3.0'
        >>> bump_version("1.2.3", BumpType.MAJOR)
        '2.0.0'

    Raises:
        ToolchainError: If ``version`` is not in MAJOR.MINOR.PATCH form
    """
    match = VERSION_PATTERN.match(version.strip())
    if not match:
        raise ToolchainError(
            f"Invalid version: {version!r}",
            details="Expected MAJOR.MINOR.PATCH, e.g. 1.4.2",
        )
    major, minor, patch = (int(part) for part in match.groups())

    if bump is BumpType.MAJOR:
        return f"{major + 1}.0.0"
    if bump is BumpType.MINOR:
        return f"{major}.{minor + 1}.0"
    return f"{major}.{minor}.{patch + 1}"


def update_package_version(package_json: Path, bump: BumpType) -> str:
    """Bump the version in ``package_json`` in place.

    The file is rewritten with 2-space indentation and a trailing newline;
    key order is preserved.

    Returns:
        The new version

    Raises:
        ToolchainError: If the file is missing, invalid or has no version
    """
    if not package_json.exists():
        raise ToolchainError(f"package.json not found at {package_json}")

    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ToolchainError(f"Error updating version: invalid JSON in {package_json.name}", str(e)) from e

    current = data.get("version") if isinstance(data, dict) else None
    if not isinstance(current, str):
        raise ToolchainError(f"Error updating version: no version field in {package_json.name}")

    new_version = bump_version(current, bump)
    data["version"] = new_version
    package_json.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    logger.info(f"Bumped {package_json} from {current} to {new_version}")
    return new_version
