"""Tests for package.json version bumps."""

import json

import pytest

from src.infra.errors import ToolchainError
from src.infra.package.version import BumpType, bump_version, update_package_version


@pytest.mark.parametrize(
    ("version", "bump", "expected"),
    [
        ("1.2.3", BumpType.PATCH, "1.2.4"),
        ("1.2.3", BumpType.MINOR, "1.3.0"),
        ("1.2.3", BumpType.MAJOR, "2.0.0"),
        ("0.0.9", BumpType.PATCH, "0.0.10"),
        ("0.9.9", BumpType.MINOR, "0.10.0"),
        ("9.9.9", BumpType.MAJOR, "10.0.0"),
    ],
)
def test_bump_version(version, bump, expected):
    assert bump_version(version, bump) == expected


@pytest.mark.parametrize("version", ["1.2", "1.2.3-beta.1", "v1.2.3", "", "a.b.c"])
def test_bump_version_rejects_invalid_versions(version):
    with pytest.raises(ToolchainError, match="Invalid version"):
        bump_version(version, BumpType.PATCH)


def test_update_package_version_rewrites_file(tmp_path):
    package_json = tmp_path / "package.json"
    package_json.write_text(
        json.dumps({"name": "demo", "version": "1.4.2", "private": False})
    )

    new_version = update_package_version(package_json, BumpType.MINOR)

    assert new_version == "1.5.0"
    content = package_json.read_text()
    assert content.endswith("}\n")
    assert '\n  "version": "1.5.0",\n' in content
    # Key order is preserved
    assert list(json.loads(content)) == ["name", "version", "private"]


def test_update_package_version_missing_file(tmp_path):
    with pytest.raises(ToolchainError, match="package.json not found"):
        update_package_version(tmp_path / "package.json", BumpType.PATCH)


def test_update_package_version_without_version_field(tmp_path):
    package_json = tmp_path / "package.json"
    package_json.write_text('{"name": "demo"}')

    with pytest.raises(ToolchainError, match="no version field"):
        update_package_version(package_json, BumpType.PATCH)

    assert package_json.read_text() == '{"name": "demo"}'
