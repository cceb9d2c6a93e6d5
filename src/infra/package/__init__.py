"""npm package versioning and publishing."""

from .publish import NpmPublisher
from .version import BumpType, bump_version, update_package_version

__all__ = ["BumpType", "NpmPublisher", "bump_version", "update_package_version"]
