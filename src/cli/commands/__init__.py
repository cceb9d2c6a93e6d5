"""CLI command modules organized by tool.

Command Groups:
- db: Local/cloud PostgreSQL management
- env: Project .env switching
- package: npm versioning and publishing

Single Commands:
- screenshot: Website screenshots
- index-files: Barrel index generation
"""

from .db_cli import db_app
from .env import env_app
from .index_files import index_files
from .package import package_app
from .screenshot import screenshot

__all__ = [
    "db_app",
    "env_app",
    "package_app",
    "screenshot",
    "index_files",
]
