"""Barrel (index.ts) generation for TypeScript source folders."""

from pathlib import Path

from loguru import logger

from src.cli.shared.console import CLIConsole, console

SOURCE_SUFFIXES = (".ts", ".tsx")
INDEX_NAMES = ("index.ts", "index.tsx")


def find_exportable_items(directory: Path) -> list[str]:
    """Names in ``directory`` an index file should re-export.

    Sub-directories qualify when they hold an index file of their own; files
    qualify when they are .ts/.tsx sources other than the index itself.
    Results are sorted by name.
    """
    items: list[str] = []
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        if entry.is_dir():
            if any((entry / name).exists() for name in INDEX_NAMES):
                items.append(entry.name)
        elif entry.is_file() and entry.suffix in SOURCE_SUFFIXES and entry.name not in INDEX_NAMES:
            items.append(entry.name)
    return items


def _stem(item: str) -> str:
    return Path(item).stem if Path(item).suffix in SOURCE_SUFFIXES else item


def generate_index_content(items: list[str]) -> str:
    return "\n".join(f"export * from './{_stem(item)}';" for item in items) + "\n"


def build_index_file(directory: Path, output: CLIConsole = console) -> Path | None:
    """Write ``index.ts`` into ``directory``.

    Returns:
        The written path, or None when there was nothing to export
    """
    items = find_exportable_items(directory)
    if not items:
        output.warn(f"No exportable items found in {directory}")
        return None

    index_path = directory / "index.ts"
    index_path.write_text(generate_index_content(items), encoding="utf-8")
    logger.debug(f"Wrote {index_path}")
    output.ok(f"Generated index file for {directory} with {len(items)} exports")
    output.info(f"Exports: {', '.join(_stem(item) for item in items)}")
    return index_path
