"""Tests for index.ts generation."""

from src.infra.index_files import (
    build_index_file,
    find_exportable_items,
    generate_index_content,
)


def _make_components(root):
    (root / "Button.tsx").write_text("export const Button = () => null;\n")
    (root / "utils.ts").write_text("export const noop = () => {};\n")
    (root / "styles.css").write_text("")
    (root / "index.ts").write_text("// stale\n")
    (root / "forms").mkdir()
    (root / "forms" / "index.tsx").write_text("")
    (root / "assets").mkdir()


def test_find_exportable_items(tmp_path):
    _make_components(tmp_path)

    assert find_exportable_items(tmp_path) == ["Button.tsx", "forms", "utils.ts"]


def test_generate_index_content():
    content = generate_index_content(["Button.tsx", "forms", "utils.ts"])

    assert content == (
        "export * from './Button';\n"
        "export * from './forms';\n"
        "export * from './utils';\n"
    )


def test_build_index_file_overwrites_existing_index(tmp_path, output):
    _make_components(tmp_path)

    index_path = build_index_file(tmp_path, output)

    assert index_path == tmp_path / "index.ts"
    assert "stale" not in index_path.read_text()
    assert "export * from './forms';" in index_path.read_text()


def test_build_index_file_without_exports(tmp_path, output):
    (tmp_path / "README.md").write_text("")

    assert build_index_file(tmp_path, output) is None
    assert not (tmp_path / "index.ts").exists()
    output.warn.assert_called_once_with(f"No exportable items found in {tmp_path}")
