"""Tests for CLI context dependency injection."""

from pathlib import Path
from unittest.mock import Mock, patch

import pytest
import typer

from src.cli.context import CLIContext, build_cli_context, get_cli_context
from src.infra.constants import ToolchainPaths
from src.utils.paths import get_project_root


def _context() -> CLIContext:
    return CLIContext(
        console=Mock(),
        project_root=Path("/test"),
        commands=Mock(),
        paths=Mock(),
    )


def test_cli_context_is_immutable():
    """Test that CLIContext is frozen/immutable."""
    ctx = _context()

    with pytest.raises(AttributeError):
        ctx.console = Mock()  # type: ignore[misc]


@patch("src.cli.context.get_project_root")
def test_build_cli_context_uses_project_root(mock_get_root):
    mock_get_root.return_value = Path("/test/project")

    ctx = build_cli_context()

    assert ctx.project_root == Path("/test/project")
    assert isinstance(ctx.paths, ToolchainPaths)
    assert ctx.paths.package_json == Path("/test/project/package.json")
    assert ctx.paths.db_env_file.parent == ctx.paths.temp_dir


def test_build_cli_context_with_explicit_root(tmp_path):
    ctx = build_cli_context(tmp_path)

    assert ctx.project_root == tmp_path
    assert ctx.paths.env_file == tmp_path / ".env"


@patch("src.cli.context.ShellCommands")
@patch("src.cli.context.get_project_root")
def test_shell_commands_initialized_with_project_root(mock_get_root, mock_shell_commands):
    mock_get_root.return_value = Path("/test/project")

    build_cli_context()

    mock_shell_commands.assert_called_once_with(Path("/test/project"))


def test_get_cli_context_from_typer_context():
    """Test that get_cli_context retrieves from Typer context."""
    expected = _context()
    typer_ctx = Mock(spec=typer.Context)
    typer_ctx.obj = expected

    assert get_cli_context(typer_ctx) is expected


def test_get_cli_context_with_invalid_obj_falls_back():
    typer_ctx = Mock(spec=typer.Context)
    typer_ctx.obj = "invalid"

    with patch("src.cli.context.build_cli_context") as mock_build:
        mock_build.return_value = Mock(spec=CLIContext)

        get_cli_context(typer_ctx)

        mock_build.assert_called_once()


@patch("click.get_current_context")
def test_get_cli_context_uses_click_context_as_fallback(mock_get_click_ctx):
    expected = _context()
    mock_get_click_ctx.return_value = Mock(obj=expected)

    assert get_cli_context(None) is expected
    mock_get_click_ctx.assert_called_once_with(silent=True)


@patch("click.get_current_context", return_value=None)
def test_get_cli_context_without_any_context_builds_one(_mock_get_click_ctx):
    with patch("src.cli.context.build_cli_context") as mock_build:
        get_cli_context(None)

        mock_build.assert_called_once_with()


def test_project_root_is_nearest_package_json(tmp_path):
    (tmp_path / "package.json").write_text("{}")
    nested = tmp_path / "src" / "components"
    nested.mkdir(parents=True)

    assert get_project_root(nested) == tmp_path.resolve()
