"""Tests for CLI context dependency injection."""

from pathlib import Path
from unittest.mock import Mock, patch

import click
import pytest
import typer

from dockwright.cli.context import CLIContext, build_cli_context, get_cli_context


def test_cli_context_is_immutable():
    """Test that CLIContext is frozen/immutable."""
    ctx = CLIContext(
        console=Mock(),
        project_root=Path("/test"),
        commands=Mock(),
        constants=Mock(),
        paths=Mock(),
    )

    with pytest.raises(AttributeError):
        ctx.console = Mock()  # type: ignore[misc]


def test_build_cli_context_uses_given_root(tmp_path: Path):
    """Test that every dependency is rooted at the service directory."""
    ctx = build_cli_context(tmp_path)

    assert ctx.project_root == tmp_path
    assert ctx.commands.project_root == tmp_path
    assert ctx.paths.project_root == tmp_path
    assert ctx.paths.config_yaml == tmp_path / ".dockwright" / "config.yaml"


def test_build_cli_context_defaults_to_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Test that the working directory is the default project root."""
    monkeypatch.chdir(tmp_path)

    ctx = build_cli_context()

    assert ctx.project_root == tmp_path


def test_get_cli_context_from_typer_context():
    """Test that get_cli_context retrieves from Typer context."""
    mock_ctx_obj = CLIContext(
        console=Mock(),
        project_root=Path("/test"),
        commands=Mock(),
        constants=Mock(),
        paths=Mock(),
    )
    mock_typer_ctx = Mock(spec=typer.Context)
    mock_typer_ctx.obj = mock_ctx_obj

    assert get_cli_context(mock_typer_ctx) is mock_ctx_obj


@patch("dockwright.cli.context.build_cli_context")
def test_get_cli_context_fallback_without_context(mock_build):
    """Test that a fresh context is built outside a Click invocation."""
    mock_build.return_value = Mock()

    with patch.object(click, "get_current_context", return_value=None):
        result = get_cli_context()

    assert result is mock_build.return_value
    mock_build.assert_called_once_with()
