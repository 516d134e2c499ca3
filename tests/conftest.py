"""Shared fixtures for dockwright tests."""

from __future__ import annotations

import io
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from dockwright.cli.shared.console import CLIConsole
from dockwright.deployment.constants import DeploymentConstants, DeploymentPaths
from dockwright.deployment.shell_commands import (
    CommandResult,
    DockerCommands,
    HelmCommands,
    ShellCommands,
)


@pytest.fixture(autouse=True)
def isolated_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """Keep tests independent of the developer's registry settings and kubeconfig."""
    for var in ("REGISTRY_HOST", "REGISTRY_USERNAME", "REGISTRY_PASSWORD"):
        monkeypatch.delenv(var, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """A service directory with an empty .dockwright/helm folder."""
    root = tmp_path / "orders"
    (root / ".dockwright" / "helm").mkdir(parents=True)
    return root


@pytest.fixture
def charts_root(tmp_path: Path) -> Path:
    """An installed chart store with both flavours."""
    root = tmp_path / "charts"
    (root / "stateless").mkdir(parents=True)
    (root / "stateful").mkdir(parents=True)
    return root


@pytest.fixture
def paths(project_root: Path, charts_root: Path) -> DeploymentPaths:
    return DeploymentPaths(project_root, DeploymentConstants(), charts_root=charts_root)


@pytest.fixture
def mock_runner() -> MagicMock:
    """A command runner whose commands all succeed."""
    runner = MagicMock()
    runner.run.return_value = CommandResult(success=True, returncode=0)
    runner.run_with_input.return_value = CommandResult(success=True, returncode=0)
    return runner


@pytest.fixture
def commands(project_root: Path, mock_runner: MagicMock) -> ShellCommands:
    """Real docker/helm command builders on top of a mocked runner."""
    shell = ShellCommands(project_root)
    shell.docker = DockerCommands(mock_runner)
    shell.helm = HelmCommands(mock_runner)
    shell.tool_available = MagicMock(return_value=True)  # type: ignore[method-assign]
    return shell


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def rich_console(output: io.StringIO) -> Console:
    return Console(file=output, width=200, color_system=None)


@pytest.fixture
def cli_console(rich_console: Console) -> CLIConsole:
    return CLIConsole(rich_console)


@pytest.fixture
def credentials() -> dict[str, str]:
    return {"REGISTRY_USERNAME": "robot", "REGISTRY_PASSWORD": "s3cret"}
