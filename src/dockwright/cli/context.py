"""CLI context and dependency container."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import click
import typer

from dockwright.cli.shared.console import CLIConsole, console
from dockwright.deployment.constants import DeploymentConstants, DeploymentPaths
from dockwright.deployment.shell_commands import ShellCommands


@dataclass(frozen=True)
class CLIContext:
    """Runtime dependencies for CLI commands."""

    console: CLIConsole
    project_root: Path
    commands: ShellCommands
    constants: DeploymentConstants
    paths: DeploymentPaths


def build_cli_context(project_root: Path | None = None) -> CLIContext:
    """Build a fresh CLIContext for the service in the working directory."""
    project_root = project_root or Path.cwd()
    constants = DeploymentConstants()
    paths = DeploymentPaths(project_root, constants)

    return CLIContext(
        console=console,
        project_root=project_root,
        commands=ShellCommands(project_root),
        constants=constants,
        paths=paths,
    )


def get_cli_context(ctx: typer.Context | None = None) -> CLIContext:
    """Return the CLIContext from Typer, falling back to a new instance."""
    context = ctx or click.get_current_context(silent=True)
    if context and isinstance(context.obj, CLIContext):
        return context.obj
    return build_cli_context()
