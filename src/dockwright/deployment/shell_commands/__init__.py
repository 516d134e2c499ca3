"""Shell command abstractions for Docker/Helm deployment operations.

This package provides the interface for shell commands used during
deployment, organized by tool:

- docker: image build, registry login, push and daemon probe
- helm: release upgrade/install

Usage:
    from dockwright.deployment.shell_commands import ShellCommands

    commands = ShellCommands(project_root=Path("."))
    if commands.docker.daemon_running():
        commands.docker.build("registry.example.com/acme/svc:latest")
"""

import shutil
from pathlib import Path

from .docker import DockerCommands
from .helm import HelmCommands
from .runner import CommandRunner
from .types import CommandResult


class ShellCommands:
    """Unified interface for all shell command operations.

    Attributes:
        docker: Docker-related commands
        helm: Helm-related commands
    """

    def __init__(self, project_root: Path) -> None:
        """Initialize the shell commands executor.

        Args:
            project_root: Path to the project root directory.
                         Commands will be executed from this directory by default.
        """
        self._project_root = Path(project_root)
        self._runner = CommandRunner(self._project_root)

        self.docker = DockerCommands(self._runner)
        self.helm = HelmCommands(self._runner)

    @property
    def project_root(self) -> Path:
        """Get the project root path."""
        return self._project_root

    def tool_available(self, name: str) -> bool:
        """Check if an executable is resolvable on PATH."""
        return shutil.which(name) is not None


__all__ = [
    "ShellCommands",
    "CommandResult",
    "DockerCommands",
    "HelmCommands",
    "CommandRunner",
]
