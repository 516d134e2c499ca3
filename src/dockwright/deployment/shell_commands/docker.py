"""Docker command abstractions.

This module provides commands for building, authenticating and pushing
images. Each operation has a ``*_command`` builder returning the argument
vector so that dry runs can print exactly what a real run executes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .types import CommandResult

if TYPE_CHECKING:
    from .runner import CommandRunner


class DockerCommands:
    """Docker-related shell commands.

    Provides operations for:
    - Image build and push
    - Registry login with the password passed on stdin
    - Daemon liveness probing
    """

    def __init__(self, runner: CommandRunner, binary: str = "docker") -> None:
        """Initialize Docker commands.

        Args:
            runner: Command runner for executing shell commands
            binary: Docker executable name
        """
        self._runner = runner
        self.binary = binary

    # =========================================================================
    # Image Build
    # =========================================================================

    def build_command(self, image_tag: str, context: str = ".") -> list[str]:
        """Argument vector for ``docker build``.

        Example:
            >>> docker.build_command("reg.example.com/acme/svc:latest")
            ['docker', 'build', '-t', 'reg.example.com/acme/svc:latest', '.']
        """
        return [self.binary, "build", "-t", image_tag, context]

    def build(self, image_tag: str, context: str = ".") -> CommandResult:
        """Build an image from the project root, streaming output.

        Args:
            image_tag: Full image tag to apply
            context: Build context relative to the project root

        Returns:
            CommandResult with build status
        """
        return self._runner.run(
            self.build_command(image_tag, context), capture_output=False
        )

    # =========================================================================
    # Registry
    # =========================================================================

    def login_command(self, host: str, username: str) -> list[str]:
        """Argument vector for ``docker login`` without the stdin switch."""
        return [self.binary, "login", host, "-u", username]

    def login(self, host: str, username: str, password: str) -> CommandResult:
        """Authenticate against a registry.

        The password is written to the process's stdin via
        ``--password-stdin`` and never appears in the argument vector.

        Returns:
            CommandResult with login status
        """
        cmd = [*self.login_command(host, username), "--password-stdin"]
        return self._runner.run_with_input(cmd, f"{password}\n")

    def push_command(self, image_tag: str) -> list[str]:
        """Argument vector for ``docker push``."""
        return [self.binary, "push", image_tag]

    def push(self, image_tag: str) -> CommandResult:
        """Push an image to its registry, streaming output.

        Args:
            image_tag: Full image tag including registry
                      (e.g., "registry.example.com/app:latest")
        """
        return self._runner.run(self.push_command(image_tag), capture_output=False)

    # =========================================================================
    # Daemon
    # =========================================================================

    def daemon_running(self) -> bool:
        """Check whether the Docker daemon answers ``docker info``."""
        try:
            result = self._runner.run([self.binary, "info"])
        except OSError:
            return False
        return result.success
