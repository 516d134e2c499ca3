"""Docker image build, registry login and push.

The image workflow runs three steps in order - build, login, push - and
aborts at the first failure. In dry-run mode each step prints the command
it would run and nothing is spawned.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING

from rich.markup import escape

from .constants import DeploymentConstants, DeploymentPaths
from .errors import ExternalToolError

if TYPE_CHECKING:
    from rich.console import Console

    from dockwright.config.models import DeployConfig

    from .shell_commands import CommandResult, ShellCommands


def should_build_image(config: DeployConfig, paths: DeploymentPaths) -> bool:
    """Whether the image workflow runs at all.

    False when the build is disabled or the project has no Dockerfile.
    The Helm workflow uses the same rule to decide on image overrides.
    """
    return config.run_docker_build and paths.dockerfile.is_file()


class ImageBuilder:
    """Builds, authenticates and pushes the service image.

    Attributes:
        commands: Shell command executor
        console: Rich console for output
        paths: Project path resolver
        constants: Deployment configuration constants
    """

    def __init__(
        self,
        commands: ShellCommands,
        console: Console,
        paths: DeploymentPaths,
        constants: DeploymentConstants | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the image builder.

        Args:
            commands: Shell command executor
            console: Rich console for output
            paths: Project path resolver
            constants: Optional deployment constants (uses defaults if not provided)
            environ: Environment to read credentials from (defaults to os.environ)
        """
        self.commands = commands
        self.console = console
        self.paths = paths
        self.constants = constants or DeploymentConstants()
        self.environ = os.environ if environ is None else environ

    def run(self, config: DeployConfig) -> None:
        """Run the build, login and push steps.

        Args:
            config: Resolved deployment configuration

        Raises:
            ConfigurationError: If the image repository cannot be formed
            ExternalToolError: If any step fails, naming the step
        """
        if not should_build_image(config, self.paths):
            self.console.print(
                "[yellow]⏭️  Skipping Docker workflow. Either docker build "
                "(--docker-build) is disabled or Dockerfile is missing.[/yellow]"
            )
            return

        image_tag = config.image_tag

        self._build(config, image_tag)
        self._login(config)
        self._push(config, image_tag)

    # =========================================================================
    # Steps
    # =========================================================================

    def _build(self, config: DeployConfig, image_tag: str) -> None:
        self.console.print(
            f"[bold cyan]🔨 Building Docker image: {escape(image_tag)}[/bold cyan]"
        )
        self.console.print("[dim]   Build context: .[/dim]")

        if config.dry_run:
            self._print_plan(self.commands.docker.build_command(image_tag))
            return

        self._execute("build", lambda: self.commands.docker.build(image_tag))
        self.console.print(
            f"[green]✓ Successfully built Docker image: {escape(image_tag)}[/green]"
        )

    def _login(self, config: DeployConfig) -> None:
        username = self.environ.get(self.constants.REGISTRY_USERNAME_ENV, "")
        password = self.environ.get(self.constants.REGISTRY_PASSWORD_ENV, "")

        if not config.dry_run and not (username and password):
            raise ExternalToolError(
                "login",
                f"{self.constants.REGISTRY_USERNAME_ENV} and "
                f"{self.constants.REGISTRY_PASSWORD_ENV} environment variables "
                "must be set for Docker login",
            )

        host = config.docker_host
        self.console.print(
            f"[bold cyan]🔐 Authenticating with Docker registry: {escape(host)}[/bold cyan]"
        )
        self.console.print(f"[dim]   Username: {escape(username)}[/dim]")

        if config.dry_run:
            self._print_plan(self.commands.docker.login_command(host, username))
            return

        self._execute(
            "login", lambda: self.commands.docker.login(host, username, password)
        )
        self.console.print(
            f"[green]✓ Successfully authenticated with registry: {escape(host)}[/green]"
        )

    def _push(self, config: DeployConfig, image_tag: str) -> None:
        self.console.print(
            f"[bold cyan]📤 Pushing Docker image: {escape(image_tag)}[/bold cyan]"
        )
        self.console.print(
            f"[dim]   Target registry: {escape(config.docker_host)}[/dim]"
        )

        if config.dry_run:
            self._print_plan(self.commands.docker.push_command(image_tag))
            return

        self._execute("push", lambda: self.commands.docker.push(image_tag))
        self.console.print(
            f"[green]✓ Successfully pushed image to registry: {escape(image_tag)}[/green]"
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    def _print_plan(self, cmd: list[str]) -> None:
        plan = " ".join(cmd)
        self.console.print(
            f"[magenta]   🧪 \\[DRY-RUN] Would run: {escape(plan)}[/magenta]"
        )

    def _execute(self, step: str, action: Callable[[], CommandResult]) -> None:
        """Run one step, converting failures into ExternalToolError."""
        try:
            result = action()
        except OSError as e:
            raise ExternalToolError(
                step,
                f"could not start {self.constants.DOCKER_BIN}",
                details=str(e),
            ) from e

        if not result.success:
            raise ExternalToolError(
                step,
                f"{self.constants.DOCKER_BIN} {step} exited with code {result.returncode}",
                details=result.stderr or None,
                returncode=result.returncode,
            )
