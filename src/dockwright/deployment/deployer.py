"""Deployment pipeline driver.

This module provides the Deployer class which runs a deployment end to
end. The pipeline is strictly sequential:

CONFIGURE -> CONFIRM -> VALIDATE -> BUILD_AND_PUSH_IMAGE -> DEPLOY -> COMPLETE

Any error moves the pipeline to FAILED and is re-raised unchanged. The
confirmation gate is skipped when auto-approve or dry-run is set.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING

from dotenv import dotenv_values, load_dotenv
from loguru import logger
from rich.markup import escape
from rich.table import Table

from dockwright.config.loader import load_project_config
from dockwright.config.resolver import resolve_config

from .constants import DeploymentConstants, DeploymentPaths
from .errors import DeploymentError, UserInputError
from .helm_release import HelmReleaseManager
from .image_builder import ImageBuilder
from .validator import PreflightValidator

if TYPE_CHECKING:
    from dockwright.cli.shared.console import CLIConsole
    from dockwright.config.models import DeployConfig

    from .shell_commands import ShellCommands

SECTION_RULE = "═" * 63


class PipelineStage(Enum):
    """Stages of a deployment run."""

    CONFIGURE = "configure"
    CONFIRM = "confirm"
    VALIDATE = "validate"
    BUILD_AND_PUSH_IMAGE = "build_and_push_image"
    DEPLOY = "deploy"
    COMPLETE = "complete"
    FAILED = "failed"


class Deployer:
    """Runs the deployment pipeline for one service directory.

    Attributes:
        console: CLI console for output and the confirmation prompt
        commands: Shell command executor
        paths: Project path resolver
        constants: Deployment configuration constants
        stage: Current pipeline stage
    """

    def __init__(
        self,
        console: CLIConsole,
        commands: ShellCommands,
        paths: DeploymentPaths,
        constants: DeploymentConstants | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the deployer.

        Args:
            console: CLI console
            commands: Shell command executor
            paths: Project path resolver
            constants: Optional deployment constants
            environ: Environment for credentials (defaults to os.environ)
        """
        self.console = console
        self.commands = commands
        self.paths = paths
        self.constants = constants or DeploymentConstants()
        self.environ: Mapping[str, str] = os.environ if environ is None else environ
        self.stage = PipelineStage.CONFIGURE

        self.image_builder = ImageBuilder(
            commands=commands,
            console=console.console,
            paths=paths,
            constants=self.constants,
            environ=self.environ,
        )
        self.helm_release = HelmReleaseManager(
            commands=commands,
            console=console.console,
            paths=paths,
            constants=self.constants,
        )

    def deploy(self, cli_values: Mapping[str, str]) -> DeployConfig:
        """Run the whole pipeline.

        Args:
            cli_values: Flags explicitly supplied on the command line, by flag name

        Returns:
            The resolved configuration the run used

        Raises:
            DeploymentError: The first failure from any stage
        """
        self.console.print_header("🐳 Dockwright deployment")

        try:
            config = self._configure(cli_values)
            self._confirm(config)
            self._validate(config)
            self._build_and_push_image(config)
            self._deploy_release(config)
        except DeploymentError:
            logger.debug(f"Deployment failed during {self.stage.value}")
            self.stage = PipelineStage.FAILED
            raise

        self.stage = PipelineStage.COMPLETE
        self._section(0, "DEPLOYMENT COMPLETE", "🎉")
        self.console.ok(f"{escape(config.artifact_name)} deployed")
        return config

    # =========================================================================
    # Stages
    # =========================================================================

    def _configure(self, cli_values: Mapping[str, str]) -> DeployConfig:
        self.stage = PipelineStage.CONFIGURE
        self._section(1, "CONFIGURATION", "⚙️")

        self._load_env_file()

        file_values = load_project_config(self.paths.config_yaml)
        config = resolve_config(cli_values, file_values)
        self._print_summary(config)
        if config.dry_run:
            self.console.warn("Dry-run mode: deployment commands are printed, not executed")
        return config

    def _load_env_file(self) -> None:
        """Apply .env to the environment the pipeline reads, without overriding.

        With the process environment the file goes through load_dotenv. An
        injected environment mapping is layered over the file values instead,
        leaving os.environ untouched.
        """
        values = {
            key: value
            for key, value in dotenv_values(self.paths.env_file).items()
            if value is not None
        }
        if not values:
            return

        if self.environ is os.environ:
            load_dotenv(self.paths.env_file, override=False)
        else:
            self.environ = {**values, **self.environ}
            self.image_builder.environ = self.environ

        logger.debug(f"Loaded {len(values)} variable(s) from {self.paths.env_file}")
        self.console.info(
            "Loaded environment from "
            f"{escape(str(self.paths.relative(self.paths.env_file)))}"
        )

    def _confirm(self, config: DeployConfig) -> None:
        if config.auto_approve or config.dry_run:
            return

        self.stage = PipelineStage.CONFIRM
        try:
            self.console.console.input(
                "Please confirm the configuration above. "
                "Press Enter to proceed with deployment: "
            )
        except KeyboardInterrupt as e:
            raise UserInputError(
                "confirmation interrupted",
                details="Deployment cancelled before anything was changed",
            ) from e
        except (EOFError, OSError) as e:
            raise UserInputError(
                "failed to read user input",
                details="Use --auto-approve=true for non-interactive runs",
            ) from e

    def _validate(self, config: DeployConfig) -> None:
        self.stage = PipelineStage.VALIDATE
        self._section(2, "VALIDATION", "✓")

        validator = PreflightValidator(
            config,
            commands=self.commands,
            paths=self.paths,
            constants=self.constants,
            environ=self.environ,
        )
        results, error = validator.validate_all()
        for result in results:
            if result.passed:
                self.console.print(result.message)
            else:
                self.console.error(f"Validation error in {result.name}")
        if error is not None:
            raise error

    def _build_and_push_image(self, config: DeployConfig) -> None:
        self.stage = PipelineStage.BUILD_AND_PUSH_IMAGE
        self._section(3, "DOCKER WORKFLOW", "🐳")
        self.image_builder.run(config)

    def _deploy_release(self, config: DeployConfig) -> None:
        self.stage = PipelineStage.DEPLOY
        self._section(4, "HELM WORKFLOW", "⎈")
        self.helm_release.run(config)

    # =========================================================================
    # Output
    # =========================================================================

    def _section(self, number: int, title: str, icon: str) -> None:
        heading = f"{icon}  {number}. {title}" if number else f"{icon} {title}"
        self.console.print()
        self.console.print(f"[bold blue]{SECTION_RULE}[/bold blue]")
        self.console.print(f"[bold]{heading}[/bold]")
        self.console.print(f"[bold blue]{SECTION_RULE}[/bold blue]")

    def _print_summary(self, config: DeployConfig) -> None:
        table = Table(title="🛠️  Configuration loaded", show_header=True, header_style="bold")
        table.add_column("Field")
        table.add_column("Value")
        for name, value in config.summary_rows():
            table.add_row(name, escape(value))
        self.console.print(table)
