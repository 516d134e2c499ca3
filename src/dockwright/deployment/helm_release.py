"""Helm release deployment.

Resolves the chart for the configured flavour, collects values files,
assembles the ``helm upgrade --install`` arguments and runs (or, in
dry-run mode, prints) the command.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from .constants import DeploymentConstants, DeploymentPaths
from .errors import DeploymentError, ExternalToolError
from .image_builder import should_build_image

if TYPE_CHECKING:
    from rich.console import Console

    from dockwright.config.models import DeployConfig

    from .shell_commands import ShellCommands


def format_args(args: Sequence[str]) -> list[str]:
    """Group arguments for display, pairing each ``--flag`` with its value.

    Example:
        >>> format_args(["upgrade", "--install", "svc", "--values", "a.yaml"])
        ['upgrade', '--install', 'svc', '--values = a.yaml']
    """
    lines: list[str] = []
    i = 0
    while i < len(args):
        arg = args[i]
        if (
            i + 1 < len(args)
            and arg.startswith("--")
            and not args[i + 1].startswith("--")
            and arg != "--install"
        ):
            lines.append(f"{arg} = {args[i + 1]}")
            i += 2
        else:
            lines.append(arg)
            i += 1
    return lines


class HelmReleaseManager:
    """Deploys the service chart with Helm.

    Handles:
    - Chart lookup in the installed chart store
    - Values file collection (base + per environment)
    - Image overrides when an image was built
    - Running or simulating ``helm upgrade --install``
    """

    def __init__(
        self,
        commands: ShellCommands,
        console: Console,
        paths: DeploymentPaths,
        constants: DeploymentConstants | None = None,
    ) -> None:
        """Initialize the Helm release manager.

        Args:
            commands: Shell command executor
            console: Rich console for output
            paths: Project path resolver
            constants: Optional deployment constants
        """
        self.commands = commands
        self.console = console
        self.paths = paths
        self.constants = constants or DeploymentConstants()

    def run(self, config: DeployConfig) -> None:
        """Deploy (or simulate deploying) the release.

        Raises:
            DeploymentError: If the chart or a values file is missing
            ExternalToolError: If helm fails
        """
        args = self.build_command(config)

        if config.dry_run:
            self.console.print("[magenta]   🧪 \\[DRY-RUN] Would run: helm[/magenta]")
            self._print_args(args)
            return

        self.console.print(
            f"[bold cyan]🚀 Executing Helm deployment for artifact: "
            f"{escape(config.artifact_name)}[/bold cyan]"
        )
        self.console.print(
            f"[dim]   Kubeconfig: {escape(config.kubernetes_config)}[/dim]"
        )
        if config.kubernetes_context:
            self.console.print(
                f"[dim]   Context: {escape(config.kubernetes_context)}[/dim]"
            )
        self.console.print("[dim]   Running: helm[/dim]")
        self._print_args(args)

        try:
            result = self.commands.helm.run(args)
        except OSError as e:
            raise ExternalToolError(
                "deploy", f"could not start {self.constants.HELM_BIN}", details=str(e)
            ) from e

        if not result.success:
            raise ExternalToolError(
                "deploy",
                f"helm deployment exited with code {result.returncode}",
                details=result.stderr or None,
                returncode=result.returncode,
            )

        self.console.print(
            f"[green]✓ Successfully deployed {escape(config.artifact_name)} with Helm[/green]"
        )

    def build_command(self, config: DeployConfig) -> list[str]:
        """Assemble the full helm argument vector for this configuration.

        Includes ``--dry-run`` when the configuration requests it; all other
        arguments are identical between real and simulated runs.

        Raises:
            DeploymentError: If the chart or a values file is missing
        """
        chart_path = self.resolve_chart_path(config)
        value_files = self.collect_values_files(config)
        overrides = self.image_overrides(config)

        return self.commands.helm.upgrade_install_args(
            config.artifact_name,
            chart_path,
            kubeconfig=config.kubernetes_config,
            kube_context=config.kubernetes_context or None,
            value_files=value_files,
            set_values=overrides,
            dry_run=config.dry_run,
        )

    def resolve_chart_path(self, config: DeployConfig) -> Path:
        chart_path = config.chart_path(self.paths.charts_root)
        if not chart_path.exists():
            raise DeploymentError(
                f"helm chart not found at path: {chart_path}",
                details="Please ensure the chart directory exists. Charts are "
                f"installed under {self.paths.charts_root}/<flavour>.",
            )
        self.console.print(
            f"[green]✅ Helm chart found at: {escape(str(chart_path))}[/green]"
        )
        return chart_path

    def collect_values_files(self, config: DeployConfig) -> list[Path]:
        """Collect the base values file (if any) and one file per environment.

        Returns:
            Paths in precedence order: base first, then environments in
            the order requested

        Raises:
            DeploymentError: If an environment's values file is missing
        """
        files: list[Path] = []

        base_values = self.paths.base_values
        if base_values.is_file():
            files.append(base_values)
            self.console.print(
                "[dim]📄 Found base values file: "
                f"{escape(str(self.paths.relative(base_values)))}[/dim]"
            )

        for env in config.env:
            env_values = self.paths.env_values(env)
            if not env_values.is_file():
                raise DeploymentError(
                    "failed to collect values files: environment values file "
                    f"not found at path: {self.paths.relative(env_values)}",
                    details="Please ensure the file exists",
                )
            files.append(env_values)
            self.console.print(
                f"[dim]📄 Found environment values file: "
                f"{escape(str(self.paths.relative(env_values)))}[/dim]"
            )

        self.console.print(
            f"[green]✅ Collected {len(files)} values file(s) for deployment[/green]"
        )
        return files

    def image_overrides(self, config: DeployConfig) -> list[tuple[str, str]]:
        """``--set`` overrides pointing the chart at the freshly pushed image.

        Empty when the image workflow is skipped.
        """
        if not should_build_image(config, self.paths):
            return []

        repository = config.image_repository
        self.console.print("[cyan]💉 Injecting image configuration into Helm deployment[/cyan]")
        self.console.print(f"[dim]   Repository: {escape(repository)}[/dim]")
        self.console.print(f"[dim]   Tag: {self.constants.IMAGE_TAG}[/dim]")
        return [
            ("image.repository", repository),
            ("image.tag", self.constants.IMAGE_TAG),
        ]

    def _print_args(self, args: Sequence[str]) -> None:
        self.console.print("[dim]   Arguments:[/dim]")
        for line in format_args(args):
            self.console.print(f"     {line}", markup=False, highlight=False)
