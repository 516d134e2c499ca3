"""Helm command abstractions.

This module builds and runs ``helm upgrade --install`` invocations.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from .types import CommandResult

if TYPE_CHECKING:
    from .runner import CommandRunner


class HelmCommands:
    """Helm-related shell commands."""

    def __init__(self, runner: CommandRunner, binary: str = "helm") -> None:
        """Initialize Helm commands.

        Args:
            runner: Command runner for executing shell commands
            binary: Helm executable name
        """
        self._runner = runner
        self.binary = binary

    def upgrade_install_args(
        self,
        release_name: str,
        chart_path: Path,
        *,
        kubeconfig: str,
        kube_context: str | None = None,
        value_files: Sequence[Path] = (),
        set_values: Sequence[tuple[str, str]] = (),
        dry_run: bool = False,
    ) -> list[str]:
        """Arguments for ``helm upgrade --install`` (without the binary).

        Overrides passed in set_values come after every values file so they
        take precedence in Helm's own merge order.

        Args:
            release_name: Name for the Helm release
            chart_path: Path to the Helm chart directory
            kubeconfig: Path to the kubeconfig file
            kube_context: Optional kubeconfig context
            value_files: Values files, in precedence order
            set_values: ``--set`` key/value pairs appended last
            dry_run: Append ``--dry-run``

        Example:
            >>> helm.upgrade_install_args(
            ...     "svc",
            ...     Path("/charts/stateless"),
            ...     kubeconfig="/home/me/.kube/config",
            ... )
            ['upgrade', '--install', 'svc', '/charts/stateless', '--kubeconfig', '/home/me/.kube/config']
        """
        args = [
            "upgrade",
            "--install",
            release_name,
            str(chart_path),
            "--kubeconfig",
            kubeconfig,
        ]

        if kube_context:
            args.extend(["--kube-context", kube_context])

        for vf in value_files:
            args.extend(["--values", str(vf)])

        for key, value in set_values:
            args.extend(["--set", f"{key}={value}"])

        if dry_run:
            args.append("--dry-run")

        return args

    def run(self, args: Sequence[str]) -> CommandResult:
        """Run helm with the given arguments, streaming output."""
        return self._runner.run([self.binary, *args], capture_output=False)
