"""Preflight validation before deployment.

Checks run in a fixed order and stop at the first failure:

1. Configuration - required fields are set
2. Helm flavour - flavour is a known chart variant
3. Environment variables - registry credentials are exported
4. Environment values files - one values file per requested environment
5. Kubernetes context - configured context exists in the kubeconfig
6. System tools - docker and helm are installed and the daemon is up
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import yaml

from dockwright.config.fields import CONFIG_FIELDS
from dockwright.config.models import DeployConfig, HelmFlavour

from .constants import DeploymentConstants, DeploymentPaths
from .errors import ValidationError

if TYPE_CHECKING:
    from .shell_commands import ShellCommands


@dataclass
class ValidationResult:
    """Outcome of a single preflight check."""

    name: str
    icon: str
    message: str
    error: ValidationError | None = None

    @property
    def passed(self) -> bool:
        return self.error is None


class PreflightValidator:
    """Validates configuration and host environment before deployment.

    Each check is independent and raises ValidationError on failure.
    validate_all() runs them in order and stops at the first failure so
    the reported problem is always the earliest one.
    """

    def __init__(
        self,
        config: DeployConfig,
        commands: ShellCommands,
        paths: DeploymentPaths,
        constants: DeploymentConstants | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the validator.

        Args:
            config: Resolved deployment configuration
            commands: Shell command executor
            paths: Project path resolver
            constants: Optional deployment constants
            environ: Environment to read credentials from (defaults to os.environ)
        """
        self.config = config
        self.commands = commands
        self.paths = paths
        self.constants = constants or DeploymentConstants()
        self.environ = os.environ if environ is None else environ

    @property
    def checks(self) -> list[tuple[str, str, Callable[[], None]]]:
        """Ordered (name, icon, check) triples."""
        return [
            ("Configuration", "✅", self.validate_config),
            ("Helm flavour", "⎈ ", self.validate_helm_flavour),
            ("Environment variables", "🔐", self.validate_env_vars),
            ("Environment values files", "📄", self.validate_env_values_files),
            ("Kubernetes context", "☸️ ", self.validate_kube_context),
            ("System tools", "🛠️ ", self.validate_tools),
        ]

    def validate_all(self) -> tuple[list[ValidationResult], ValidationError | None]:
        """Run all checks in order, stopping at the first failure.

        Returns:
            (results, first_error) - results holds every check that ran,
            the last one being the failure if there was one
        """
        results: list[ValidationResult] = []

        for name, icon, check in self.checks:
            error: ValidationError | None = None
            try:
                check()
            except ValidationError as e:
                error = e

            results.append(
                ValidationResult(
                    name=name,
                    icon=icon,
                    message=f"{icon} Validated - {name}",
                    error=error,
                )
            )
            if error is not None:
                return results, error

        return results, None

    # =========================================================================
    # Checks
    # =========================================================================

    def validate_config(self) -> None:
        for field in CONFIG_FIELDS:
            if not field.required:
                continue
            if not getattr(self.config, field.name):
                raise ValidationError(
                    "Configuration",
                    f"configuration error: required field '{field.name}' "
                    f"(flag: --{field.flag}) is not set",
                    details=f"Pass --{field.flag} or set '{field.config_path}' "
                    f"in {self.paths.relative(self.paths.config_yaml)}",
                )

    def validate_helm_flavour(self) -> None:
        flavour = self.config.helm_flavour
        if flavour not in HelmFlavour.values():
            raise ValidationError(
                "Helm flavour",
                "invalid helm flavour: expected 'stateful' or 'stateless', "
                f"but got '{flavour}'",
            )

    def validate_env_vars(self) -> None:
        for env_var in self.constants.registry_credential_envs:
            if not self.environ.get(env_var):
                raise ValidationError(
                    "Environment variables",
                    f"required environment variable '{env_var}' is not set",
                    details=f"Please export {env_var} before running dockwright",
                )

    def validate_env_values_files(self) -> None:
        for env in self.config.env:
            path = self.paths.env_values(env)
            if not path.is_file():
                raise ValidationError(
                    "Environment values files",
                    "environment values file not found at path: "
                    f"{self.paths.relative(path)}",
                    details="Please ensure the file exists in the "
                    f"{self.paths.relative(self.paths.helm_values_dir)} directory",
                )

    def validate_kube_context(self) -> None:
        context = self.config.kubernetes_context
        if not context:
            return

        kubeconfig = Path(self.config.kubernetes_config)
        try:
            content = kubeconfig.read_text()
        except OSError as e:
            raise ValidationError(
                "Kubernetes context",
                f"failed to read kubeconfig file at path '{kubeconfig}'",
                details=str(e),
            ) from e

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValidationError(
                "Kubernetes context",
                f"failed to parse kubeconfig file at '{kubeconfig}'",
                details=f"The file may be corrupted or not valid YAML: {e}",
            ) from e

        if context not in self._context_names(data):
            raise ValidationError(
                "Kubernetes context",
                f"kubernetes context '{context}' not found in kubeconfig "
                f"at '{kubeconfig}'",
                details="Use 'kubectl config get-contexts' to see available contexts",
            )

    def validate_tools(self) -> None:
        for tool in self.constants.required_tools:
            if not self.commands.tool_available(tool):
                raise ValidationError(
                    "System tools",
                    f"required tool '{tool}' is not installed or not found in PATH",
                    details=f"Please install {tool} to proceed",
                )

        if not self.commands.docker.daemon_running():
            raise ValidationError(
                "System tools",
                "docker daemon is not running",
                details="Please start Docker Desktop or the Docker daemon and try again",
            )

    @staticmethod
    def _context_names(kubeconfig: object) -> set[str]:
        if not isinstance(kubeconfig, dict):
            return set()
        contexts = kubeconfig.get("contexts") or []
        return {
            str(entry["name"])
            for entry in contexts
            if isinstance(entry, dict) and entry.get("name") is not None
        }
