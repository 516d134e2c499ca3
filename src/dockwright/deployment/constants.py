"""Deployment constants and project layout.

This module centralizes the magic strings and paths used throughout the
deployment process: tool names, credential variables and the location of
the chart store and project-local configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class DeploymentConstants:
    """Constants for Docker/Helm deployment.

    All attributes are class-level and immutable.
    """

    # External tools
    DOCKER_BIN: str = "docker"
    HELM_BIN: str = "helm"

    # Registry credentials, read from the environment on every use
    REGISTRY_HOST_ENV: str = "REGISTRY_HOST"
    REGISTRY_USERNAME_ENV: str = "REGISTRY_USERNAME"
    REGISTRY_PASSWORD_ENV: str = "REGISTRY_PASSWORD"

    # Installed chart store, one subdirectory per flavour
    CHARTS_ROOT: Path = Path("/usr/local/share/dockwright/charts")

    # Project-local layout
    PROJECT_DIR: str = ".dockwright"
    CONFIG_FILE: str = "config.yaml"
    HELM_DIR: str = "helm"
    BASE_VALUES_FILE: str = "values.yaml"
    VALUES_SUFFIX: str = ".values.yaml"
    DOCKERFILE: str = "Dockerfile"
    ENV_FILE: str = ".env"

    # Image tag applied to every build
    IMAGE_TAG: str = "latest"

    @property
    def registry_credential_envs(self) -> tuple[str, ...]:
        """Get credential variable names in check order."""
        return (self.REGISTRY_USERNAME_ENV, self.REGISTRY_PASSWORD_ENV)

    @property
    def required_tools(self) -> tuple[str, ...]:
        """Get executables that must be on PATH."""
        return (self.DOCKER_BIN, self.HELM_BIN)


class DeploymentPaths:
    """Path resolver for project-local deployment files.

    All paths are derived from the project root (the service directory
    being deployed) and the chart store root.
    """

    def __init__(
        self,
        project_root: Path,
        constants: DeploymentConstants | None = None,
        charts_root: Path | None = None,
    ) -> None:
        """Initialize deployment paths.

        Args:
            project_root: Path to the service directory
            constants: Optional deployment constants (uses defaults if not provided)
            charts_root: Optional override for the installed chart store
        """
        self.project_root = project_root
        self._constants = constants or DeploymentConstants()

        self.project_dir = project_root / self._constants.PROJECT_DIR
        self.helm_values_dir = self.project_dir / self._constants.HELM_DIR
        self.charts_root = charts_root or self._constants.CHARTS_ROOT

    @property
    def config_yaml(self) -> Path:
        """Get path to .dockwright/config.yaml."""
        return self.project_dir / self._constants.CONFIG_FILE

    @property
    def dockerfile(self) -> Path:
        """Get path to the Dockerfile in the project root."""
        return self.project_root / self._constants.DOCKERFILE

    @property
    def env_file(self) -> Path:
        """Get path to .env file."""
        return self.project_root / self._constants.ENV_FILE

    @property
    def base_values(self) -> Path:
        """Get path to the optional base values file."""
        return self.helm_values_dir / self._constants.BASE_VALUES_FILE

    def env_values(self, env: str) -> Path:
        """Get path to the values file for one environment."""
        return self.helm_values_dir / f"{env}{self._constants.VALUES_SUFFIX}"

    def chart(self, flavour: str) -> Path:
        """Get path to the installed chart for a flavour."""
        return self.charts_root / flavour

    def relative(self, path: Path) -> Path:
        """Express a path relative to the project root when possible."""
        try:
            return path.relative_to(self.project_root)
        except ValueError:
            return path
