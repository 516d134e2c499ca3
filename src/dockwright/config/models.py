"""Resolved configuration model."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from dockwright.deployment.constants import DeploymentConstants
from dockwright.deployment.errors import ConfigurationError


class HelmFlavour(str, Enum):
    """Chart variants shipped in the chart store."""

    STATELESS = "stateless"
    STATEFUL = "stateful"

    @classmethod
    def values(cls) -> tuple[str, ...]:
        return tuple(member.value for member in cls)


class DeployConfig(BaseModel):
    """Configuration for a single deployment run.

    Built once by the resolver and read by every workflow component.
    The model is frozen; assigning to a field raises.

    The flavour is kept as a plain string so that an unsupported value is
    reported by preflight validation rather than at resolution time.
    """

    model_config = ConfigDict(frozen=True)

    artifact_name: str = ""
    helm_flavour: str = ""
    docker_namespace: str = ""
    docker_host: str = ""
    kubernetes_config: str = ""
    kubernetes_context: str = ""
    env: tuple[str, ...] = ()
    dry_run: bool = False
    run_docker_build: bool = True
    auto_approve: bool = False

    @property
    def image_repository(self) -> str:
        """Full image repository, ``host/namespace/artifact``.

        Raises:
            ConfigurationError: If host, namespace or artifact name is empty
        """
        if not (self.docker_host and self.docker_namespace and self.artifact_name):
            raise ConfigurationError(
                "docker host, docker namespace and artifact name must all be set "
                "to generate the image repository",
                details="Set --docker-host (or REGISTRY_HOST), --docker-namespace "
                "and --artifact-name, or disable the build with --docker-build=false",
            )
        return f"{self.docker_host}/{self.docker_namespace}/{self.artifact_name}"

    @property
    def image_tag(self) -> str:
        """Full image reference pushed to the registry."""
        return f"{self.image_repository}:{DeploymentConstants.IMAGE_TAG}"

    def chart_path(self, charts_root: Path = DeploymentConstants.CHARTS_ROOT) -> Path:
        """Path to the installed chart for this flavour."""
        return charts_root / self.helm_flavour

    def summary_rows(self) -> list[tuple[str, str]]:
        """Field/value pairs for the configuration summary."""
        rows = []
        for name, value in self:
            if isinstance(value, bool):
                rendered = "true" if value else "false"
            elif isinstance(value, tuple):
                rendered = ", ".join(value)
            else:
                rendered = value
            rows.append((name, rendered))
        return rows
