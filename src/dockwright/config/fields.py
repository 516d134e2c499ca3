"""Declarative registry of every configuration option.

Each option is described once by a ConfigField. The registry drives flag
registration on the ``deploy`` command, precedence resolution and the
required-field preflight check, so adding an option means adding one entry
to CONFIG_FIELDS (and the matching attribute on DeployConfig).
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import yaml


class FieldKind(Enum):
    """How a raw string value is coerced onto DeployConfig."""

    STRING = "string"
    BOOL = "bool"
    LIST = "list"


def _empty() -> str:
    return ""


def _constant(value: str) -> Callable[[], str]:
    def provider() -> str:
        return value

    return provider


def current_dir_name() -> str:
    """Name of the working directory, used as the default artifact name."""
    try:
        return Path.cwd().name
    except OSError:
        return ""


def default_kubeconfig_path() -> str:
    """Return ~/.kube/config, or an empty string if there is no home directory."""
    try:
        return str(Path.home() / ".kube" / "config")
    except RuntimeError:
        return ""


def current_kube_context() -> str:
    """Read ``current-context`` from the default kubeconfig.

    Returns:
        The current context name, or an empty string if the kubeconfig is
        missing, unreadable or malformed
    """
    path = default_kubeconfig_path()
    if not path:
        return ""
    try:
        content = Path(path).read_text()
        data = yaml.safe_load(content)
    except (OSError, yaml.YAMLError):
        return ""
    if not isinstance(data, dict):
        return ""
    return str(data.get("current-context") or "")


def registry_host_from_env() -> str:
    """Registry host from the REGISTRY_HOST environment variable."""
    return os.environ.get("REGISTRY_HOST", "")


@dataclass(frozen=True)
class ConfigField:
    """Metadata for a single configuration option.

    Attributes:
        name: Attribute name on DeployConfig
        config_path: Dotted key in .dockwright/config.yaml
        flag: CLI flag name without the leading dashes
        description: Help text for the flag
        required: Whether preflight validation requires a non-empty value
        default: Zero-argument provider of the default string value
        kind: How the resolved string is coerced
    """

    name: str
    config_path: str
    flag: str
    description: str
    required: bool = False
    default: Callable[[], str] = _empty
    kind: FieldKind = FieldKind.STRING

    @property
    def param_name(self) -> str:
        """Python parameter name used for the flag on the CLI command."""
        return self.flag.replace("-", "_")

    def default_value(self) -> str:
        return self.default()


CONFIG_FIELDS: tuple[ConfigField, ...] = (
    ConfigField(
        name="artifact_name",
        config_path="artifactName",
        flag="artifact-name",
        description="Name of the artifact",
        required=True,
        default=current_dir_name,
    ),
    ConfigField(
        name="helm_flavour",
        config_path="helm.flavour",
        flag="helm-flavour",
        description="Helm chart flavour (stateful or stateless)",
        required=True,
    ),
    ConfigField(
        name="docker_namespace",
        config_path="docker.namespace",
        flag="docker-namespace",
        description="Docker registry namespace",
    ),
    ConfigField(
        name="docker_host",
        config_path="docker.host",
        flag="docker-host",
        description="Docker registry host",
        default=registry_host_from_env,
    ),
    ConfigField(
        name="kubernetes_config",
        config_path="kubernetes.config",
        flag="kubernetes-config",
        description="Path to kubernetes config file",
        required=True,
        default=default_kubeconfig_path,
    ),
    ConfigField(
        name="kubernetes_context",
        config_path="kubernetes.context",
        flag="kubernetes-context",
        description="Kubernetes context to use",
        required=True,
        default=current_kube_context,
    ),
    ConfigField(
        name="env",
        config_path="env",
        flag="env",
        description="Comma-separated list of environments (e.g., staging,production)",
        kind=FieldKind.LIST,
    ),
    ConfigField(
        name="dry_run",
        config_path="dry-run",
        flag="dry-run",
        description="Exercise the deployment pipeline without mutating resources",
        default=_constant("false"),
        kind=FieldKind.BOOL,
    ),
    ConfigField(
        name="run_docker_build",
        config_path="docker.build",
        flag="docker-build",
        description="Whether to run Docker build",
        default=_constant("true"),
        kind=FieldKind.BOOL,
    ),
    ConfigField(
        name="auto_approve",
        config_path="auto-approve",
        flag="auto-approve",
        description="Skip confirmation prompts and proceed automatically",
        default=_constant("false"),
        kind=FieldKind.BOOL,
    ),
)


def get_field(name: str) -> ConfigField:
    """Look up a field descriptor by attribute name.

    Raises:
        KeyError: If no descriptor has that name
    """
    for field in CONFIG_FIELDS:
        if field.name == name:
            return field
    raise KeyError(name)
