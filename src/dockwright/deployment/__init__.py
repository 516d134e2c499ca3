"""Deployment pipeline for Docker images and Helm releases.

The package is organized into modules for each concern:

- shell_commands: Abstractions for docker and helm invocations
- validator: Preflight checks run before anything is built
- image_builder: Docker build, registry login and push
- helm_release: Helm chart deployment
- deployer: Pipeline driver tying the steps together

The Deployer class in deployer.py is the entry point:

    from dockwright.deployment.deployer import Deployer

    deployer = Deployer(console, ShellCommands(root), DeploymentPaths(root))
    deployer.deploy({"env": "staging"})
"""

from .constants import DeploymentConstants, DeploymentPaths
from .errors import (
    ConfigurationError,
    DeploymentError,
    ExternalToolError,
    UserInputError,
    ValidationError,
)

__all__ = [
    "DeploymentConstants",
    "DeploymentPaths",
    "DeploymentError",
    "ConfigurationError",
    "ValidationError",
    "ExternalToolError",
    "UserInputError",
]
