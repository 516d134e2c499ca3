"""Error types raised by the deployment pipeline.

Every failure surfaced to the user is a DeploymentError carrying a short
message and optional recovery details. The CLI renders both and exits
non-zero.
"""

from __future__ import annotations


class DeploymentError(Exception):
    """Raised when a deployment operation fails."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ConfigurationError(DeploymentError):
    """Raised when configuration cannot be loaded or resolved."""


class ValidationError(DeploymentError):
    """Raised when a preflight check fails.

    Attributes:
        check: Name of the failing check (e.g., "Helm flavour")
    """

    def __init__(self, check: str, message: str, details: str | None = None):
        self.check = check
        super().__init__(message, details)


class ExternalToolError(DeploymentError):
    """Raised when an external tool exits non-zero or cannot be started.

    Attributes:
        step: Workflow step that failed (build, login, push, deploy)
        returncode: Exit code of the process, or None if it never started
    """

    def __init__(
        self,
        step: str,
        message: str,
        details: str | None = None,
        returncode: int | None = None,
    ):
        self.step = step
        self.returncode = returncode
        super().__init__(f"{step} failed: {message}", details)


class UserInputError(DeploymentError):
    """Raised when reading interactive input fails."""
