"""CLI command implementations."""

from .deploy import deploy

__all__ = ["deploy"]
