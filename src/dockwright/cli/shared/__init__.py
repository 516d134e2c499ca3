"""Shared CLI helpers: console output, error handling and logging."""

from .console import CLIConsole, console, with_error_handling
from .log_config import configure_logging

__all__ = ["CLIConsole", "console", "with_error_handling", "configure_logging"]
