"""Loguru sink configuration for the CLI."""

import sys

from loguru import logger

LOG_FORMAT = "<dim>{time:HH:mm:ss}</dim> <level>{level: <8}</level> {message}"


def configure_logging(verbose: bool = False) -> None:
    """Route loguru output to stderr.

    Diagnostic logs are hidden unless --verbose is given; user-facing
    progress goes through the Rich console instead.
    """
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING", format=LOG_FORMAT)
