"""Project-local configuration file loading.

The configuration file is optional. It is parsed once and the resulting
tree is handed to the resolver explicitly.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from dockwright.deployment.errors import ConfigurationError


def load_project_config(file_path: Path) -> dict[str, Any]:
    """Load .dockwright/config.yaml into a nested dictionary.

    Args:
        file_path: Path to the YAML file

    Returns:
        Parsed key-value tree; empty if the file is missing or empty

    Raises:
        ConfigurationError: If the file cannot be read, is not valid YAML,
            or its top level is not a mapping
    """
    if not file_path.is_file():
        logger.debug(f"No project config at {file_path}, using flags and defaults")
        return {}

    try:
        content = file_path.read_text()
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read config file {file_path}", details=str(e)
        ) from e

    try:
        loaded = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Error parsing YAML in {file_path}", details=str(e)
        ) from e

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigurationError(
            f"Invalid config file {file_path}: top level must be a mapping",
            details=f"Got {type(loaded).__name__}",
        )

    logger.info(f"Loaded project config from {file_path}")
    return loaded


def _to_string(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list | tuple):
        return ",".join(_to_string(item) for item in value)
    return str(value)


def lookup(tree: Mapping[str, Any], dotted_path: str) -> tuple[bool, str]:
    """Find a value in a nested mapping by dotted key path.

    Scalars are returned as strings and lists are joined with commas so
    every value goes through the same coercion as a CLI flag.

    Args:
        tree: Parsed configuration tree
        dotted_path: Key path such as "helm.flavour"

    Returns:
        (found, value) - found is False when any key is missing or the
        value is null
    """
    node: Any = tree
    for key in dotted_path.split("."):
        if not isinstance(node, Mapping) or key not in node:
            return False, ""
        node = node[key]

    if node is None:
        return False, ""
    return True, _to_string(node)
