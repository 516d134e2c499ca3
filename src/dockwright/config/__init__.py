"""Configuration: field registry, file loading and resolution.

Usage:
    from dockwright.config import load_project_config, resolve_config

    file_values = load_project_config(Path(".dockwright/config.yaml"))
    config = resolve_config({"env": "staging"}, file_values)
"""

from .fields import CONFIG_FIELDS, ConfigField, FieldKind, get_field
from .loader import load_project_config, lookup
from .models import DeployConfig, HelmFlavour
from .resolver import parse_bool, parse_list, resolve_config

__all__ = [
    "CONFIG_FIELDS",
    "ConfigField",
    "FieldKind",
    "get_field",
    "load_project_config",
    "lookup",
    "DeployConfig",
    "HelmFlavour",
    "parse_bool",
    "parse_list",
    "resolve_config",
]
