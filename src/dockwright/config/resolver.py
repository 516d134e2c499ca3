"""Configuration resolution.

Merges explicitly supplied CLI flags, the project config file and field
defaults into a DeployConfig. Precedence per field, highest first:

1. A flag the user actually passed on the command line
2. The value at the field's path in .dockwright/config.yaml
3. The field's default provider

Only flags recorded as supplied by the CLI layer take part in step 1, so a
flag explicitly set to its default value still overrides the file while an
untouched flag never does.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from loguru import logger

from dockwright.deployment.errors import ConfigurationError

from .fields import CONFIG_FIELDS, ConfigField, FieldKind
from .loader import lookup
from .models import DeployConfig

_TRUE_VALUES = frozenset({"true", "1", "yes"})


def parse_bool(value: str) -> bool:
    """Coerce a flag/config string to a boolean.

    Case-insensitive "true", "1" and "yes" are true; anything else is false.
    """
    return value.strip().lower() in _TRUE_VALUES


def parse_list(value: str, sep: str = ",") -> list[str]:
    """Split a separated string, trimming items and dropping empty ones.

    Order and duplicates are preserved.
    """
    return [item.strip() for item in value.split(sep) if item.strip()]


_COERCERS: dict[FieldKind, Callable[[str], Any]] = {
    FieldKind.STRING: lambda value: value,
    FieldKind.BOOL: parse_bool,
    FieldKind.LIST: lambda value: tuple(parse_list(value)),
}


def _build_setters(
    fields: tuple[ConfigField, ...],
) -> dict[str, Callable[[str], Any]]:
    """Map each DeployConfig attribute to the coercer for its field."""
    return {
        field.name: _COERCERS[field.kind]
        for field in fields
        if field.name in DeployConfig.model_fields
    }


_SETTERS = _build_setters(CONFIG_FIELDS)


def resolve_field(
    field: ConfigField,
    cli_values: Mapping[str, str],
    file_values: Mapping[str, Any],
) -> tuple[str, str]:
    """Pick the raw string value for one field.

    Args:
        field: Field descriptor
        cli_values: Flags explicitly supplied on the command line, by flag name
        file_values: Parsed project config tree

    Returns:
        (source, value) where source is "cli", "file" or "default"
    """
    if field.flag in cli_values:
        return "cli", cli_values[field.flag]

    found, value = lookup(file_values, field.config_path)
    if found:
        return "file", value

    return "default", field.default_value()


def resolve_config(
    cli_values: Mapping[str, str] | None = None,
    file_values: Mapping[str, Any] | None = None,
    fields: tuple[ConfigField, ...] = CONFIG_FIELDS,
) -> DeployConfig:
    """Resolve every registered field into a DeployConfig.

    Required fields are not checked here; that is left to preflight
    validation.

    Args:
        cli_values: Flags explicitly supplied on the command line, by flag name
        file_values: Parsed project config tree
        fields: Field registry to resolve against

    Returns:
        Immutable resolved configuration

    Raises:
        ConfigurationError: If a descriptor has no matching DeployConfig attribute
    """
    cli_values = cli_values or {}
    file_values = file_values or {}
    setters = _SETTERS if fields is CONFIG_FIELDS else _build_setters(fields)

    resolved: dict[str, Any] = {}
    for field in fields:
        setter = setters.get(field.name)
        if setter is None:
            raise ConfigurationError(
                f"Failed to set config field {field.name}",
                details=f"Field {field.name} not found in DeployConfig",
            )
        source, raw = resolve_field(field, cli_values, file_values)
        resolved[field.name] = setter(raw)
        logger.debug(f"{field.name} = {raw!r} (from {source})")

    return DeployConfig(**resolved)
