"""The ``deploy`` command.

One string option is generated per entry in the field registry, so the
command's flags always match what the resolver understands. Booleans and
lists are passed as strings (``--dry-run true``, ``--env staging,production``)
and coerced during resolution.
"""

import inspect
from collections.abc import Callable, Mapping

import typer

from dockwright.cli.context import get_cli_context
from dockwright.cli.shared.console import with_error_handling
from dockwright.config.fields import CONFIG_FIELDS, ConfigField, FieldKind
from dockwright.deployment.deployer import Deployer


def _help_text(field: ConfigField) -> str:
    text = field.description
    if field.kind is FieldKind.BOOL:
        text += f" (true/false, default: {field.default_value()})"
    if field.required:
        text += " [required]"
    return text


def _option_parameter(field: ConfigField) -> inspect.Parameter:
    return inspect.Parameter(
        field.param_name,
        inspect.Parameter.KEYWORD_ONLY,
        default=typer.Option(
            None,
            f"--{field.flag}",
            help=_help_text(field),
            show_default=False,
        ),
        annotation=str | None,
    )


def registry_options(func: Callable[..., None]) -> Callable[..., None]:
    """Expose one ``--<flag>`` option per registered field on a command.

    The command receives a ``ctx`` argument plus the option values as
    keyword arguments named after each field's parameter name.
    """
    parameters = [
        inspect.Parameter(
            "ctx", inspect.Parameter.POSITIONAL_OR_KEYWORD, annotation=typer.Context
        ),
        *(_option_parameter(field) for field in CONFIG_FIELDS),
    ]
    func.__signature__ = inspect.Signature(parameters, return_annotation=None)  # type: ignore[attr-defined]
    func.__annotations__ = {
        "ctx": typer.Context,
        **{field.param_name: str | None for field in CONFIG_FIELDS},
        "return": None,
    }
    return func


def supplied_flags(
    ctx: typer.Context, values: Mapping[str, str | None]
) -> dict[str, str]:
    """Collect only the flags the user actually passed.

    A flag counts as supplied when its parameter source is COMMANDLINE,
    even if its value equals the field default. Untouched flags are left
    out so the config file and defaults can apply.

    The source is compared by name: typer may run on a vendored Click
    whose ParameterSource is a different enum class.

    Returns:
        Mapping of flag name to raw string value
    """
    supplied: dict[str, str] = {}
    for field in CONFIG_FIELDS:
        source = ctx.get_parameter_source(field.param_name)
        if source is not None and source.name == "COMMANDLINE":
            supplied[field.flag] = values.get(field.param_name) or ""
    return supplied


@with_error_handling
@registry_options
def deploy(ctx: typer.Context, **flag_values: str | None) -> None:
    """Build, push and deploy the service in the current directory.

    Settings come from command-line flags, then .dockwright/config.yaml,
    then defaults. Registry credentials are read from REGISTRY_USERNAME and
    REGISTRY_PASSWORD.

    Examples:
        dockwright deploy --helm-flavour stateless --env staging
        dockwright deploy --env staging,production --auto-approve true
        dockwright deploy --dry-run true
    """
    cli = get_cli_context(ctx)
    deployer = Deployer(
        console=cli.console,
        commands=cli.commands,
        paths=cli.paths,
        constants=cli.constants,
    )
    deployer.deploy(supplied_flags(ctx, flag_values))
