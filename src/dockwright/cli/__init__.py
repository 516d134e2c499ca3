"""Main CLI application module.

This module provides the main entry point for the dockwright CLI.

Commands:
- deploy: Build and push the service image, then deploy it with Helm
"""

from typing import Annotated

import typer

from .commands import deploy
from .context import CLIContext, build_cli_context
from .shared import configure_logging

# Create the main CLI application
app = typer.Typer(
    help="🐳 Dockwright - Docker & Helm deployment orchestration",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command(name="deploy")(deploy)


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show debug logs (config resolution, executed commands)",
        ),
    ] = False,
) -> None:
    """Dockwright is a modular CLI for Docker & Helm orchestration."""
    configure_logging(verbose)
    if not isinstance(ctx.obj, CLIContext):
        ctx.obj = build_cli_context()


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
