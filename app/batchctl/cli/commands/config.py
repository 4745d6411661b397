"""Configuration commands.

Shows, locates and initializes the batchctl configuration file.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.syntax import Syntax

from batchctl.cli.types import EXIT_FATAL, get_config, get_options
from batchctl.core.config import BatchConfig, config_to_toml, save_config
from batchctl.core.errors import ConfigError
from batchctl.core.paths import get_config_path
from batchctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialize the configuration file.",
    no_args_is_help=True,
)


def _selected_path(ctx: typer.Context) -> Path:
    """Get the config path chosen by --config, or the default."""
    return get_options(ctx).config_path or get_config_path()


@app.command()
def show(ctx: typer.Context) -> None:
    """Print the effective configuration (file values merged with defaults)."""
    config = get_config(ctx)
    console.print(Syntax(config_to_toml(config), "toml", background_color="default"))


@app.command()
def path(ctx: typer.Context) -> None:
    """Print the configuration file path."""
    config_path = _selected_path(ctx)
    suffix = "" if config_path.exists() else " (not created yet)"
    console.print(f"{config_path}{suffix}", highlight=False)


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing configuration file."),
    ] = False,
) -> None:
    """Write a configuration file populated with the defaults."""
    config_path = _selected_path(ctx)

    if config_path.exists() and not force:
        print_info(f"Configuration already exists: {config_path} (use --force to overwrite)")
        raise typer.Exit(code=0)

    try:
        written = save_config(BatchConfig(), config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=EXIT_FATAL) from e

    print_success(f"Configuration written to {written}")
