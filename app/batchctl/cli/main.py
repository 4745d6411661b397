"""batchctl command-line entry point.

Global options are parsed once here and handed to every command through
the root context as a :class:`~batchctl.cli.types.GlobalOptions`.
"""

from pathlib import Path
from typing import Annotated

import typer

from batchctl import __version__
from batchctl.cli.commands import archive, config, rename, transcode
from batchctl.cli.types import GlobalOptions
from batchctl.utils.formatting import configure_logging

app = typer.Typer(
    name="batchctl",
    help="Safe destructive batch operations: archive, transcode, deduplicate.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(archive.app, name="archive")
app.add_typer(transcode.app, name="transcode")
app.add_typer(rename.app, name="rename")
app.add_typer(config.app, name="config")


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"batchctl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version", "-V", callback=_print_version, is_eager=True, help="Show version and exit."
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log every decision (debug level).")
    ] = False,
    quiet: Annotated[
        bool, typer.Option("--quiet", "-q", help="Only print failed items and the summary.")
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Configuration file (default: ~/.config/batchctl/config.toml).",
        ),
    ] = None,
) -> None:
    """batchctl - safe destructive batch operations on file trees.

    Every command transforms items one at a time and deletes an original
    only after its artifact has been verified. Re-running a command is
    safe: items whose artifact already exists are skipped.
    """
    configure_logging(verbose=verbose)
    ctx.obj = GlobalOptions(verbose=verbose, quiet=quiet, config_path=config_path)


if __name__ == "__main__":
    app()
