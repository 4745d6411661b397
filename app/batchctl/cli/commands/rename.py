"""Rename command implementation.

Copies files into a target directory under content-addressed names
(base-58 BLAKE3 digest plus the original extension). Byte-identical files
collapse into one target. With ``--move`` the originals are deleted once
their copy is verified; ``--copy`` keeps them even when the config says
otherwise.
"""

from pathlib import Path
from typing import Annotated

import typer

from batchctl.cli.types import (
    EXIT_FATAL,
    build_exclusion,
    execute_batch,
    get_config,
    require_directory,
)
from batchctl.core.orchestrator import SafeReplaceOrchestrator
from batchctl.transforms.base import TransformSpec
from batchctl.transforms.rename import HashRenameTransform
from batchctl.utils.formatting import print_error

app = typer.Typer(
    help="Copy files to content-addressed names, deduplicating identical files.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def rename(
    ctx: typer.Context,
    source: Annotated[
        Path | None,
        typer.Option(
            "--source",
            "-s",
            help="Directory to scan recursively (default: current directory).",
        ),
    ] = None,
    target: Annotated[
        Path | None,
        typer.Option("--target", "-t", help="Directory receiving the renamed copies."),
    ] = None,
    ext: Annotated[
        list[str] | None,
        typer.Option(
            "--ext",
            "-e",
            help="Extension to include (repeatable, replaces config list).",
        ),
    ] = None,
    move: Annotated[
        bool | None,
        typer.Option(
            "--move/--copy",
            "-m",
            help="Delete originals after copying (cut mode). Default from config.",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be copied."),
    ] = False,
    skip_unreadable: Annotated[
        bool,
        typer.Option(
            "--skip-unreadable",
            help="Skip subdirectories that cannot be read instead of aborting.",
        ),
    ] = False,
) -> None:
    """Copy every matching file under SOURCE into TARGET by content hash."""
    config = get_config(ctx)
    source_dir = require_directory(source or Path.cwd(), "Source")
    target_dir = (target or config.rename.target_dir).expanduser().resolve()

    if target_dir.exists() and not target_dir.is_dir():
        print_error(f"Target is not a directory: {target_dir}")
        raise typer.Exit(code=EXIT_FATAL)

    transform = HashRenameTransform(target_dir)
    # The target may live inside the source tree; never walk it
    exclude = build_exclusion(
        config,
        whitelist=ext or config.rename.extensions,
        excluded_paths=[target_dir],
    )

    orchestrator = SafeReplaceOrchestrator(
        TransformSpec(transform),
        skip_unreadable=skip_unreadable,
    )
    execute_batch(
        ctx,
        orchestrator,
        source_dir,
        exclude,
        delete_source_on_success=config.rename.move if move is None else move,
        dry_run=dry_run,
    )
