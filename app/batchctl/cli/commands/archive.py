"""Archive command implementation.

Packs every immediate child of a directory (files and subdirectories)
into its own 7-Zip archive and deletes the original once the archiver
reports success.
"""

from pathlib import Path
from typing import Annotated

import typer

from batchctl.cli.types import (
    build_exclusion,
    execute_batch,
    get_config,
    require_directory,
    resolve_tool,
)
from batchctl.core.orchestrator import SafeReplaceOrchestrator
from batchctl.tools.locator import SEVEN_ZIP
from batchctl.transforms.archive import ArchiveTransform
from batchctl.transforms.base import TransformSpec

app = typer.Typer(
    help="Archive each top-level item with 7-Zip, then delete the original.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def archive(
    ctx: typer.Context,
    root: Annotated[
        Path | None,
        typer.Option(
            "--root",
            "-r",
            help="Directory whose children are archived (default: current directory).",
        ),
    ] = None,
    keep_source: Annotated[
        bool,
        typer.Option("--keep-source", "-k", help="Keep originals after archiving."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be archived."),
    ] = False,
    exclude_ext: Annotated[
        list[str] | None,
        typer.Option(
            "--exclude-ext",
            "-x",
            help="Extension to leave alone (repeatable, adds to config).",
        ),
    ] = None,
) -> None:
    """Archive every non-hidden item directly under ROOT."""
    config = get_config(ctx)
    root_dir = require_directory(root or Path.cwd(), "Root")

    tool = resolve_tool(config, SEVEN_ZIP, dry_run=dry_run)
    transform = ArchiveTransform(
        tool,
        suffix=config.archive.suffix,
        extra_args=tuple(config.archive.extra_args),
    )
    # Existing archives are never archived again
    blacklist = [*config.archive.blacklist, config.archive.suffix, *(exclude_ext or [])]
    exclude = build_exclusion(config, blacklist=blacklist)

    orchestrator = SafeReplaceOrchestrator(TransformSpec(transform, max_depth=1))
    execute_batch(
        ctx,
        orchestrator,
        root_dir,
        exclude,
        delete_source_on_success=not keep_source,
        dry_run=dry_run,
    )
