"""Transcode command implementation.

Recursively converts video files to the configured output format (WebM
by default) next to the originals, deleting each original once its
output has been verified.
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
from batchctl.tools.locator import FFMPEG
from batchctl.transforms.base import TransformSpec
from batchctl.transforms.transcode import TranscodeTransform

app = typer.Typer(
    help="Transcode video files with FFmpeg, then delete the originals.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def transcode(
    ctx: typer.Context,
    root: Annotated[
        Path | None,
        typer.Option(
            "--root",
            "-r",
            help="Directory to scan recursively (default: current directory).",
        ),
    ] = None,
    ext: Annotated[
        list[str] | None,
        typer.Option(
            "--ext",
            "-e",
            help="Input extension to convert (repeatable, replaces config list).",
        ),
    ] = None,
    output_ext: Annotated[
        str | None,
        typer.Option("--output-ext", "-o", help="Output extension (default: webm)."),
    ] = None,
    keep_source: Annotated[
        bool,
        typer.Option("--keep-source", "-k", help="Keep originals after transcoding."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be transcoded."),
    ] = False,
    skip_unreadable: Annotated[
        bool,
        typer.Option(
            "--skip-unreadable",
            help="Skip subdirectories that cannot be read instead of aborting.",
        ),
    ] = False,
) -> None:
    """Transcode every matching video under ROOT."""
    config = get_config(ctx)
    root_dir = require_directory(root or Path.cwd(), "Root")

    tool = resolve_tool(config, FFMPEG, dry_run=dry_run)
    transform = TranscodeTransform(
        tool,
        output_extension=output_ext or config.transcode.output_extension,
        params=tuple(config.transcode.params),
    )
    exclude = build_exclusion(config, whitelist=ext or config.transcode.extensions)

    orchestrator = SafeReplaceOrchestrator(
        TransformSpec(transform),
        skip_unreadable=skip_unreadable,
    )
    execute_batch(
        ctx,
        orchestrator,
        root_dir,
        exclude,
        delete_source_on_success=not keep_source,
        dry_run=dry_run,
    )
