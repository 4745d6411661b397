"""Shared types and utilities for CLI commands.

This module provides the helpers every batch command uses: loading the
configuration, resolving external tools, building exclusion policies,
and driving an orchestrator with consistent output and exit codes.

Exit codes:
    0: every item was skipped or succeeded.
    1: at least one item failed (sources of failed items are untouched).
    2: fatal error (configuration, missing tool, unreadable directory).
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

import typer

from batchctl.cli.display import print_batch_summary, print_item
from batchctl.core.config import BatchConfig, load_config
from batchctl.core.errors import ConfigError, DirectoryReadError, ToolNotFoundError
from batchctl.core.orchestrator import SafeReplaceOrchestrator
from batchctl.filesystem.exclusion import ExclusionPolicy
from batchctl.models.outcome import BatchReport
from batchctl.tools.locator import FFMPEG, SEVEN_ZIP, ToolBinding, ToolLocator, ToolSpec
from batchctl.utils.formatting import console, print_error, print_info

logger = logging.getLogger(__name__)

EXIT_ITEM_FAILURES = 1
EXIT_FATAL = 2


@dataclass(frozen=True, slots=True)
class GlobalOptions:
    """Options given before the command name.

    Attributes:
        verbose: Debug logging enabled.
        quiet: Only failed items and the summary are printed.
        config_path: Explicit configuration file, or None for the default.
    """

    verbose: bool = False
    quiet: bool = False
    config_path: Path | None = None


def get_options(ctx: typer.Context) -> GlobalOptions:
    """Get the global options stored on the root context."""
    obj = ctx.find_root().obj
    return obj if isinstance(obj, GlobalOptions) else GlobalOptions()


def get_config(ctx: typer.Context) -> BatchConfig:
    """Load the configuration selected by the global ``--config`` option.

    Raises:
        typer.Exit: With code 2 if the configuration is invalid.
    """
    try:
        return load_config(get_options(ctx).config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=EXIT_FATAL) from e


def build_locator(config: BatchConfig) -> ToolLocator:
    """Create a ToolLocator honoring configured tool paths and search roots."""
    overrides: dict[str, str] = {}
    if config.tools.seven_zip:
        overrides[SEVEN_ZIP.name] = config.tools.seven_zip
    if config.tools.ffmpeg:
        overrides[FFMPEG.name] = config.tools.ffmpeg
    return ToolLocator(
        extra_search_roots=tuple(config.tools.search_roots),
        overrides=overrides,
    )


def resolve_tool(config: BatchConfig, spec: ToolSpec, *, dry_run: bool = False) -> ToolBinding:
    """Resolve an external tool once for the whole run.

    Dry runs never invoke the tool, so no probing is done and the first
    bare command name is bound as a placeholder.

    Raises:
        typer.Exit: With code 2 if no candidate works.
    """
    if dry_run:
        return ToolBinding(name=spec.name, executable=spec.commands[0])

    try:
        binding = build_locator(config).resolve(spec)
    except ToolNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=EXIT_FATAL) from e

    logger.debug("Using %s: %s", binding.name, binding.executable)
    return binding


def build_exclusion(
    config: BatchConfig,
    *,
    blacklist: Iterable[str] = (),
    whitelist: Iterable[str] = (),
    excluded_paths: Iterable[Path] = (),
) -> ExclusionPolicy:
    """Build the run's exclusion policy from config plus command settings."""
    return ExclusionPolicy.build(
        skip_hidden=config.skip_hidden,
        blacklist=blacklist,
        whitelist=whitelist,
        patterns=config.exclude_patterns,
        excluded_paths=excluded_paths,
    )


def require_directory(path: Path, label: str) -> Path:
    """Resolve ``path`` and require it to be an existing directory.

    Raises:
        typer.Exit: With code 2 if the path is not a directory.
    """
    resolved = path.expanduser().resolve()
    if not resolved.is_dir():
        print_error(f"{label} is not a directory: {resolved}")
        raise typer.Exit(code=EXIT_FATAL)
    return resolved


def execute_batch(
    ctx: typer.Context,
    orchestrator: SafeReplaceOrchestrator,
    root: Path,
    exclude: ExclusionPolicy,
    *,
    delete_source_on_success: bool,
    dry_run: bool,
) -> BatchReport:
    """Run a batch, printing one line per item and a final summary.

    Raises:
        typer.Exit: With code 2 on a fatal walk error, or code 1 if any
            item failed.
    """
    quiet = get_options(ctx).quiet

    if not quiet:
        mode = "dry-run" if dry_run else ("replace" if delete_source_on_success else "copy")
        print_info(f"{orchestrator.transform.name}: {root} ({mode})")

    report = BatchReport(results=[])
    try:
        for result in orchestrator.run(
            root,
            exclude,
            delete_source_on_success=delete_source_on_success,
            dry_run=dry_run,
        ):
            report.results.append(result)
            print_item(result, quiet=quiet)
    except DirectoryReadError as e:
        print_batch_summary(report, dry_run=dry_run)
        print_error(str(e))
        raise typer.Exit(code=EXIT_FATAL) from e

    print_batch_summary(report, dry_run=dry_run)

    if report.has_failures:
        console.print("[muted]Sources of failed items were left untouched.[/]")
        raise typer.Exit(code=EXIT_ITEM_FAILURES)

    return report
