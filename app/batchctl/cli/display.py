"""Shared Rich display functions for batch results.

Provides the per-item outcome line and the end-of-run summary used by
every batch command (archive, transcode, rename).
"""

from rich.markup import escape
from rich.table import Table

from batchctl.models.outcome import BatchReport, ItemResult, OutcomeStatus
from batchctl.utils.formatting import console, print_success


def format_item_line(result: ItemResult) -> str:
    """Format one processed item as a Rich markup line.

    Args:
        result: Result of one processed entry.

    Returns:
        Markup string such as ``"[success]ok[/] a.mov -> a.webm (source deleted)"``.
    """
    outcome = result.outcome
    source = escape(str(result.entry.path))
    artifact = escape(str(outcome.artifact_path)) if outcome.artifact_path else None

    if outcome.status == OutcomeStatus.SKIPPED:
        reason = outcome.skip_reason.value.replace("_", " ") if outcome.skip_reason else "-"
        return f"[skipped]skip[/]  {source} [muted]({reason})[/]"

    if outcome.status == OutcomeStatus.PLANNED:
        return f"[planned]plan[/]  {source} -> {artifact}"

    if outcome.status == OutcomeStatus.FAILED:
        kind = outcome.failure.value.replace("_", " ") if outcome.failure else "error"
        detail = escape(_last_line(outcome.message)) if outcome.message else ""
        line = f"[error]FAIL[/]  {source} [muted]({kind})[/]"
        return f"{line} {detail}" if detail else line

    line = f"[success]ok[/]    {source} -> {artifact}"
    if result.source_deleted:
        line = f"{line} [deleted](source deleted)[/]"
    return line


def print_item(result: ItemResult, *, quiet: bool = False) -> None:
    """Print one processed item. Quiet mode only prints failures."""
    if quiet and result.outcome.status != OutcomeStatus.FAILED:
        return
    console.print(format_item_line(result), highlight=False)


def create_summary_table(report: BatchReport, *, title: str = "Summary") -> Table:
    """Create a Rich table with per-status counts.

    Args:
        report: Aggregated batch results.
        title: Table title.

    Returns:
        Rich Table configured for summary display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Outcome")
    table.add_column("Count", justify="right")

    table.add_row("[success]succeeded[/]", str(report.succeeded))
    table.add_row("[skipped]skipped[/]", str(report.skipped))
    table.add_row("[error]failed[/]", str(report.failed))
    if report.planned:
        table.add_row("[planned]planned[/]", str(report.planned))
    table.add_row("[deleted]sources deleted[/]", str(report.deleted))

    return table


def print_batch_summary(report: BatchReport, *, dry_run: bool = False) -> None:
    """Print the end-of-run summary.

    Args:
        report: Aggregated batch results.
        dry_run: Whether the run only planned work.
    """
    if not report.results:
        console.print("[muted]Nothing to process.[/]")
        return

    title = "Summary (Dry Run)" if dry_run else "Summary"
    console.print()
    console.print(create_summary_table(report, title=title))

    if dry_run:
        console.print(f"\n[info]Dry-run: {report.planned} item(s) would be processed.[/]")
    elif report.has_failures:
        console.print(
            f"\n[success]{report.succeeded} succeeded[/], [error]{report.failed} failed[/]"
        )
    else:
        print_success(f"All {len(report.results)} item(s) processed successfully.")


def _last_line(message: str) -> str:
    """Return the last non-empty line of tool output, which usually holds the error."""
    lines = [line for line in message.strip().splitlines() if line.strip()]
    return lines[-1] if lines else ""
