"""Unit tests for CLI display helpers."""

from pathlib import Path

from batchctl.cli.display import create_summary_table, format_item_line
from batchctl.filesystem.models import EntryKind, FileSystemEntry
from batchctl.models.outcome import (
    BatchReport,
    FailureKind,
    ItemResult,
    OperationOutcome,
    SkipReason,
)

ENTRY = FileSystemEntry.from_path(Path("/data/a.mov"), EntryKind.FILE)


class TestFormatItemLine:
    """Tests for format_item_line."""

    def test_success_with_deletion(self) -> None:
        """Successful items show the artifact and the deletion."""
        result = ItemResult(
            entry=ENTRY,
            outcome=OperationOutcome.succeeded(Path("/data/a.webm")),
            source_deleted=True,
        )

        line = format_item_line(result)

        assert "/data/a.mov -> /data/a.webm" in line
        assert "source deleted" in line

    def test_skipped_reason(self) -> None:
        """Skip reasons are shown in words."""
        outcome = OperationOutcome.skipped(SkipReason.ALREADY_EXISTS)
        result = ItemResult(entry=ENTRY, outcome=outcome)

        assert "(already exists)" in format_item_line(result)

    def test_failure_shows_last_line(self) -> None:
        """Only the last line of multi-line tool output is shown."""
        outcome = OperationOutcome.failed(
            FailureKind.PROCESS_ERROR, "ffmpeg version 6\nbanner\n\nInvalid data found\n"
        )

        line = format_item_line(ItemResult(entry=ENTRY, outcome=outcome))

        assert "(process error)" in line
        assert line.endswith("Invalid data found")
        assert "banner" not in line

    def test_markup_in_paths_escaped(self) -> None:
        """Paths containing brackets are not interpreted as markup."""
        entry = FileSystemEntry.from_path(Path("/data/[draft].mov"), EntryKind.FILE)
        result = ItemResult(entry=entry, outcome=OperationOutcome.planned(Path("/data/x.webm")))

        assert r"\[draft]" in format_item_line(result)


class TestSummaryTable:
    """Tests for create_summary_table."""

    def test_planned_row_only_for_dry_runs(self) -> None:
        """The planned row appears only when something was planned."""
        done = BatchReport(
            results=[ItemResult(entry=ENTRY, outcome=OperationOutcome.succeeded(Path("/x")))]
        )
        planned = BatchReport(
            results=[ItemResult(entry=ENTRY, outcome=OperationOutcome.planned(Path("/x")))]
        )

        assert create_summary_table(done).row_count == 4
        assert create_summary_table(planned).row_count == 5
