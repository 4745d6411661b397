"""Safe replace orchestration.

Drives a transform over a walked tree: for each entry, produce the
artifact, verify it independently, and only then delete the source.
A failing item never aborts the batch and never loses its source; the
only fatal conditions are the ones raised before or during walking
(missing tool, unreadable directory).
"""

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import cast

from batchctl.filesystem.exclusion import ExclusionPolicy
from batchctl.filesystem.models import FileSystemEntry
from batchctl.filesystem.operator import SourceRemover
from batchctl.filesystem.walker import TreeWalker
from batchctl.models.outcome import (
    FailureKind,
    ItemResult,
    OperationOutcome,
    OutcomeStatus,
)
from batchctl.transforms.base import Transform, TransformSpec

logger = logging.getLogger(__name__)


class SafeReplaceOrchestrator:
    """Sequentially applies a transform to every eligible walked entry.

    Items are processed strictly one at a time in walker order; each
    transform call blocks until it returns an outcome.

    Args:
        spec: Transform and walk depth for this batch.
        skip_unreadable: Skip subdirectories that cannot be listed instead
            of aborting the run.
        remover: Source remover used after verification.
    """

    def __init__(
        self,
        spec: TransformSpec,
        *,
        skip_unreadable: bool = False,
        remover: SourceRemover | None = None,
    ) -> None:
        self._transform = spec.transform
        self._walker = TreeWalker(max_depth=spec.max_depth, skip_unreadable=skip_unreadable)
        self._remover = remover or SourceRemover()

    @property
    def transform(self) -> Transform:
        return self._transform

    def run(
        self,
        root: Path,
        exclude: ExclusionPolicy,
        *,
        delete_source_on_success: bool,
        dry_run: bool = False,
    ) -> Iterator[ItemResult]:
        """Process every eligible entry under ``root``.

        Args:
            root: Directory to walk.
            exclude: Exclusion policy for the walk.
            delete_source_on_success: Remove each source once its artifact
                has been verified.
            dry_run: Plan only; nothing is written or deleted.

        Yields:
            One ItemResult per processed entry, as soon as it is done.

        Raises:
            DirectoryReadError: If the walk cannot enumerate a directory.
        """
        for entry in self._walker.walk(root, exclude):
            if not self._is_eligible(entry):
                continue
            yield self.process(
                entry,
                delete_source_on_success=delete_source_on_success,
                dry_run=dry_run,
            )

    def process(
        self,
        entry: FileSystemEntry,
        *,
        delete_source_on_success: bool,
        dry_run: bool = False,
    ) -> ItemResult:
        """Transform a single entry and conditionally delete its source.

        Per-item errors are contained here and reported as Failed outcomes.
        """
        try:
            outcome = self._transform.plan(entry) if dry_run else self._transform.apply(entry)
        except OSError as e:
            logger.warning("Unexpected I/O error processing %s: %s", entry.path, e)
            outcome = OperationOutcome.failed(FailureKind.IO_ERROR, str(e))

        if outcome.status != OutcomeStatus.SUCCEEDED:
            self._log_outcome(entry, outcome)
            return ItemResult(entry=entry, outcome=outcome)

        # Succeeded outcomes always carry their artifact path
        artifact = cast(Path, outcome.artifact_path)

        problem = self._transform.verify(entry, artifact)
        if problem is not None:
            logger.warning("Verification failed for %s: %s", entry.path, problem)
            return ItemResult(
                entry=entry,
                outcome=OperationOutcome.failed(
                    FailureKind.VERIFICATION_FAILED, problem, artifact_path=artifact
                ),
            )

        if not delete_source_on_success:
            self._log_outcome(entry, outcome)
            return ItemResult(entry=entry, outcome=outcome)

        removal = self._remover.remove(entry)
        if not removal.success:
            return ItemResult(
                entry=entry,
                outcome=OperationOutcome.failed(
                    FailureKind.IO_ERROR,
                    f"Artifact written but source not deleted: {removal.error}",
                    artifact_path=artifact,
                ),
            )

        self._log_outcome(entry, outcome)
        return ItemResult(entry=entry, outcome=outcome, source_deleted=True)

    def _is_eligible(self, entry: FileSystemEntry) -> bool:
        """Check whether an entry is transformed (rather than traversed or ignored)."""
        if entry.is_file:
            return True
        if entry.is_dir:
            return self._transform.handles_directories
        logger.debug("Ignoring symlink: %s", entry.path)
        return False

    @staticmethod
    def _log_outcome(entry: FileSystemEntry, outcome: OperationOutcome) -> None:
        if outcome.is_skipped:
            reason = outcome.skip_reason.value if outcome.skip_reason else "-"
            logger.info("Skipped %s (%s)", entry.path, reason)
        elif outcome.is_failure:
            logger.warning("Failed %s: %s", entry.path, outcome.message)
        elif outcome.is_success:
            logger.info("Done %s -> %s", entry.path, outcome.artifact_path)
