"""Outcome models for per-item batch operations.

Every processed item yields exactly one OperationOutcome. Outcomes are
never retried automatically and never persisted across runs: idempotency
comes from re-checking target existence on the next invocation.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from batchctl.filesystem.models import FileSystemEntry


class OutcomeStatus(str, Enum):
    """Status of a single item.

    Attributes:
        SKIPPED: Nothing was done (e.g. the artifact already exists).
        SUCCEEDED: The artifact was produced.
        FAILED: The transform failed; the source is untouched.
        PLANNED: Dry-run only; the transform would run.
    """

    SKIPPED = "skipped"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    PLANNED = "planned"


class SkipReason(str, Enum):
    """Reason an item was skipped."""

    ALREADY_EXISTS = "already_exists"
    ALREADY_TARGET_FORMAT = "already_target_format"


class FailureKind(str, Enum):
    """Kind of per-item failure.

    Attributes:
        PROCESS_ERROR: External tool exited non-zero.
        EMPTY_OUTPUT: Tool reported success but the artifact is missing or empty.
        IO_ERROR: Copy, stat or delete failure not related to an external process.
        VERIFICATION_FAILED: Artifact failed the post-transform check.
    """

    PROCESS_ERROR = "process_error"
    EMPTY_OUTPUT = "empty_output"
    IO_ERROR = "io_error"
    VERIFICATION_FAILED = "verification_failed"


@dataclass(frozen=True, slots=True)
class OperationOutcome:
    """Result of applying a transform to one source item.

    Attributes:
        status: Outcome status.
        artifact_path: Target artifact path (existing, written or planned).
        skip_reason: Why the item was skipped (SKIPPED only).
        failure: Kind of failure (FAILED only).
        message: Optional human-readable detail (e.g. tool stderr).
    """

    status: OutcomeStatus
    artifact_path: Path | None = None
    skip_reason: SkipReason | None = None
    failure: FailureKind | None = None
    message: str | None = None

    def __post_init__(self) -> None:
        """Validate outcome consistency after initialization."""
        if self.status == OutcomeStatus.SKIPPED and self.skip_reason is None:
            msg = "Skipped outcome requires a skip reason"
            raise ValueError(msg)
        if self.status == OutcomeStatus.FAILED and self.failure is None:
            msg = "Failed outcome requires a failure kind"
            raise ValueError(msg)
        if self.status == OutcomeStatus.SUCCEEDED and self.artifact_path is None:
            msg = "Succeeded outcome requires an artifact path"
            raise ValueError(msg)

    @classmethod
    def skipped(
        cls, reason: SkipReason, artifact_path: Path | None = None, message: str | None = None
    ) -> "OperationOutcome":
        """Create a Skipped outcome."""
        return cls(
            status=OutcomeStatus.SKIPPED,
            artifact_path=artifact_path,
            skip_reason=reason,
            message=message,
        )

    @classmethod
    def succeeded(cls, artifact_path: Path) -> "OperationOutcome":
        """Create a Succeeded outcome."""
        return cls(status=OutcomeStatus.SUCCEEDED, artifact_path=artifact_path)

    @classmethod
    def failed(
        cls, failure: FailureKind, message: str | None = None, artifact_path: Path | None = None
    ) -> "OperationOutcome":
        """Create a Failed outcome."""
        return cls(
            status=OutcomeStatus.FAILED,
            artifact_path=artifact_path,
            failure=failure,
            message=message,
        )

    @classmethod
    def planned(cls, artifact_path: Path) -> "OperationOutcome":
        """Create a dry-run Planned outcome."""
        return cls(status=OutcomeStatus.PLANNED, artifact_path=artifact_path)

    @property
    def is_skipped(self) -> bool:
        """Check if the item was skipped."""
        return self.status == OutcomeStatus.SKIPPED

    @property
    def is_success(self) -> bool:
        """Check if the artifact was produced."""
        return self.status == OutcomeStatus.SUCCEEDED

    @property
    def is_failure(self) -> bool:
        """Check if the item failed."""
        return self.status == OutcomeStatus.FAILED


@dataclass(frozen=True, slots=True)
class ItemResult:
    """Outcome of one walked entry, as reported by the orchestrator.

    Attributes:
        entry: The source entry.
        outcome: What happened to it.
        source_deleted: Whether the source was removed after verification.
    """

    entry: FileSystemEntry
    outcome: OperationOutcome
    source_deleted: bool = False


@dataclass(slots=True)
class BatchReport:
    """Aggregated results of one batch run."""

    results: list[ItemResult]

    def count(self, status: OutcomeStatus) -> int:
        """Count results with the given status."""
        return sum(1 for r in self.results if r.outcome.status == status)

    @property
    def succeeded(self) -> int:
        return self.count(OutcomeStatus.SUCCEEDED)

    @property
    def skipped(self) -> int:
        return self.count(OutcomeStatus.SKIPPED)

    @property
    def failed(self) -> int:
        return self.count(OutcomeStatus.FAILED)

    @property
    def planned(self) -> int:
        return self.count(OutcomeStatus.PLANNED)

    @property
    def deleted(self) -> int:
        """Number of sources removed."""
        return sum(1 for r in self.results if r.source_deleted)

    @property
    def has_failures(self) -> bool:
        """Check if any item failed."""
        return self.failed > 0
