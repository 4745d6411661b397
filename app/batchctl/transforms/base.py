"""Abstract base class for transforms.

A transform turns one source item into one derived artifact. Every
variant shares the same contract: the call blocks until the work is done,
an existing artifact short-circuits to Skipped, failures are reported as
outcomes rather than raised, and nothing is ever retried.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from batchctl.filesystem.models import FileSystemEntry
from batchctl.models.outcome import OperationOutcome, SkipReason
from batchctl.utils.shell import CommandRunner, run_command


class Transform(ABC):
    """Abstract base class for all transforms.

    Example:
        >>> transform = ArchiveTransform(binding)
        >>> outcome = transform.apply(entry)
        >>> if outcome.is_success and transform.verify(entry, outcome.artifact_path) is None:
        ...     remove_source(entry)
    """

    #: Whether directories are transformed as atomic units.
    handles_directories: bool = False

    def __init__(self, runner: CommandRunner | None = None) -> None:
        """Initialize the transform.

        Args:
            runner: Capability used to spawn external processes. Defaults to
                :func:`batchctl.utils.shell.run_command` with no timeout.
        """
        self._runner: CommandRunner = runner or run_command

    @property
    @abstractmethod
    def name(self) -> str:
        """Short name of the transform, used in output."""

    @abstractmethod
    def target_for(self, entry: FileSystemEntry) -> Path:
        """Derive the artifact path for a source entry.

        Raises:
            OSError: If deriving the target requires reading the source and
                that read fails.
        """

    @abstractmethod
    def _run(self, entry: FileSystemEntry, target: Path) -> OperationOutcome:
        """Produce the artifact at ``target``. Called only if it does not exist."""

    def precheck(self, entry: FileSystemEntry) -> OperationOutcome | None:
        """Short-circuit entries that need no work before any target is derived.

        Returns:
            A Skipped outcome, or None to continue.
        """
        return None

    def apply(self, entry: FileSystemEntry) -> OperationOutcome:
        """Transform one source entry, blocking until the work completes.

        Args:
            entry: Source entry.

        Returns:
            Skipped if the artifact already exists, otherwise the result of
            running the transform.
        """
        early = self.precheck(entry)
        if early is not None:
            return early

        target = self.target_for(entry)
        if target.exists():
            return OperationOutcome.skipped(SkipReason.ALREADY_EXISTS, artifact_path=target)

        return self._run(entry, target)

    def plan(self, entry: FileSystemEntry) -> OperationOutcome:
        """Report what :meth:`apply` would do without writing anything.

        Returns:
            Skipped if the artifact already exists, otherwise Planned.
        """
        early = self.precheck(entry)
        if early is not None:
            return early

        target = self.target_for(entry)
        if target.exists():
            return OperationOutcome.skipped(SkipReason.ALREADY_EXISTS, artifact_path=target)
        return OperationOutcome.planned(target)

    def verify(self, entry: FileSystemEntry, artifact: Path) -> str | None:
        """Independently check an artifact before its source is deleted.

        The default check requires the artifact to exist and be non-empty.

        Returns:
            An error message, or None if the artifact is acceptable.
        """
        try:
            size = artifact.stat().st_size
        except FileNotFoundError:
            return f"Artifact missing: {artifact}"
        except OSError as e:
            return f"Cannot stat artifact {artifact}: {e}"
        if size == 0:
            return f"Artifact is empty: {artifact}"
        return None


@dataclass(frozen=True, slots=True)
class TransformSpec:
    """How a batch turns source entries into artifacts.

    Attributes:
        transform: Transform applied to each eligible entry.
        max_depth: Walk depth; None is unlimited. Transforms that act on
            whole directories only operate on the immediate children of
            the root, so they require ``max_depth == 1``.
    """

    transform: Transform
    max_depth: int | None = None

    def __post_init__(self) -> None:
        """Validate the spec after initialization."""
        if self.transform.handles_directories and self.max_depth != 1:
            msg = (
                f"{self.transform.name} transforms whole directories and "
                f"requires max_depth=1, got {self.max_depth}"
            )
            raise ValueError(msg)
