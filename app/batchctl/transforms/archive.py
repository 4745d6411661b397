"""Archive transform backed by 7-Zip."""

import logging
from pathlib import Path

from batchctl.filesystem.models import FileSystemEntry
from batchctl.models.outcome import FailureKind, OperationOutcome
from batchctl.tools.locator import ToolBinding
from batchctl.transforms.base import Transform
from batchctl.utils.shell import CommandRunner

logger = logging.getLogger(__name__)

DEFAULT_ARCHIVE_SUFFIX = "7z"


class ArchiveTransform(Transform):
    """Packs a file or a whole directory into ``<source>.<suffix>``.

    Success is judged by the archiver's exit status; the archive's
    internal integrity is not re-checked.

    Args:
        tool: Resolved archiver binding.
        suffix: Archive suffix appended to the source name.
        extra_args: Additional archiver switches placed before the paths.
        runner: Process capability (see :class:`Transform`).
    """

    handles_directories = True

    def __init__(
        self,
        tool: ToolBinding,
        *,
        suffix: str = DEFAULT_ARCHIVE_SUFFIX,
        extra_args: tuple[str, ...] = (),
        runner: CommandRunner | None = None,
    ) -> None:
        super().__init__(runner)
        self._tool = tool
        self._suffix = suffix.lstrip(".")
        self._extra_args = extra_args

    @property
    def name(self) -> str:
        return "archive"

    def target_for(self, entry: FileSystemEntry) -> Path:
        return entry.path.with_name(f"{entry.name}.{self._suffix}")

    def build_command(self, source: Path, target: Path) -> list[str]:
        """Build the archiver argument vector."""
        return [self._tool.executable, "a", *self._extra_args, str(target), str(source)]

    def _run(self, entry: FileSystemEntry, target: Path) -> OperationOutcome:
        args = self.build_command(entry.path, target)
        logger.info("Archiving: %s -> %s", entry.path, target)
        result = self._runner(args)

        if not result.success:
            message = result.stderr.strip() or f"{self._tool.name} exited with {result.returncode}"
            logger.warning("Archive failed for %s: %s", entry.path, message)
            return OperationOutcome.failed(FailureKind.PROCESS_ERROR, message)

        return OperationOutcome.succeeded(target)
