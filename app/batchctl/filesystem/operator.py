"""Source removal operator.

Handles deletion of source items after their artifact has been verified,
with protected path checking.
"""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from batchctl.filesystem.models import FileSystemEntry
from batchctl.filesystem.protected import is_protected_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RemovalResult:
    """Result of a single source removal.

    Attributes:
        path: Absolute path that was operated on.
        success: Whether the removal completed successfully.
        error: Error message if the removal failed, None otherwise.
    """

    path: str
    success: bool
    error: str | None = None


class SourceRemover:
    """Deletes source files and directories.

    Directories are removed recursively; files and symlinks are unlinked.
    A symlink to a directory is unlinked, never followed.
    """

    def remove(self, entry: FileSystemEntry) -> RemovalResult:
        """Delete a single source entry.

        Args:
            entry: Walked entry whose source should be removed.

        Returns:
            RemovalResult indicating success or failure.
        """
        path = str(entry.path)

        if is_protected_path(path):
            return RemovalResult(
                path=path,
                success=False,
                error=f"Protected path cannot be deleted: {path}",
            )

        try:
            target = Path(path)

            if entry.is_dir and not target.is_symlink():
                shutil.rmtree(target)
            elif target.exists() or target.is_symlink():
                target.unlink()
            else:
                return RemovalResult(
                    path=path,
                    success=False,
                    error=f"Path does not exist: {path}",
                )
        except OSError as e:
            logger.warning("Failed to delete %s: %s", path, e)
            return RemovalResult(path=path, success=False, error=str(e))

        logger.info("Deleted source: %s", path)
        return RemovalResult(path=path, success=True)
