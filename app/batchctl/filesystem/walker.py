"""Recursive tree walker producing filesystem entries.

Walks a source root depth-first in pre-order: each directory entry is
yielded and its subtree is walked immediately afterwards. Symbolic links
are reported but never followed, so a symlink cycle cannot make the walk
infinite.
"""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from batchctl.core.errors import DirectoryReadError
from batchctl.filesystem.exclusion import ExclusionPolicy
from batchctl.filesystem.models import EntryKind, FileSystemEntry

logger = logging.getLogger(__name__)


class TreeWalker:
    """Lazily enumerates a directory tree.

    Every call to :meth:`walk` starts from scratch; a walk in progress
    cannot be restarted midway.

    Args:
        max_depth: Maximum depth to yield entries from. ``1`` yields only
            the immediate children of the root; ``None`` is unlimited.
        skip_unreadable: If True, a subdirectory that cannot be listed is
            logged and skipped. If False (default), DirectoryReadError
            propagates and aborts the walk. The root is always fatal.
    """

    def __init__(self, *, max_depth: int | None = None, skip_unreadable: bool = False) -> None:
        if max_depth is not None and max_depth < 1:
            msg = f"max_depth must be at least 1, got {max_depth}"
            raise ValueError(msg)
        self._max_depth = max_depth
        self._skip_unreadable = skip_unreadable

    @property
    def max_depth(self) -> int | None:
        """Maximum depth of yielded entries (None = unlimited)."""
        return self._max_depth

    def walk(self, root: Path, exclude: ExclusionPolicy) -> Iterator[FileSystemEntry]:
        """Walk ``root`` and yield every entry not excluded by ``exclude``.

        Args:
            root: Directory to walk.
            exclude: Exclusion policy applied to each entry before yielding.

        Yields:
            FileSystemEntry instances in depth-first pre-order.

        Raises:
            DirectoryReadError: If the root, or (by default) any
                subdirectory, cannot be listed.
        """
        root = Path(root).resolve()
        if not root.is_dir():
            raise DirectoryReadError(root, "not a directory")

        yield from self._walk_directory(root, exclude, depth=1)

    def _walk_directory(
        self,
        directory: Path,
        exclude: ExclusionPolicy,
        depth: int,
    ) -> Iterator[FileSystemEntry]:
        """Yield entries of ``directory`` and recurse into subdirectories.

        The listing is read in full and sorted by name before the first
        entry is yielded.
        """
        try:
            entries = self._list(directory)
        except DirectoryReadError:
            if depth == 1 or not self._skip_unreadable:
                raise
            logger.warning("Skipping unreadable directory: %s", directory)
            return

        for entry in entries:
            if exclude.excludes(entry):
                logger.debug("Excluded: %s", entry.path)
                continue

            yield entry

            if entry.is_dir and (self._max_depth is None or depth < self._max_depth):
                yield from self._walk_directory(entry.path, exclude, depth + 1)

    @staticmethod
    def _list(directory: Path) -> list[FileSystemEntry]:
        """Read one level of ``directory`` into sorted entries.

        Raises:
            DirectoryReadError: If the directory cannot be enumerated.
        """
        logger.debug("Scanning directory: %s", directory)
        try:
            with os.scandir(directory) as it:
                raw = sorted(it, key=lambda e: e.name)
                entries = [
                    FileSystemEntry.from_path(directory / item.name, _classify(item))
                    for item in raw
                ]
        except OSError as e:
            raise DirectoryReadError(directory, e.strerror or str(e)) from e
        return entries


def _classify(item: os.DirEntry[str]) -> EntryKind:
    """Classify a directory entry without following symlinks."""
    if item.is_symlink():
        return EntryKind.SYMLINK
    if item.is_dir(follow_symlinks=False):
        return EntryKind.DIRECTORY
    return EntryKind.FILE
