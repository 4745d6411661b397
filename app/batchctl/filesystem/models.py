"""Filesystem domain models for tree walking.

This module defines the core data structures for representing
filesystem entries discovered while walking a source tree.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class EntryKind(str, Enum):
    """Type of filesystem entry.

    Attributes:
        FILE: Regular file.
        DIRECTORY: Regular directory (not a symlink).
        SYMLINK: Symbolic link, live or dead. Never followed.
    """

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"


@dataclass(frozen=True, slots=True)
class FileSystemEntry:
    """Represents a filesystem entry yielded by the tree walker.

    Entries are ephemeral: produced per walk, never persisted and never
    mutated after being yielded.

    Attributes:
        path: Absolute filesystem path.
        kind: Type of the filesystem entry.
        name: Final path component, used for hidden/extension filtering.
    """

    path: Path
    kind: EntryKind
    name: str

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.name:
            msg = "Entry name cannot be empty"
            raise ValueError(msg)

    @classmethod
    def from_path(cls, path: Path, kind: EntryKind) -> "FileSystemEntry":
        """Build an entry whose name is the final component of ``path``."""
        return cls(path=path, kind=kind, name=path.name)

    @property
    def is_dir(self) -> bool:
        """Check if this entry is a real directory."""
        return self.kind == EntryKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        """Check if this entry is a regular file."""
        return self.kind == EntryKind.FILE

    @property
    def extension(self) -> str | None:
        """Lower-cased extension without the leading dot, or None.

        A leading dot alone (``.bashrc``) does not count as an extension.
        """
        suffix = Path(self.name).suffix
        return suffix[1:].lower() if suffix else None
