"""Exclusion policy applied to walked entries.

An entry failing the policy is dropped before it is yielded by the tree
walker, and excluded directories are never descended into.
"""

import fnmatch
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from batchctl.filesystem.models import FileSystemEntry

HIDDEN_PREFIX = "."


def normalize_extensions(extensions: Iterable[str]) -> frozenset[str]:
    """Normalize user-supplied extensions to lower case without a leading dot.

    Args:
        extensions: Extensions such as ``"MOV"``, ``".mov"`` or ``"mov"``.

    Returns:
        Frozen set of normalized extensions, empty strings dropped.
    """
    return frozenset(ext.strip().lstrip(".").lower() for ext in extensions if ext.strip(" ."))


@dataclass(frozen=True, slots=True)
class ExclusionPolicy:
    """Immutable predicate over entry names, extensions and locations.

    Attributes:
        skip_hidden: Exclude entries whose name starts with ``.``.
        blacklist: Extensions excluded for both files and directories. A
            multi-part entry such as ``tar.gz`` matches the end of the name.
        whitelist: If non-empty, files are included only when their extension
            is listed. Directories are never whitelist-filtered so that they
            stay traversable.
        patterns: Glob patterns matched against the entry name.
        excluded_paths: Absolute paths excluded together with their subtree.
    """

    skip_hidden: bool = True
    blacklist: frozenset[str] = field(default_factory=frozenset)
    whitelist: frozenset[str] = field(default_factory=frozenset)
    patterns: tuple[str, ...] = ()
    excluded_paths: frozenset[Path] = field(default_factory=frozenset)

    @classmethod
    def build(
        cls,
        *,
        skip_hidden: bool = True,
        blacklist: Iterable[str] = (),
        whitelist: Iterable[str] = (),
        patterns: Iterable[str] = (),
        excluded_paths: Iterable[Path] = (),
    ) -> "ExclusionPolicy":
        """Create a policy from loosely formatted user input."""
        return cls(
            skip_hidden=skip_hidden,
            blacklist=normalize_extensions(blacklist),
            whitelist=normalize_extensions(whitelist),
            patterns=tuple(patterns),
            excluded_paths=frozenset(p.resolve() for p in excluded_paths),
        )

    def excludes(self, entry: FileSystemEntry) -> bool:
        """Check whether a walked entry must be dropped.

        Args:
            entry: Entry produced by the walker.

        Returns:
            True if the entry (and, for directories, its subtree) is excluded.
        """
        if self.excluded_paths and entry.path in self.excluded_paths:
            return True
        return self.excludes_name(entry.name, is_dir=entry.is_dir)

    def excludes_name(self, name: str, *, is_dir: bool = False) -> bool:
        """Check whether an entry name is excluded.

        Args:
            name: Final path component.
            is_dir: Whether the entry is a directory.

        Returns:
            True if the name is excluded by this policy.
        """
        if self.skip_hidden and name.startswith(HIDDEN_PREFIX):
            return True

        if any(fnmatch.fnmatch(name, pattern) for pattern in self.patterns):
            return True

        if self._blacklisted(name):
            return True

        suffix = Path(name).suffix
        extension = suffix[1:].lower() if suffix else None

        if self.whitelist and not is_dir:
            return extension not in self.whitelist

        return False

    def _blacklisted(self, name: str) -> bool:
        lowered = name.lower()
        return any(
            lowered.endswith(f".{ext}") and len(lowered) > len(ext) + 1
            for ext in self.blacklist
        )
