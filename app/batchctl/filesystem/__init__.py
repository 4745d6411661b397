"""Filesystem walking and removal module.

This module provides the tree walker, exclusion policy, entry models,
protected path management, and source deletion for batch operations.
"""

from batchctl.filesystem.exclusion import ExclusionPolicy, normalize_extensions
from batchctl.filesystem.models import EntryKind, FileSystemEntry
from batchctl.filesystem.operator import RemovalResult, SourceRemover
from batchctl.filesystem.protected import PROTECTED_PATH_PATTERNS, is_protected_path
from batchctl.filesystem.walker import TreeWalker

__all__ = [
    "PROTECTED_PATH_PATTERNS",
    "EntryKind",
    "ExclusionPolicy",
    "FileSystemEntry",
    "RemovalResult",
    "SourceRemover",
    "TreeWalker",
    "is_protected_path",
    "normalize_extensions",
]
