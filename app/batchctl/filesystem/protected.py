"""Protected filesystem paths that must never be removed.

Deleting a source is the destructive half of every batch operation. These
patterns guard against a misconfigured root pointing at something that
should never be deleted, no matter what the transform reported.
"""

import fnmatch
from pathlib import Path

# Protected filesystem path patterns (glob-style).
# Patterns starting with ~ are expanded to the user's home directory
# before matching. Patterns starting with / are matched as-is.
PROTECTED_PATH_PATTERNS: list[str] = [
    # Home directory itself and security material
    "~",
    "~/.ssh",
    "~/.ssh/*",
    "~/.gnupg",
    "~/.gnupg/*",
    # batchctl's own configuration
    "~/.config/batchctl",
    "~/.config/batchctl/*",
    # System roots
    "/",
    "/bin",
    "/boot",
    "/dev",
    "/etc",
    "/home",
    "/lib",
    "/proc",
    "/sys",
    "/usr",
    "/var",
]


def is_protected_path(path: str) -> bool:
    """Check if a filesystem path is protected and must not be deleted.

    Patterns using ~ notation are expanded to the actual home directory
    before comparison using fnmatch for glob-style matching.

    Args:
        path: Absolute filesystem path to check.

    Returns:
        True if the path matches any protected pattern, False otherwise.
    """
    home = str(Path.home())
    normalized = path.rstrip("/") or "/"

    for pattern in PROTECTED_PATH_PATTERNS:
        expanded = home + pattern[1:] if pattern.startswith("~") else pattern

        if fnmatch.fnmatch(normalized, expanded):
            return True

    return False
