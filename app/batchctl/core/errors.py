"""Exception hierarchy for fatal batchctl errors.

Per-item failures are never raised past the orchestrator; they are
reported as typed outcomes instead (see ``batchctl.models.outcome``).
The exceptions here abort the whole run.
"""

from pathlib import Path


class BatchctlError(Exception):
    """Base exception for all fatal batchctl errors."""


class ToolNotFoundError(BatchctlError):
    """Raised when no candidate for an external tool could be probed successfully.

    Attributes:
        tool: Human-readable tool name (e.g. "7-Zip").
        candidates: Every candidate that was probed, in order.
        hint: Optional installation hint for the user.
    """

    def __init__(self, tool: str, candidates: list[str], hint: str | None = None) -> None:
        self.tool = tool
        self.candidates = candidates
        self.hint = hint
        msg = f"{tool} not found (probed {len(candidates)} candidate(s))"
        if hint:
            msg = f"{msg}. {hint}"
        super().__init__(msg)


class DirectoryReadError(BatchctlError):
    """Raised when a directory cannot be enumerated.

    Attributes:
        path: Directory that failed to be listed.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read directory {path}: {reason}")


class ConfigError(BatchctlError):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when an explicitly requested config file does not exist."""


class ConfigParseError(ConfigError):
    """Raised when a config file cannot be parsed."""
