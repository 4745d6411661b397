"""Data models for batchctl.

This module exports the per-item outcome models.
"""

from batchctl.models.outcome import (
    BatchReport,
    FailureKind,
    ItemResult,
    OperationOutcome,
    OutcomeStatus,
    SkipReason,
)

__all__ = [
    "BatchReport",
    "FailureKind",
    "ItemResult",
    "OperationOutcome",
    "OutcomeStatus",
    "SkipReason",
]
