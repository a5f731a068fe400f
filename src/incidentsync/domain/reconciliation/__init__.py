"""Reconciliation core: merge normalized reports into incidents and sweep currency.

Flow per batch:
1) transform feed entries into reports on a worker pool (pure)
2) merge reports serially into incidents through the persistence gateway
3) retire incidents the batch did not touch
"""

from __future__ import annotations

from .contracts import (
    BatchState,
    BatchSummary,
    NormalizedEntry,
    ReconcileOutcome,
    SkippedEntry,
    TransformResult,
)
from .engine import ReconciliationEngine
from .pipeline import run_batch, transform_entry

__all__ = [
    "BatchState",
    "BatchSummary",
    "NormalizedEntry",
    "ReconcileOutcome",
    "ReconciliationEngine",
    "SkippedEntry",
    "TransformResult",
    "run_batch",
    "transform_entry",
]
