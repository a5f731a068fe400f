"""Value types passed between the transform stage, the engine and callers."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID

    from incidentsync.domain.model import Report


class ReconcileOutcome(StrEnum):
    """What happened to one report during the merge stage."""

    CREATED = "created"
    APPENDED = "appended"
    UNCHANGED = "unchanged"


@dataclass(frozen=True, slots=True, kw_only=True)
class NormalizedEntry:
    """Transform-stage success: a report and the incident key it belongs to."""

    report: Report
    incident_key: int


@dataclass(frozen=True, slots=True, kw_only=True)
class SkippedEntry:
    """Transform-stage failure, kept for the batch summary.

    ``incident_key`` is set when the identity resolved before the entry failed,
    so the incident still counts as present in the feed.
    """

    reason: str
    message: str
    guid: str
    title: str
    incident_key: int | None = None


type TransformResult = NormalizedEntry | SkippedEntry


@dataclass(slots=True)
class BatchSummary:
    """Counts reported at the end of one batch."""

    entries_seen: int = 0
    reports_inserted: int = 0
    reports_unchanged: int = 0
    incidents_created: int = 0
    incidents_updated: int = 0
    incidents_retired: int = 0
    skipped: list[SkippedEntry] = field(default_factory=list[SkippedEntry])

    @property
    def entries_skipped(self) -> int:
        return len(self.skipped)

    def skipped_by_reason(self) -> Counter[str]:
        return Counter(entry.reason for entry in self.skipped)


@dataclass(slots=True)
class BatchState:
    """Mutable bookkeeping of one batch while the merge stage runs."""

    summary: BatchSummary = field(default_factory=BatchSummary)
    touched: set[UUID] = field(default_factory=set["UUID"])
    created: dict[int, UUID] = field(default_factory=dict[int, "UUID"])
    updated: set[UUID] = field(default_factory=set["UUID"])

    def touch(self, storage_id: UUID) -> None:
        self.touched.add(storage_id)
