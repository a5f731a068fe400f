"""Merge stage: apply normalized reports to the incident store.

Per incident the engine walks ``absent -> created -> updated``; incidents not
seen in a completed batch are retired by one bulk sweep at its end. Reports are
applied in the order they arrive, so reports of the same incident keep their
feed order.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from incidentsync.domain.ingest import ContentChange, classify_change, resolve_incident_key
from incidentsync.domain.model import DuplicateInsertAttempted

from .contracts import (
    BatchState,
    BatchSummary,
    ReconcileOutcome,
    SkippedEntry,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from incidentsync.domain.model import Incident, Report
    from incidentsync.domain.ports import PersistenceGateway

    from .contracts import TransformResult

log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationEngine:
    """Reconcile feed batches against ``gateway``; the only writer of the store."""

    gateway: PersistenceGateway

    def reconcile_batch(
        self,
        results: Iterable[TransformResult],
        *,
        entries_seen: int | None = None,
    ) -> BatchSummary:
        """Apply every transform result, then sweep.

        Any exception raised while iterating ``results`` or talking to the store
        propagates before the sweep, leaving currency flags untouched.
        """

        state = BatchState()
        seen = 0
        for result in results:
            seen += 1
            if isinstance(result, SkippedEntry):
                self._record_skip(result, state)
                continue
            self.reconcile_report(result.report, state=state, incident_key=result.incident_key)

        summary = state.summary
        summary.entries_seen = seen if entries_seen is None else entries_seen
        summary.incidents_updated = len(state.updated)
        summary.incidents_retired = self.gateway.mark_not_current_except(state.touched)
        log.info(
            "Batch reconciled: seen=%s, inserted=%s, unchanged=%s, created=%s, retired=%s, "
            "skipped=%s",
            summary.entries_seen,
            summary.reports_inserted,
            summary.reports_unchanged,
            summary.incidents_created,
            summary.incidents_retired,
            summary.entries_skipped,
        )
        return summary

    def reconcile_report(
        self,
        report: Report,
        *,
        state: BatchState,
        incident_key: int | None = None,
    ) -> ReconcileOutcome:
        """Create, append to or merely touch the incident ``report`` belongs to.

        Raises :class:`MalformedIdentifier` when no key is given and the report's
        identifier does not resolve.
        """

        key = resolve_incident_key(report.external_id) if incident_key is None else incident_key
        incident = self.gateway.lookup_incident_by_key(key)
        if incident is None:
            return self._create(key, report, state)

        self._touch(incident, state)
        stored_hash = self.gateway.lookup_report_hash(incident.storage_id, report.content_hash)
        if classify_change(report.content_hash, stored_hash) is ContentChange.UNCHANGED:
            state.summary.reports_unchanged += 1
            return ReconcileOutcome.UNCHANGED

        self.gateway.insert_report(incident.storage_id, report)
        state.summary.reports_inserted += 1
        if incident.storage_id not in state.created.values():
            state.updated.add(incident.storage_id)
        extended = incident.validity.extended_to(report.published_at)
        if extended is not incident.validity:
            self.gateway.extend_incident_validity_upper(incident.storage_id, extended.upper)
        return ReconcileOutcome.APPENDED

    def _create(self, key: int, report: Report, state: BatchState) -> ReconcileOutcome:
        if key in state.created:
            # inserted earlier in this batch but the store no longer finds it
            raise DuplicateInsertAttempted(key)
        storage_id = self.gateway.insert_incident(key, report.published_at)
        self.gateway.insert_report(storage_id, report)
        state.created[key] = storage_id
        state.touch(storage_id)
        state.summary.incidents_created += 1
        state.summary.reports_inserted += 1
        log.debug("Created incident %s (%s)", key, report.title)
        return ReconcileOutcome.CREATED

    def _touch(self, incident: Incident, state: BatchState) -> None:
        if not incident.is_current:
            self.gateway.set_incident_current(incident.storage_id)
            log.debug("Incident %s is current again", incident.incident_key)
        state.touch(incident.storage_id)

    def _record_skip(self, skipped: SkippedEntry, state: BatchState) -> None:
        state.summary.skipped.append(skipped)
        log.warning(
            "Skipping entry %s (%s): %s [%s]",
            skipped.guid,
            skipped.title,
            skipped.message,
            skipped.reason,
        )
        if skipped.incident_key is None:
            return
        incident = self.gateway.lookup_incident_by_key(skipped.incident_key)
        if incident is not None:
            self._touch(incident, state)

