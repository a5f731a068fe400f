"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from incidentsync.adapters.feeds import SourceFetcher, decode_feed
from incidentsync.adapters.sqlalchemy import SqlAlchemyUnitOfWork, is_started, startup
from incidentsync.config.reconcile import get_reconcile_config
from incidentsync.domain.model import IncidentSyncError
from incidentsync.domain.ports import UnitOfWork
from incidentsync.domain.reconciliation import ReconciliationEngine, run_batch

if TYPE_CHECKING:
    from incidentsync.config.reconcile import ReconcileConfig
    from incidentsync.domain.ports import FeedDecoder, FeedFetcher, FeedSnapshot
    from incidentsync.domain.reconciliation import BatchSummary

UnitOfWorkFactory = Callable[[], UnitOfWork]


log = getLogger(__name__)


@dataclass(slots=True)
class SnapshotOutcome:
    name: str
    summary: BatchSummary | None = None
    error: IncidentSyncError | None = None


@dataclass(slots=True)
class ImportResult:
    """Per-snapshot outcomes of one import run, in fetch order."""

    source: str
    outcomes: list[SnapshotOutcome] = field(default_factory=list[SnapshotOutcome])

    @property
    def summaries(self) -> list[BatchSummary]:
        return [outcome.summary for outcome in self.outcomes if outcome.summary is not None]

    @property
    def failures(self) -> list[SnapshotOutcome]:
        return [outcome for outcome in self.outcomes if outcome.error is not None]

    @property
    def ok(self) -> bool:
        return not self.failures


def import_snapshot(
    snapshot: FeedSnapshot,
    *,
    decoder: FeedDecoder,
    unit_of_work_factory: UnitOfWorkFactory,
    config: ReconcileConfig,
) -> BatchSummary:
    """Decode one snapshot and reconcile it inside its own unit of work."""

    entries = decoder(snapshot)
    with unit_of_work_factory() as uow:
        summary = run_batch(
            entries,
            engine=ReconciliationEngine(uow.gateway),
            workers=config.workers,
            queue_size=config.queue_size,
            local_zone=config.local_timezone,
        )
        uow.commit()
    return summary


def import_feed(
    source: str,
    *,
    fetcher: FeedFetcher | None = None,
    decoder: FeedDecoder | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    config: ReconcileConfig | None = None,
) -> ImportResult:
    """Import every snapshot available at ``source``.

    A snapshot that cannot be decoded or reconciled is logged and recorded in
    the result; the remaining snapshots are still processed. Fetch failures
    propagate as :class:`FeedFetchError`.
    """

    if unit_of_work_factory is None and not is_started():
        startup()
    effective_fetcher = fetcher or SourceFetcher()
    effective_decoder = decoder or decode_feed
    effective_uow = unit_of_work_factory or SqlAlchemyUnitOfWork
    effective_config = config or get_reconcile_config()
    log.info(
        "Starting import: source=%s, workers=%s, queue_size=%s",
        source,
        effective_config.workers,
        effective_config.queue_size,
    )

    result = ImportResult(source=source)
    for snapshot in effective_fetcher(source):
        outcome = SnapshotOutcome(name=snapshot.name)
        try:
            outcome.summary = import_snapshot(
                snapshot,
                decoder=effective_decoder,
                unit_of_work_factory=effective_uow,
                config=effective_config,
            )
        except IncidentSyncError as exc:
            log.exception("Import of %s failed", snapshot.name)
            outcome.error = exc
        result.outcomes.append(outcome)

    log.info(
        "Finished import of %s: snapshots=%s, failed=%s",
        source,
        len(result.outcomes),
        len(result.failures),
    )
    return result
