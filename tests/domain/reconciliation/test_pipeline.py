from __future__ import annotations

import pytest

from incidentsync.domain.model import StoreUnavailable
from incidentsync.domain.reconciliation import (
    NormalizedEntry,
    ReconciliationEngine,
    SkippedEntry,
    run_batch,
    transform_entry,
)
from tests.helpers.feeds import make_entry, pub_date
from tests.helpers.store import InMemoryGateway


def test_transform_entry_success() -> None:
    result = transform_entry(make_entry(80707))

    assert isinstance(result, NormalizedEntry)
    assert result.incident_key == 80707


def test_transform_entry_with_bad_identifier_has_no_key() -> None:
    result = transform_entry(make_entry(identifier="tag:www.rfs.nsw.gov.au,2013:none"))

    assert isinstance(result, SkippedEntry)
    assert result.reason == "malformed_identifier"
    assert result.incident_key is None


def test_transform_entry_with_bad_date_keeps_resolved_key() -> None:
    result = transform_entry(make_entry(5, pub="31 Oct 2013"))

    assert isinstance(result, SkippedEntry)
    assert result.reason == "date_parse_failure"
    assert result.incident_key == 5
    assert result.title == "Mount Victoria"


def test_run_batch_preserves_feed_order_across_workers() -> None:
    gateway = InMemoryGateway()
    entries = [make_entry(7, title=f"report {n}", pub=pub_date(hour=n)) for n in range(20)]

    summary = run_batch(entries, engine=ReconciliationEngine(gateway), workers=8, queue_size=2)

    reports = gateway.reports[gateway.incidents[7].storage_id]
    assert [r.title for r in reports] == [f"report {n}" for n in range(20)]
    assert summary.entries_seen == 20
    assert summary.reports_inserted == 20


def test_run_batch_counts_skips_and_sweeps() -> None:
    gateway = InMemoryGateway()
    engine = ReconciliationEngine(gateway)
    run_batch([make_entry(1), make_entry(2), make_entry(3)], engine=engine)

    summary = run_batch(
        [make_entry(1), make_entry(2, pub="garbage"), make_entry(identifier="nope")],
        engine=engine,
    )

    assert summary.entries_seen == 3
    assert summary.entries_skipped == 2
    assert summary.incidents_retired == 1
    assert gateway.current_keys() == {1, 2}


def test_run_batch_on_empty_feed_retires_everything() -> None:
    gateway = InMemoryGateway()
    engine = ReconciliationEngine(gateway)
    run_batch([make_entry(1)], engine=engine)

    summary = run_batch([], engine=engine)

    assert summary.incidents_retired == 1
    assert gateway.current_keys() == set()


def test_run_batch_store_error_propagates_without_sweep() -> None:
    gateway = InMemoryGateway()
    engine = ReconciliationEngine(gateway)
    run_batch([make_entry(1), make_entry(2)], engine=engine)
    gateway.fail_on = "insert_incident"
    calls_before = len(gateway.calls)
    entries = [make_entry(n) for n in range(3, 200)]

    with pytest.raises(StoreUnavailable):
        run_batch(entries, engine=engine, queue_size=1)

    assert "mark_not_current_except" not in gateway.calls[calls_before:]
    assert gateway.current_keys() == {1, 2}


@pytest.mark.parametrize(("workers", "queue_size"), [(0, 1), (1, 0)])
def test_run_batch_rejects_non_positive_sizes(workers: int, queue_size: int) -> None:
    with pytest.raises(ValueError, match="positive"):
        run_batch(
            [],
            engine=ReconciliationEngine(InMemoryGateway()),
            workers=workers,
            queue_size=queue_size,
        )
