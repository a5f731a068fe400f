"""Two-stage batch pipeline.

Stage one normalizes feed entries on a thread pool; it is pure and never touches
the store. Stage two is the single consumer: it drains a bounded queue in feed
order and hands every result to :class:`ReconciliationEngine`.
"""

from __future__ import annotations

import queue
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import UTC
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING, Final

from incidentsync.domain.ingest import normalize_entry, resolve_incident_key
from incidentsync.domain.model import EntryError

from .contracts import NormalizedEntry, SkippedEntry

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from datetime import tzinfo

    from incidentsync.domain.model import FeedEntry

    from .contracts import BatchSummary, TransformResult
    from .engine import ReconciliationEngine

log = getLogger(__name__)

DEFAULT_WORKERS: Final[int] = 4
DEFAULT_QUEUE_SIZE: Final[int] = 64
_PUT_TIMEOUT_SECONDS: Final[float] = 0.1


def transform_entry(entry: FeedEntry, *, local_zone: tzinfo = UTC) -> TransformResult:
    """Normalize one entry, turning entry-level errors into a :class:`SkippedEntry`."""

    incident_key: int | None = None
    try:
        incident_key = resolve_incident_key(entry.guid)
        report = normalize_entry(entry, local_zone=local_zone)
    except EntryError as exc:
        return SkippedEntry(
            reason=exc.reason,
            message=str(exc),
            guid=entry.guid,
            title=entry.title,
            incident_key=incident_key,
        )
    return NormalizedEntry(report=report, incident_key=incident_key)


@dataclass(frozen=True, slots=True)
class _TransformFailed:
    error: BaseException


class _Done:
    pass


_DONE: Final = _Done()

type _QueueItem = TransformResult | _TransformFailed | _Done


def run_batch(
    entries: Iterable[FeedEntry],
    *,
    engine: ReconciliationEngine,
    workers: int = DEFAULT_WORKERS,
    queue_size: int = DEFAULT_QUEUE_SIZE,
    local_zone: tzinfo = UTC,
) -> BatchSummary:
    """Reconcile one feed snapshot and return its summary.

    The sweep only runs when every entry went through the merge stage; a store
    error or an unexpected transform error propagates to the caller instead.
    """

    if workers <= 0 or queue_size <= 0:
        raise ValueError("workers and queue_size must be positive")

    batch = list(entries)
    channel: queue.Queue[_QueueItem] = queue.Queue(maxsize=queue_size)
    cancelled = threading.Event()

    def put(item: _QueueItem) -> bool:
        while not cancelled.is_set():
            try:
                channel.put(item, timeout=_PUT_TIMEOUT_SECONDS)
            except queue.Full:
                continue
            return True
        return False

    def produce() -> None:
        pool = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="transform")
        try:
            # map() yields in submission order, which keeps same-incident reports in feed order
            for result in pool.map(partial(transform_entry, local_zone=local_zone), batch):
                if not put(result):
                    return
        except Exception as exc:  # noqa: BLE001 - re-raised by the consumer
            put(_TransformFailed(exc))
            return
        finally:
            pool.shutdown(wait=True, cancel_futures=True)
        put(_DONE)

    def consume() -> Iterator[TransformResult]:
        while True:
            item = channel.get()
            if isinstance(item, _Done):
                return
            if isinstance(item, _TransformFailed):
                raise item.error
            yield item

    producer = threading.Thread(target=produce, name="transform-producer", daemon=True)
    producer.start()
    try:
        return engine.reconcile_batch(consume(), entries_seen=len(batch))
    except Exception:
        log.error("Batch aborted before the sweep; currency left unchanged")
        raise
    finally:
        cancelled.set()
        producer.join()
