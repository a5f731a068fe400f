"""Port for the durable incident/report store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Collection
    from datetime import datetime
    from uuid import UUID

    from incidentsync.domain.model import Incident, Report


@runtime_checkable
class PersistenceGateway(Protocol):
    """Query/command surface the reconciliation engine needs from a store.

    Implementations raise :class:`StoreUnavailable` when the store cannot serve a
    call and :class:`DuplicateInsertAttempted` when an incident key is inserted
    twice.
    """

    def lookup_incident_by_key(self, incident_key: int) -> Incident | None: ...

    def insert_incident(self, incident_key: int, first_seen: datetime) -> UUID:
        """Create a current incident with validity ``[first_seen, first_seen]``."""
        ...

    def set_incident_current(self, storage_id: UUID) -> None: ...

    def extend_incident_validity_upper(self, storage_id: UUID, new_upper: datetime) -> None:
        """Advance the upper bound; a no-op when ``new_upper`` is not later."""
        ...

    def lookup_report_hash(self, storage_id: UUID, content_hash: str) -> str | None:
        """Return ``content_hash`` if the incident already has a report with it."""
        ...

    def insert_report(self, storage_id: UUID, report: Report) -> UUID: ...

    def mark_not_current_except(self, storage_ids: Collection[UUID]) -> int:
        """Retire every current incident outside ``storage_ids``; returns the count."""
        ...

    def list_reports(self, storage_id: UUID) -> list[Report]:
        """Reports of one incident in insertion order."""
        ...
