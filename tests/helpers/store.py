"""In-memory persistence gateway and unit of work for engine and app tests."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Literal

from incidentsync.domain.model import (
    DuplicateInsertAttempted,
    Incident,
    StoreUnavailable,
    ValidityInterval,
)

if TYPE_CHECKING:
    from collections.abc import Collection
    from datetime import datetime
    from types import TracebackType

    from incidentsync.domain.model import Report


@dataclass
class InMemoryGateway:
    incidents: dict[int, Incident] = field(default_factory=dict[int, Incident])
    reports: dict[uuid.UUID, list[Report]] = field(
        default_factory=dict[uuid.UUID, list["Report"]]
    )
    calls: list[str] = field(default_factory=list[str])
    fail_on: str | None = None
    forget_inserts: bool = False

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_on == name:
            raise StoreUnavailable(f"{name} failed")

    def by_id(self, storage_id: uuid.UUID) -> Incident:
        return next(i for i in self.incidents.values() if i.storage_id == storage_id)

    def lookup_incident_by_key(self, incident_key: int) -> Incident | None:
        self._record("lookup_incident_by_key")
        if self.forget_inserts:
            return None
        incident = self.incidents.get(incident_key)
        return None if incident is None else replace(incident)

    def insert_incident(self, incident_key: int, first_seen: datetime) -> uuid.UUID:
        self._record("insert_incident")
        if incident_key in self.incidents and not self.forget_inserts:
            raise DuplicateInsertAttempted(incident_key)
        storage_id = uuid.uuid4()
        self.incidents[incident_key] = Incident(
            incident_key=incident_key,
            storage_id=storage_id,
            is_current=True,
            validity=ValidityInterval.starting_at(first_seen),
        )
        self.reports[storage_id] = []
        return storage_id

    def set_incident_current(self, storage_id: uuid.UUID) -> None:
        self._record("set_incident_current")
        self.by_id(storage_id).is_current = True

    def extend_incident_validity_upper(self, storage_id: uuid.UUID, new_upper: datetime) -> None:
        self._record("extend_incident_validity_upper")
        incident = self.by_id(storage_id)
        incident.validity = incident.validity.extended_to(new_upper)

    def lookup_report_hash(self, storage_id: uuid.UUID, content_hash: str) -> str | None:
        self._record("lookup_report_hash")
        for report in self.reports[storage_id]:
            if report.content_hash == content_hash:
                return content_hash
        return None

    def insert_report(self, storage_id: uuid.UUID, report: Report) -> uuid.UUID:
        self._record("insert_report")
        self.reports[storage_id].append(report)
        return uuid.uuid4()

    def mark_not_current_except(self, storage_ids: Collection[uuid.UUID]) -> int:
        self._record("mark_not_current_except")
        retired = 0
        for incident in self.incidents.values():
            if incident.is_current and incident.storage_id not in storage_ids:
                incident.is_current = False
                retired += 1
        return retired

    def list_reports(self, storage_id: uuid.UUID) -> list[Report]:
        return list(self.reports[storage_id])

    def current_keys(self) -> set[int]:
        return {key for key, incident in self.incidents.items() if incident.is_current}


class InMemoryUnitOfWork:
    """Commits are counted; rollbacks only counted, the gateway keeps its state."""

    def __init__(self, gateway: InMemoryGateway) -> None:
        self._gateway = gateway
        self.commits = 0
        self.rollbacks = 0

    @property
    def gateway(self) -> InMemoryGateway:
        return self._gateway

    def __enter__(self) -> InMemoryUnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        return False

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1


if TYPE_CHECKING:
    from incidentsync.domain.ports import PersistenceGateway, UnitOfWork

    _gateway_check: PersistenceGateway = InMemoryGateway()
    _uow_check: UnitOfWork = InMemoryUnitOfWork(InMemoryGateway())
