"""Persistence gateway backed by a SQLAlchemy session."""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from logging import getLogger
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import func, select, update
from sqlalchemy.exc import DBAPIError, IntegrityError

from incidentsync.domain.model import (
    DuplicateInsertAttempted,
    Incident,
    Report,
    StoreUnavailable,
    ValidityInterval,
    geometry_from_mapping,
    to_geojson,
    to_wkt,
)

from .mappings import incident_table, report_table

if TYPE_CHECKING:
    from collections.abc import Collection, Iterator
    from datetime import datetime

    from sqlalchemy import Row
    from sqlalchemy.orm import Session

    from incidentsync.domain.ports import PersistenceGateway

log = getLogger(__name__)


@contextmanager
def _store_errors(*, incident_key: int | None = None) -> Iterator[None]:
    try:
        yield
    except IntegrityError as exc:
        if incident_key is None:
            raise StoreUnavailable(str(exc.orig)) from exc
        raise DuplicateInsertAttempted(incident_key) from exc
    except DBAPIError as exc:
        raise StoreUnavailable(str(exc.orig)) from exc


class SqlAlchemyPersistenceGateway:
    def __init__(self, session: Session) -> None:
        self.session = session

    def lookup_incident_by_key(self, incident_key: int) -> Incident | None:
        stmt = select(incident_table).where(incident_table.c.incident_key == incident_key)
        with _store_errors():
            row = self.session.execute(stmt).one_or_none()
        if row is None:
            return None
        return Incident(
            incident_key=row.incident_key,
            storage_id=row.id,
            is_current=row.is_current,
            validity=ValidityInterval(lower=row.valid_from, upper=row.valid_to),
        )

    def insert_incident(self, incident_key: int, first_seen: datetime) -> uuid.UUID:
        storage_id = uuid.uuid4()
        stmt = incident_table.insert().values(
            id=storage_id,
            incident_key=incident_key,
            is_current=True,
            valid_from=first_seen,
            valid_to=first_seen,
        )
        with _store_errors(incident_key=incident_key):
            self.session.execute(stmt)
        return storage_id

    def set_incident_current(self, storage_id: uuid.UUID) -> None:
        stmt = (
            update(incident_table)
            .where(incident_table.c.id == storage_id)
            .values(is_current=True)
        )
        with _store_errors():
            self.session.execute(stmt)

    def extend_incident_validity_upper(self, storage_id: uuid.UUID, new_upper: datetime) -> None:
        stmt = (
            update(incident_table)
            .where(incident_table.c.id == storage_id)
            .where(incident_table.c.valid_to < new_upper)
            .values(valid_to=new_upper)
        )
        with _store_errors():
            self.session.execute(stmt)

    def lookup_report_hash(self, storage_id: uuid.UUID, content_hash: str) -> str | None:
        stmt = (
            select(report_table.c.content_hash)
            .where(report_table.c.incident_id == storage_id)
            .where(report_table.c.content_hash == content_hash)
            .limit(1)
        )
        with _store_errors():
            return self.session.execute(stmt).scalar_one_or_none()

    def insert_report(self, storage_id: uuid.UUID, report: Report) -> uuid.UUID:
        report_id = uuid.uuid4()
        next_sequence = (
            select(func.coalesce(func.max(report_table.c.sequence), 0) + 1)
            .where(report_table.c.incident_id == storage_id)
            .scalar_subquery()
        )
        stmt = report_table.insert().values(
            id=report_id,
            incident_id=storage_id,
            sequence=next_sequence,
            content_hash=report.content_hash,
            guid=report.external_id,
            title=report.title,
            link=report.link,
            category=report.category,
            published_at=report.published_at,
            updated_at=report.updated_at,
            description=report.description_raw,
            attributes=dict(report.attributes),
            alert_level=report.alert_level,
            location=report.location,
            council_area=report.council_area,
            status=report.status,
            fire_type=report.fire_type,
            fire=report.fire,
            size=report.size,
            responsible_agency=report.responsible_agency,
            extra=report.extra,
            geometry=to_geojson(report.geometry),
            geometry_wkt=to_wkt(report.geometry),
        )
        with _store_errors():
            self.session.execute(stmt)
        return report_id

    def mark_not_current_except(self, storage_ids: Collection[uuid.UUID]) -> int:
        stmt = (
            update(incident_table)
            .where(incident_table.c.is_current.is_(True))
            .where(~incident_table.c.id.in_(list(storage_ids)))
            .values(is_current=False)
        )
        with _store_errors():
            result = self.session.execute(stmt)
        retired = cast(int, cast(Any, result).rowcount)
        log.debug("Retired %s incidents", retired)
        return retired

    def list_reports(self, storage_id: uuid.UUID) -> list[Report]:
        stmt = (
            select(report_table)
            .where(report_table.c.incident_id == storage_id)
            .order_by(report_table.c.sequence)
        )
        with _store_errors():
            rows = self.session.execute(stmt).all()
        return [_report_from_row(row) for row in rows]


def _report_from_row(row: Row[Any]) -> Report:
    return Report(
        content_hash=row.content_hash,
        external_id=row.guid,
        title=row.title,
        category=row.category,
        link=row.link,
        published_at=row.published_at,
        updated_at=row.updated_at,
        description_raw=row.description,
        geometry=geometry_from_mapping(row.geometry),
        attributes=dict(row.attributes),
    )


if TYPE_CHECKING:
    _gateway_check: PersistenceGateway = SqlAlchemyPersistenceGateway(cast("Session", None))
