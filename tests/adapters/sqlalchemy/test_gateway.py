from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import select

from incidentsync.adapters.sqlalchemy import SqlAlchemyPersistenceGateway, report_table
from incidentsync.domain.model import DuplicateInsertAttempted, GeometryCollection, Point
from tests.helpers.feeds import make_report, published

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


@pytest.fixture
def gateway(sqlite_session: Session) -> SqlAlchemyPersistenceGateway:
    return SqlAlchemyPersistenceGateway(sqlite_session)


def test_inserted_incident_is_current_with_point_validity(
    gateway: SqlAlchemyPersistenceGateway,
) -> None:
    storage_id = gateway.insert_incident(80707, published())

    incident = gateway.lookup_incident_by_key(80707)

    assert incident is not None
    assert incident.storage_id == storage_id
    assert incident.is_current
    assert incident.validity.lower == incident.validity.upper == published()
    assert gateway.lookup_incident_by_key(1) is None


def test_duplicate_incident_key_is_rejected(gateway: SqlAlchemyPersistenceGateway) -> None:
    gateway.insert_incident(80707, published())

    with pytest.raises(DuplicateInsertAttempted) as excinfo:
        gateway.insert_incident(80707, published(hour=1))

    assert excinfo.value.incident_key == 80707


def test_validity_upper_only_moves_forward(gateway: SqlAlchemyPersistenceGateway) -> None:
    storage_id = gateway.insert_incident(1, published(hour=2))

    gateway.extend_incident_validity_upper(storage_id, published(hour=5))
    gateway.extend_incident_validity_upper(storage_id, published(hour=3))

    incident = gateway.lookup_incident_by_key(1)
    assert incident is not None
    assert incident.validity.lower == published(hour=2)
    assert incident.validity.upper == published(hour=5)


def test_sweep_retires_everything_not_listed(gateway: SqlAlchemyPersistenceGateway) -> None:
    keep = gateway.insert_incident(1, published())
    gateway.insert_incident(2, published())
    gateway.insert_incident(3, published())

    assert gateway.mark_not_current_except({keep}) == 2
    assert gateway.mark_not_current_except({keep}) == 0

    retired = gateway.lookup_incident_by_key(2)
    assert retired is not None
    assert not retired.is_current

    gateway.set_incident_current(retired.storage_id)
    revived = gateway.lookup_incident_by_key(2)
    assert revived is not None
    assert revived.is_current


def test_sweep_with_nothing_touched_retires_all(gateway: SqlAlchemyPersistenceGateway) -> None:
    gateway.insert_incident(1, published())
    gateway.insert_incident(2, published())

    assert gateway.mark_not_current_except(set()) == 2


def test_reports_are_listed_in_insertion_order(gateway: SqlAlchemyPersistenceGateway) -> None:
    storage_id = gateway.insert_incident(1, published())
    first = make_report(1)
    second = make_report(
        1,
        title="Spreading",
        geometry={
            "type": "GeometryCollection",
            "geometries": [
                {"type": "Point", "coordinates": [1, 2]},
                {"type": "Point", "coordinates": [3, 4]},
            ],
        },
    )

    gateway.insert_report(storage_id, first)
    gateway.insert_report(storage_id, second)

    listed = gateway.list_reports(storage_id)
    assert listed == [first, second]
    assert isinstance(listed[0].geometry, Point)
    assert isinstance(listed[1].geometry, GeometryCollection)


def test_report_hash_lookup(gateway: SqlAlchemyPersistenceGateway) -> None:
    storage_id = gateway.insert_incident(1, published())
    report = make_report(1)
    gateway.insert_report(storage_id, report)

    assert gateway.lookup_report_hash(storage_id, report.content_hash) == report.content_hash
    assert gateway.lookup_report_hash(storage_id, "0" * 40) is None


def test_report_details_and_wkt_are_stored_as_columns(
    gateway: SqlAlchemyPersistenceGateway, sqlite_session: Session
) -> None:
    storage_id = gateway.insert_incident(80707, published())
    gateway.insert_report(storage_id, make_report(80707))

    row = sqlite_session.execute(select(report_table)).one()

    assert row.sequence == 1
    assert row.alert_level == "Advice"
    assert row.council_area == "Blue Mountains"
    assert row.fire_type == "Bush Fire"
    assert row.fire is True
    assert row.responsible_agency == "Rural Fire Service"
    assert row.geometry_wkt == "POINT(150.0216 -33.6097)"
    assert row.geometry == {"type": "Point", "coordinates": [150.0216, -33.6097]}
