"""SQLAlchemy Core tables for incidents and their reports."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Dialect,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    """Store aware datetimes as UTC; SQLite hands them back naive, so re-attach UTC."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


def _utcnow() -> datetime:
    return datetime.now(UTC)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

incident_table = Table(
    "incident",
    metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("incident_key", Integer, nullable=False),
    Column("is_current", Boolean, nullable=False, default=True),
    Column("valid_from", UTCDateTime(), nullable=False),
    Column("valid_to", UTCDateTime(), nullable=False),
    Column("created_at", UTCDateTime(), nullable=False, default=_utcnow),
    UniqueConstraint("incident_key", name="uq_incident_key"),
    Index("ix_incident_is_current", "is_current"),
)

report_table = Table(
    "report",
    metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "incident_id",
        UUIDColumnType,
        ForeignKey("incident.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("sequence", Integer, nullable=False),
    Column("content_hash", String(40), nullable=False),
    Column("guid", String(255), nullable=False),
    Column("title", Text, nullable=False),
    Column("link", Text, nullable=False),
    Column("category", String(255), nullable=False),
    Column("published_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=True),
    Column("description", Text, nullable=False),
    Column("attributes", JSON, nullable=False),
    Column("alert_level", String(255), nullable=True),
    Column("location", Text, nullable=True),
    Column("council_area", String(255), nullable=True),
    Column("status", String(255), nullable=True),
    Column("fire_type", String(255), nullable=True),
    Column("fire", Boolean, nullable=True),
    Column("size", String(255), nullable=True),
    Column("responsible_agency", String(255), nullable=True),
    Column("extra", Text, nullable=True),
    Column("geometry", JSON, nullable=False),
    Column("geometry_wkt", Text, nullable=False),
    Column("imported_at", UTCDateTime(), nullable=False, default=_utcnow),
    UniqueConstraint("incident_id", "content_hash", name="uq_report_content"),
    Index("ix_report_incident_sequence", "incident_id", "sequence"),
)


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the incident store."""

    log.info("Creating all tables")
    metadata.create_all(engine)
