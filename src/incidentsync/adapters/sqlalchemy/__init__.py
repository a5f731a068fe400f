"""SQLAlchemy adapter package for the incident store."""

from __future__ import annotations

from .gateway import SqlAlchemyPersistenceGateway
from .mappings import create_all_tables, incident_table, metadata, report_table
from .unit_of_work import (
    SqlAlchemyUnitOfWork,
    StartupError,
    build_engine,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyPersistenceGateway",
    "SqlAlchemyUnitOfWork",
    "StartupError",
    "build_engine",
    "configured_engine",
    "create_all_tables",
    "incident_table",
    "is_started",
    "metadata",
    "report_table",
    "shutdown",
    "startup",
]
