"""Domain model for incident feeds."""

from __future__ import annotations

from .errors import (
    DateParseFailure,
    DuplicateInsertAttempted,
    EntryError,
    FeedDecodeError,
    FeedFetchError,
    IncidentSyncError,
    InvalidGeometry,
    MalformedIdentifier,
    StoreError,
    StoreUnavailable,
    UnrecognizedGeometryKind,
)
from .feed import DateStyle, FeedEntry
from .geometry import (
    Geometry,
    GeometryCollection,
    GeometryKind,
    LineString,
    Point,
    Polygon,
    Position,
    flatten,
    geometry_from_mapping,
    to_geojson,
    to_wkt,
)
from .incident import Incident, ValidityInterval
from .report import Report

__all__ = [
    "DateParseFailure",
    "DateStyle",
    "DuplicateInsertAttempted",
    "EntryError",
    "FeedDecodeError",
    "FeedEntry",
    "FeedFetchError",
    "Geometry",
    "GeometryCollection",
    "GeometryKind",
    "Incident",
    "IncidentSyncError",
    "InvalidGeometry",
    "LineString",
    "MalformedIdentifier",
    "Point",
    "Polygon",
    "Position",
    "Report",
    "StoreError",
    "StoreUnavailable",
    "UnrecognizedGeometryKind",
    "ValidityInterval",
    "flatten",
    "geometry_from_mapping",
    "to_geojson",
    "to_wkt",
]
