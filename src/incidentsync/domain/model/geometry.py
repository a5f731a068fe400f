"""Geometry sum type shared by feed entries and reports.

Each variant carries exactly the payload its kind needs. Collections never nest
once they went through :func:`flatten`, which every parsed geometry does.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar, cast

from .errors import InvalidGeometry, UnrecognizedGeometryKind

type Position = tuple[float, ...]


class GeometryKind(StrEnum):
    POINT = "Point"
    LINE_STRING = "LineString"
    POLYGON = "Polygon"
    GEOMETRY_COLLECTION = "GeometryCollection"


@dataclass(frozen=True, slots=True)
class Point:
    coordinates: Position

    KIND: ClassVar[GeometryKind] = GeometryKind.POINT


@dataclass(frozen=True, slots=True)
class LineString:
    coordinates: tuple[Position, ...]

    KIND: ClassVar[GeometryKind] = GeometryKind.LINE_STRING


@dataclass(frozen=True, slots=True)
class Polygon:
    rings: tuple[tuple[Position, ...], ...]

    KIND: ClassVar[GeometryKind] = GeometryKind.POLYGON


@dataclass(frozen=True, slots=True)
class GeometryCollection:
    geometries: tuple[Geometry, ...]

    KIND: ClassVar[GeometryKind] = GeometryKind.GEOMETRY_COLLECTION


type Geometry = Point | LineString | Polygon | GeometryCollection


def flatten(geometry: Geometry) -> Geometry:
    """Hoist the members of nested collections into the outermost collection.

    Members keep their depth-first order. Non-collection geometries are returned
    unchanged.
    """

    if not isinstance(geometry, GeometryCollection):
        return geometry
    return GeometryCollection(geometries=tuple(_iter_leaves(geometry)))


def _iter_leaves(collection: GeometryCollection) -> list[Geometry]:
    leaves: list[Geometry] = []
    for member in collection.geometries:
        if isinstance(member, GeometryCollection):
            leaves.extend(_iter_leaves(member))
        else:
            leaves.append(member)
    return leaves


# Parsing ----------------------------------------------------------------------


def geometry_from_mapping(payload: Mapping[str, object] | None) -> Geometry:
    """Build a flattened geometry from a GeoJSON-shaped mapping."""

    if payload is None:
        raise UnrecognizedGeometryKind(None)
    return flatten(_parse(payload))


def _parse(payload: Mapping[str, object]) -> Geometry:
    kind = payload.get("type")
    match kind:
        case GeometryKind.POINT:
            return Point(coordinates=_position(payload.get("coordinates")))
        case GeometryKind.LINE_STRING:
            return LineString(coordinates=_positions(payload.get("coordinates")))
        case GeometryKind.POLYGON:
            rings = _sequence(payload.get("coordinates"), "polygon rings")
            return Polygon(rings=tuple(_positions(ring) for ring in rings))
        case GeometryKind.GEOMETRY_COLLECTION:
            members = _sequence(payload.get("geometries"), "collection members")
            parsed: list[Geometry] = []
            for member in members:
                if not isinstance(member, Mapping):
                    raise InvalidGeometry(f"Collection member is not an object: {member!r}")
                parsed.append(_parse(cast(Mapping[str, object], member)))
            return GeometryCollection(geometries=tuple(parsed))
        case _:
            raise UnrecognizedGeometryKind(kind)


def _sequence(value: object, what: str) -> Sequence[object]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise InvalidGeometry(f"Expected a list of {what}, got {value!r}")
    return cast(Sequence[object], value)


def _position(value: object) -> Position:
    items = _sequence(value, "coordinates")
    if len(items) < 2:
        raise InvalidGeometry(f"A position needs at least two coordinates: {value!r}")
    try:
        return tuple(float(cast(float, item)) for item in items)
    except (TypeError, ValueError) as exc:
        raise InvalidGeometry(f"Non-numeric coordinate in {value!r}") from exc


def _positions(value: object) -> tuple[Position, ...]:
    return tuple(_position(item) for item in _sequence(value, "positions"))


# Rendering --------------------------------------------------------------------


def to_geojson(geometry: Geometry) -> dict[str, object]:
    """Render ``geometry`` as a GeoJSON geometry object."""

    match geometry:
        case Point(coordinates=coordinates):
            return {"type": geometry.KIND.value, "coordinates": list(coordinates)}
        case LineString(coordinates=coordinates):
            return {"type": geometry.KIND.value, "coordinates": [list(p) for p in coordinates]}
        case Polygon(rings=rings):
            return {
                "type": geometry.KIND.value,
                "coordinates": [[list(p) for p in ring] for ring in rings],
            }
        case GeometryCollection(geometries=members):
            return {"type": geometry.KIND.value, "geometries": [to_geojson(m) for m in members]}


def to_wkt(geometry: Geometry) -> str:
    """Render ``geometry`` as well-known text, e.g. ``POINT(150.0216 -33.6097)``."""

    match geometry:
        case Point(coordinates=coordinates):
            return f"POINT({_wkt_position(coordinates)})"
        case LineString(coordinates=coordinates):
            return f"LINESTRING({_wkt_positions(coordinates)})"
        case Polygon(rings=rings):
            return f"POLYGON({_wkt_rings(rings)})"
        case GeometryCollection(geometries=()):
            return "GEOMETRYCOLLECTION EMPTY"
        case GeometryCollection(geometries=members):
            return f"GEOMETRYCOLLECTION({', '.join(to_wkt(m) for m in members)})"


def _wkt_number(value: float) -> str:
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def _wkt_position(position: Position) -> str:
    return " ".join(_wkt_number(value) for value in position)


def _wkt_positions(positions: Sequence[Position]) -> str:
    return ", ".join(_wkt_position(position) for position in positions)


def _wkt_rings(rings: Sequence[Sequence[Position]]) -> str:
    return ",".join(f"({_wkt_positions(ring)})" for ring in rings)
