"""Bind GeoRSS (RSS 2.0 + ``georss:`` shapes) documents into feed entries.

GeoRSS writes coordinates as ``"lat lon"`` pairs; the entries carry GeoJSON
order (``[lon, lat]``). Coordinate tokens are passed through untouched when they
are not numeric so the normalizer can reject the entry on its own.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING, Final

from incidentsync.domain.model import DateStyle, FeedDecodeError, FeedEntry, GeometryKind

if TYPE_CHECKING:
    from collections.abc import Iterator

GEORSS_NAMESPACE: Final[str] = "http://www.georss.org/georss"

_SHAPE_KINDS: Final[dict[str, GeometryKind]] = {
    "point": GeometryKind.POINT,
    "line": GeometryKind.LINE_STRING,
    "polygon": GeometryKind.POLYGON,
}


def parse_georss(content: bytes, *, source: str = "<georss>") -> list[FeedEntry]:
    try:
        root = ET.fromstring(content)  # noqa: S314
    except ET.ParseError as exc:
        raise FeedDecodeError(source, str(exc)) from exc

    return [_entry_from_item(item) for item in _iter_items(root)]


def _localname(tag: str) -> str:
    if "}" in tag:
        return tag.split("}", 1)[1]
    return tag


def _iter_items(root: ET.Element) -> Iterator[ET.Element]:
    for element in root.iter():
        if _localname(element.tag) == "item":
            yield element


def _child_text(item: ET.Element, name: str) -> str:
    for child in item:
        if _localname(child.tag) == name:
            return (child.text or "").strip()
    return ""


def _entry_from_item(item: ET.Element) -> FeedEntry:
    return FeedEntry(
        geometry=_item_geometry(item),
        guid=_child_text(item, "guid"),
        title=_child_text(item, "title"),
        link=_child_text(item, "link"),
        category=_child_text(item, "category"),
        pub_date=_child_text(item, "pubDate"),
        description=_child_text(item, "description"),
        date_style=DateStyle.RFC822,
    )


def _item_geometry(item: ET.Element) -> dict[str, object] | None:
    shapes: list[dict[str, object]] = []
    for child in item:
        if not child.tag.startswith(f"{{{GEORSS_NAMESPACE}}}"):
            continue
        kind = _SHAPE_KINDS.get(_localname(child.tag))
        if kind is None:
            continue
        shapes.append(shape_geometry(kind, child.text or ""))

    if not shapes:
        return None
    if len(shapes) == 1:
        return shapes[0]
    return {"type": GeometryKind.GEOMETRY_COLLECTION.value, "geometries": shapes}


def shape_geometry(kind: GeometryKind, text: str) -> dict[str, object]:
    """``shape_geometry(POINT, "-33.6097 150.0216")`` -> Point ``[150.0216, -33.6097]``."""

    positions = lat_lon_positions(text)
    match kind:
        case GeometryKind.POINT:
            coordinates: object = positions[0] if len(positions) == 1 else positions
        case GeometryKind.LINE_STRING:
            coordinates = positions
        case _:
            coordinates = [positions]
    return {"type": kind.value, "coordinates": coordinates}


def lat_lon_positions(text: str) -> list[list[float | str]]:
    tokens = [_number_or_token(token) for token in text.split()]
    positions: list[list[float | str]] = []
    for index in range(0, len(tokens), 2):
        lat_lon = tokens[index : index + 2]
        positions.append(list(reversed(lat_lon)))
    return positions


def _number_or_token(token: str) -> float | str:
    try:
        return float(token)
    except ValueError:
        return token
