"""Pick the wire format of a snapshot and bind it into feed entries."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from incidentsync.domain.model import FeedDecodeError

from .geojson import parse_geojson
from .georss import parse_georss

if TYPE_CHECKING:
    from incidentsync.domain.model import FeedEntry
    from incidentsync.domain.ports import FeedSnapshot

log = getLogger(__name__)


def is_xml(content: bytes) -> bool:
    return content.lstrip()[:1] == b"<"


def decode_feed(snapshot: FeedSnapshot) -> list[FeedEntry]:
    """GeoRSS when the content starts with ``<``, GeoJSON otherwise."""

    content = snapshot.content.removeprefix(b"\xef\xbb\xbf")
    if not content.strip():
        raise FeedDecodeError(snapshot.name, "empty document")
    if is_xml(content):
        entries = parse_georss(content, source=snapshot.name)
        log.debug("Decoded %s GeoRSS items from %s", len(entries), snapshot.name)
    else:
        entries = parse_geojson(content, source=snapshot.name)
        log.debug("Decoded %s GeoJSON features from %s", len(entries), snapshot.name)
    return entries
