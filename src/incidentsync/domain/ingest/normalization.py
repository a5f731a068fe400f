"""Turn raw feed entries into :class:`Report` values."""

from __future__ import annotations

from datetime import UTC
from logging import getLogger
from typing import TYPE_CHECKING

from incidentsync.domain.model import DateParseFailure, Report, geometry_from_mapping

from .dates import parse_published_at, parse_updated_at
from .description import UPDATED_KEY, parse_description
from .hashing import compute_content_hash

if TYPE_CHECKING:
    from datetime import datetime, tzinfo

    from incidentsync.domain.model import FeedEntry

log = getLogger(__name__)


def normalize_entry(entry: FeedEntry, *, local_zone: tzinfo = UTC) -> Report:
    """Build a report from ``entry``.

    Raises :class:`UnrecognizedGeometryKind`, :class:`InvalidGeometry` or
    :class:`DateParseFailure` (for ``pubDate``). An unparsable ``UPDATED``
    attribute only leaves ``updated_at`` unset.
    """

    geometry = geometry_from_mapping(entry.geometry)
    published_at = parse_published_at(entry.pub_date, entry.date_style)
    attributes = parse_description(entry.description)
    updated_at = _updated_at(entry, attributes.get(UPDATED_KEY), local_zone)

    content_hash = compute_content_hash(
        external_id=entry.guid,
        title=entry.title,
        category=entry.category,
        link=entry.link,
        published_at=published_at,
        description_raw=entry.description,
        geometry=geometry,
    )
    return Report(
        content_hash=content_hash,
        external_id=entry.guid,
        title=entry.title,
        category=entry.category,
        link=entry.link,
        published_at=published_at,
        updated_at=updated_at,
        description_raw=entry.description,
        geometry=geometry,
        attributes=attributes,
    )


def _updated_at(entry: FeedEntry, raw: str | None, zone: tzinfo) -> datetime | None:
    if not raw:
        return None
    try:
        return parse_updated_at(raw, zone=zone)
    except DateParseFailure:
        log.warning("Unparsable UPDATED value %r on %s (%s)", raw, entry.guid, entry.title)
        return None
