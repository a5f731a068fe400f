"""Content hashing and change detection for reports."""

from __future__ import annotations

import hashlib
import json
from enum import StrEnum
from typing import TYPE_CHECKING

from incidentsync.domain.model import to_geojson

if TYPE_CHECKING:
    from datetime import datetime

    from incidentsync.domain.model import Geometry


class ContentChange(StrEnum):
    CHANGED = "changed"
    UNCHANGED = "unchanged"


def compute_content_hash(
    *,
    external_id: str,
    title: str,
    category: str,
    link: str,
    published_at: datetime,
    description_raw: str,
    geometry: Geometry,
) -> str:
    """SHA-1 over a canonical JSON rendering of the report's semantic content.

    Only feed content goes in; nothing observed at import time does, so the same
    entry fetched twice always hashes the same.
    """

    payload = {
        "guid": external_id,
        "title": title,
        "category": category,
        "link": link,
        "published_at": published_at.isoformat(),
        "description": description_raw,
        "geometry": to_geojson(geometry),
    }
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha1(canonical.encode("utf-8")).hexdigest()  # noqa: S324


def classify_change(content_hash: str, stored_hash: str | None) -> ContentChange:
    """Compare a fresh hash with the one already stored for the incident (if any)."""

    if stored_hash is None or stored_hash != content_hash:
        return ContentChange.CHANGED
    return ContentChange.UNCHANGED
