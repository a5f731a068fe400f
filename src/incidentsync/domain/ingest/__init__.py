"""Pure transform stage: feed entry -> report, identity and content hash."""

from __future__ import annotations

from .dates import parse_published_at, parse_updated_at
from .description import BREAK_MARKER, normalize_label, parse_description, strip_trailing_markup
from .hashing import ContentChange, classify_change, compute_content_hash
from .identity import resolve_incident_key
from .normalization import normalize_entry

__all__ = [
    "BREAK_MARKER",
    "ContentChange",
    "classify_change",
    "compute_content_hash",
    "normalize_entry",
    "normalize_label",
    "parse_description",
    "parse_published_at",
    "parse_updated_at",
    "resolve_incident_key",
    "strip_trailing_markup",
]
