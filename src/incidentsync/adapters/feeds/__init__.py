"""Feed adapters: fetch snapshots and bind them into feed entries."""

from __future__ import annotations

from .decoding import decode_feed, is_xml
from .fetcher import (
    DirectoryFeedFetcher,
    FileFeedFetcher,
    HttpFeedFetcher,
    SourceFetcher,
    is_url,
)
from .geojson import parse_geojson
from .georss import parse_georss

__all__ = [
    "DirectoryFeedFetcher",
    "FileFeedFetcher",
    "HttpFeedFetcher",
    "SourceFetcher",
    "decode_feed",
    "is_url",
    "is_xml",
    "parse_geojson",
    "parse_georss",
]
