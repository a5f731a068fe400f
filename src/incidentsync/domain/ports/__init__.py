"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import FeedDecoder, FeedFetcher, FeedSnapshot
from .persistence import PersistenceGateway
from .unit_of_work import UnitOfWork

__all__ = [
    "FeedDecoder",
    "FeedFetcher",
    "FeedSnapshot",
    "PersistenceGateway",
    "UnitOfWork",
]
