"""Ports for obtaining feed snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable

    from incidentsync.domain.model import FeedEntry


@dataclass(frozen=True, slots=True)
class FeedSnapshot:
    """Raw bytes of one published feed, named after where they came from."""

    name: str
    content: bytes


@runtime_checkable
class FeedFetcher(Protocol):
    """Callable port yielding the snapshots available at ``source``."""

    def __call__(self, source: str) -> Iterable[FeedSnapshot]: ...


@runtime_checkable
class FeedDecoder(Protocol):
    """Bind one snapshot's bytes into feed entries."""

    def __call__(self, snapshot: FeedSnapshot) -> list[FeedEntry]: ...


__all__ = ["FeedDecoder", "FeedFetcher", "FeedSnapshot"]
