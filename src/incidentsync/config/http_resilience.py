"""Retry, rate-limit and cache settings for the feed HTTP client."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from collections.abc import Mapping

type CacheBackend = Literal["sqlite", "memory"]

CACHE_BACKENDS: tuple[CacheBackend, ...] = ("sqlite", "memory")


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """Retries of GET requests on transport errors and on ``status_forcelist`` answers."""

    total: int = 4
    backoff_factor: float = 0.5
    status_forcelist: frozenset[int] = frozenset({429, 500, 502, 503, 504})


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float


@dataclass(slots=True, frozen=True)
class CacheConfig:
    """Response cache; ``sqlite`` keeps it in the data directory between runs."""

    enabled: bool = True
    backend: CacheBackend = "memory"
    ttl_seconds: float | None = None


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    name: str
    timeout_seconds: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    cache: CacheConfig | None = field(default_factory=CacheConfig)
    default_headers: Mapping[str, str] | None = None
