"""Settings for fetching feeds over HTTP."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from .env import optional_choice, optional_positive_float
from .http_resilience import CACHE_BACKENDS, CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

FEED_TIMEOUT_SECONDS: Final[float] = 20.0
FEED_USER_AGENT: Final[str] = "incidentsync (+feed reconciliation)"

HTTP_TIMEOUT_ENV: Final[str] = "INCIDENTSYNC_HTTP_TIMEOUT"
HTTP_CACHE_ENV: Final[str] = "INCIDENTSYNC_HTTP_CACHE"


def default_feed_resilience(
    *,
    timeout_seconds: float = FEED_TIMEOUT_SECONDS,
    cache: CacheConfig | None = None,
) -> ResilienceConfig:
    """Four retries with backoff, two calls per second, in-memory cache unless given."""

    return ResilienceConfig(
        name="feed",
        timeout_seconds=timeout_seconds,
        retry=RetryPolicy(total=4),
        ratelimit=RateLimit(max_calls=2, per_seconds=1.0),
        cache=CacheConfig(backend="memory") if cache is None else cache,
        default_headers={"User-Agent": FEED_USER_AGENT},
    )


@dataclass(frozen=True, slots=True)
class FeedConfig:
    resilience: ResilienceConfig = field(default_factory=default_feed_resilience)


def get_feed_config() -> FeedConfig:
    """Read ``INCIDENTSYNC_HTTP_TIMEOUT`` and ``INCIDENTSYNC_HTTP_CACHE`` (memory|sqlite|off)."""

    timeout = optional_positive_float(HTTP_TIMEOUT_ENV, FEED_TIMEOUT_SECONDS)
    backend = optional_choice(HTTP_CACHE_ENV, (*CACHE_BACKENDS, "off"), "memory")
    cache = CacheConfig(enabled=False) if backend == "off" else CacheConfig(backend=backend)
    return FeedConfig(resilience=default_feed_resilience(timeout_seconds=timeout, cache=cache))
