from __future__ import annotations

import asyncio

import httpx
import pytest

from incidentsync.adapters.http_resilience import (
    ResilientClient,
    _build_cache_storage,  # pyright: ignore[reportPrivateUsage]
    build_retry,
)
from incidentsync.config import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy


def test_build_retry_copies_policy() -> None:
    retry = build_retry(RetryPolicy(total=2, status_forcelist=frozenset({503})))

    assert retry.total == 2


def test_disabled_cache_has_no_storage() -> None:
    assert _build_cache_storage(None) is None
    assert _build_cache_storage(CacheConfig(enabled=False)) is None


def test_unknown_cache_backend_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unsupported cache backend"):
        _build_cache_storage(CacheConfig(backend="redis"))  # type: ignore[arg-type]


def test_rate_limited_client_sends_requests() -> None:
    seen: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.headers["user-agent"])
        return httpx.Response(200, text="ok")

    config = ResilienceConfig(
        name="test",
        cache=None,
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        default_headers={"User-Agent": "incidentsync-test"},
    )

    async def run() -> list[str]:
        async with ResilientClient(config) as client:
            client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
                transport=httpx.MockTransport(handler),
                headers={"User-Agent": "incidentsync-test"},
            )
            responses = [await client.get("https://example.org/feed") for _ in range(3)]
        return [response.text for response in responses]

    assert asyncio.run(run()) == ["ok", "ok", "ok"]
    assert seen == ["incidentsync-test"] * 3
