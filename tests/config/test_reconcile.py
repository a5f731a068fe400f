from __future__ import annotations

from zoneinfo import ZoneInfo

import pytest

from incidentsync.config import ConfigurationError, get_feed_config, get_reconcile_config


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("INCIDENTSYNC_WORKERS", "INCIDENTSYNC_QUEUE_SIZE", "INCIDENTSYNC_TIMEZONE"):
        monkeypatch.delenv(name, raising=False)

    config = get_reconcile_config()

    assert config.workers == 4
    assert config.queue_size == 64
    assert config.local_timezone == ZoneInfo("Australia/Sydney")


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INCIDENTSYNC_WORKERS", "2")
    monkeypatch.setenv("INCIDENTSYNC_QUEUE_SIZE", "8")
    monkeypatch.setenv("INCIDENTSYNC_TIMEZONE", "UTC")

    config = get_reconcile_config()

    assert (config.workers, config.queue_size) == (2, 8)
    assert config.local_timezone == ZoneInfo("UTC")


def test_unknown_timezone_is_a_configuration_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INCIDENTSYNC_TIMEZONE", "Mars/Olympus_Mons")

    with pytest.raises(ConfigurationError, match="Mars/Olympus_Mons"):
        get_reconcile_config()


def test_feed_resilience_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("INCIDENTSYNC_HTTP_CACHE", raising=False)
    monkeypatch.delenv("INCIDENTSYNC_HTTP_TIMEOUT", raising=False)

    resilience = get_feed_config().resilience

    assert resilience.retry.total == 4
    assert resilience.ratelimit is not None
    assert resilience.ratelimit.max_calls == 2
    assert resilience.cache is not None
    assert resilience.cache.backend == "memory"
    assert resilience.timeout_seconds == 20.0


def test_feed_cache_can_be_switched_off(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INCIDENTSYNC_HTTP_CACHE", "OFF")
    monkeypatch.setenv("INCIDENTSYNC_HTTP_TIMEOUT", "5")

    resilience = get_feed_config().resilience

    assert resilience.cache is not None
    assert not resilience.cache.enabled
    assert resilience.timeout_seconds == 5.0


def test_unknown_cache_backend_names_the_setting(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INCIDENTSYNC_HTTP_CACHE", "redis")

    with pytest.raises(ConfigurationError) as excinfo:
        get_feed_config()

    assert excinfo.value.setting == "INCIDENTSYNC_HTTP_CACHE"
