"""Batch pipeline sizing and the local timezone of free-text timestamps."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .env import optional_env_var, optional_positive_int
from .errors import ConfigurationError

DEFAULT_TRANSFORM_WORKERS: Final[int] = 4
DEFAULT_QUEUE_SIZE: Final[int] = 64
DEFAULT_LOCAL_TIMEZONE: Final[str] = "Australia/Sydney"

WORKERS_ENV: Final[str] = "INCIDENTSYNC_WORKERS"
QUEUE_SIZE_ENV: Final[str] = "INCIDENTSYNC_QUEUE_SIZE"
TIMEZONE_ENV: Final[str] = "INCIDENTSYNC_TIMEZONE"


def _default_zone() -> ZoneInfo:
    return ZoneInfo(DEFAULT_LOCAL_TIMEZONE)


@dataclass(frozen=True, slots=True)
class ReconcileConfig:
    workers: int = DEFAULT_TRANSFORM_WORKERS
    queue_size: int = DEFAULT_QUEUE_SIZE
    local_timezone: ZoneInfo = field(default_factory=_default_zone)


def _zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError(f"Unknown timezone: {name}", setting=TIMEZONE_ENV) from exc


def get_reconcile_config() -> ReconcileConfig:
    return ReconcileConfig(
        workers=optional_positive_int(WORKERS_ENV, DEFAULT_TRANSFORM_WORKERS),
        queue_size=optional_positive_int(QUEUE_SIZE_ENV, DEFAULT_QUEUE_SIZE),
        local_timezone=_zone(optional_env_var(TIMEZONE_ENV) or DEFAULT_LOCAL_TIMEZONE),
    )
