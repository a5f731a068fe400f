"""Typed readers for environment settings."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import ConfigurationError, MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence


def _lookup(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def require_env_vars(names: Sequence[str]) -> dict[str, str]:
    """Return every named setting; all missing names are reported together."""

    values = {name: _lookup(name) for name in names}
    missing = tuple(sorted(name for name, value in values.items() if value is None))
    if missing:
        raise MissingConfigurationError(missing)
    return {name: value for name, value in values.items() if value is not None}


def require_env_var(name: str) -> str:
    return require_env_vars([name])[name]


def optional_env_var(name: str) -> str | None:
    return _lookup(name)


def optional_positive_int(name: str, default: int) -> int:
    raw = _lookup(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}", setting=name) from exc
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}", setting=name)
    return value


def optional_positive_float(name: str, default: float) -> float:
    raw = _lookup(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}", setting=name) from exc
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}", setting=name)
    return value


def optional_choice[T: str](name: str, choices: Sequence[T], default: T) -> T:
    raw = _lookup(name)
    if raw is None:
        return default
    for choice in choices:
        if raw.lower() == choice:
            return choice
    raise ConfigurationError(
        f"{name} must be one of {', '.join(choices)}, got {raw!r}", setting=name
    )
