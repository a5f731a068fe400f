"""Environment-driven configuration."""

from __future__ import annotations

from .env import (
    optional_choice,
    optional_env_var,
    optional_positive_float,
    optional_positive_int,
    require_env_var,
    require_env_vars,
)
from .errors import ConfigurationError, MissingConfigurationError
from .feeds import FeedConfig, default_feed_resilience, get_feed_config
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .reconcile import ReconcileConfig, get_reconcile_config
from .storage import StorageConfig, get_database_uri, get_http_cache_path, get_storage_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "FeedConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ReconcileConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "default_feed_resilience",
    "get_database_uri",
    "get_feed_config",
    "get_http_cache_path",
    "get_reconcile_config",
    "get_storage_config",
    "optional_choice",
    "optional_env_var",
    "optional_positive_float",
    "optional_positive_int",
    "require_env_var",
    "require_env_vars",
]
