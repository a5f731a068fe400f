"""Where the incident store and the HTTP cache live on disk."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var

APP_DIR_NAME: Final[str] = "incidentsync"
DEFAULT_DB_FILENAME: Final[str] = "incidentsync.db"
HTTP_CACHE_FILENAME: Final[str] = "http_cache.db"

DATA_DIR_ENV: Final[str] = "INCIDENTSYNC_DATA_DIR"
DATABASE_URI_ENV: Final[str] = "DATABASE_URI"


def _platform_data_home() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        return Path(base) if base else Path.home() / "AppData" / "Local"
    base = os.getenv("XDG_DATA_HOME")
    return Path(base) if base else Path.home() / ".local" / "share"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """``data_dir`` hosts the default SQLite store and the HTTP cache database."""

    data_dir: Path
    database_uri_override: str | None = None

    @classmethod
    def from_environment(cls) -> StorageConfig:
        configured = optional_env_var(DATA_DIR_ENV)
        data_dir = Path(configured) if configured else _platform_data_home() / APP_DIR_NAME
        return cls(
            data_dir=data_dir.expanduser().resolve(),
            database_uri_override=optional_env_var(DATABASE_URI_ENV),
        )

    def _file(self, filename: str) -> Path:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        return self.data_dir / filename

    def database_uri(self) -> str:
        if self.database_uri_override:
            return self.database_uri_override
        return f"sqlite+pysqlite:///{self._file(DEFAULT_DB_FILENAME)}"

    def http_cache_path(self) -> Path:
        return self._file(HTTP_CACHE_FILENAME)


def get_storage_config() -> StorageConfig:
    return StorageConfig.from_environment()


def get_database_uri() -> str:
    """``DATABASE_URI`` when set, else the SQLite file in the data directory."""

    return get_storage_config().database_uri()


def get_http_cache_path() -> Path:
    return get_storage_config().http_cache_path()
