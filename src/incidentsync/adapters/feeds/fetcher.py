"""Feed snapshot fetchers for URLs, files and directories."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Final
from urllib.parse import urlsplit

import httpx

from incidentsync.adapters.http_resilience import ResilientClient
from incidentsync.config.feeds import get_feed_config
from incidentsync.domain.model import FeedFetchError
from incidentsync.domain.ports import FeedFetcher, FeedSnapshot

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from incidentsync.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

FEED_SUFFIXES: Final[frozenset[str]] = frozenset({".json", ".xml", ".geojson", ".rss"})


def is_url(source: str) -> bool:
    parts = urlsplit(source)
    return parts.scheme in {"http", "https"} and bool(parts.netloc)


def _default_resilience() -> ResilienceConfig:
    return get_feed_config().resilience


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class HttpFeedFetcher:
    resilience: ResilienceConfig = field(default_factory=_default_resilience)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def __call__(self, source: str) -> list[FeedSnapshot]:
        return [asyncio.run(self._fetch_async(source))]

    async def _fetch_async(self, url: str) -> FeedSnapshot:
        async with self.client_factory(self.resilience) as client:
            try:
                response = await client.get(url)
                response.raise_for_status()
            except httpx.HTTPError as exc:
                raise FeedFetchError(url, str(exc)) from exc
        log.debug("Fetched %s bytes from %s", len(response.content), url)
        return FeedSnapshot(name=url, content=response.content)


def read_file(path: Path) -> FeedSnapshot:
    try:
        content = path.read_bytes()
    except OSError as exc:
        raise FeedFetchError(str(path), str(exc)) from exc
    return FeedSnapshot(name=str(path), content=content)


def iter_feed_files(directory: Path) -> Iterator[Path]:
    """Feed files directly inside ``directory``, in lexical order."""

    for path in sorted(directory.iterdir()):
        if path.is_file() and path.suffix.lower() in FEED_SUFFIXES:
            yield path


class FileFeedFetcher:
    def __call__(self, source: str) -> list[FeedSnapshot]:
        return [read_file(Path(source))]


class DirectoryFeedFetcher:
    """Yields one snapshot per feed file; files are read lazily."""

    def __call__(self, source: str) -> Iterator[FeedSnapshot]:
        directory = Path(source)
        if not directory.is_dir():
            raise FeedFetchError(source, "not a directory")
        for path in iter_feed_files(directory):
            yield read_file(path)


@dataclass(slots=True)
class SourceFetcher:
    """Dispatch on the source: absolute URL, directory, or single file."""

    http: FeedFetcher = field(default_factory=HttpFeedFetcher)
    directory: FeedFetcher = field(default_factory=DirectoryFeedFetcher)
    file: FeedFetcher = field(default_factory=FileFeedFetcher)

    def __call__(self, source: str) -> Iterator[FeedSnapshot]:
        if is_url(source):
            yield from self.http(source)
        elif Path(source).is_dir():
            yield from self.directory(source)
        else:
            yield from self.file(source)


if TYPE_CHECKING:
    _http_check: FeedFetcher = HttpFeedFetcher()
    _file_check: FeedFetcher = FileFeedFetcher()
    _directory_check: FeedFetcher = DirectoryFeedFetcher()
