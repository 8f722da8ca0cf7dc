"""
Ready-made compositions.

``build_http_cache`` assembles the standard client stack:

    CachingStore
    ├── source: strip_metadata(LoggingStore(RelativeStore(HttpStore, base_url)))
    └── cache:  LoggingStore(DiskStore(cache_dir))

The LoggingStores write "[SOURCE] GET todos/1" style lines to a
ConsoleStore; they are left out when ``verbose`` is False.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import IO

import httpx

from strata.combinators.audit import LoggingStore
from strata.combinators.caching import CachingStore
from strata.combinators.metadata import strip_metadata
from strata.combinators.relative import RelativeStore
from strata.combinators.serializer import SerializerStore, text_formatter
from strata.core.config import Settings, settings as default_settings
from strata.storage.console import ConsoleStore
from strata.storage.disk import DiskStore
from strata.storage.http import HttpStore
from strata.storage.protocol import Store


@dataclass
class Composition:
    """A composed store plus handles to the leaves callers may need directly."""

    store: CachingStore[str]
    """The outermost store clients talk to."""

    cache: DiskStore
    """The cache leaf, for eviction without touching the source."""

    remote: RelativeStore
    """The network source relative to base_url, metadata intact and uncached."""


def console_log(console: ConsoleStore, label: str) -> SerializerStore[str, str]:
    """A write-only sink rendering each entry as ``"[label] entry"`` on its own line."""
    return SerializerStore(console, encode=text_formatter(f"[{label}] {{}}\n"))


def build_http_cache(
    config: Settings | None = None,
    client: httpx.AsyncClient | None = None,
    cache_dir: Path | None = None,
    verbose: bool = True,
    stream: IO[str] | None = None,
) -> Composition:
    """Build the HTTP-source, disk-cache composition from settings."""
    config = config or default_settings
    console = ConsoleStore(stream)

    remote = RelativeStore(HttpStore(client=client, timeout=config.http_timeout), config.base_url)
    source: Store = remote
    if verbose:
        source = LoggingStore(source, console_log(console, "SOURCE"), config.log_sink_ref)

    disk = DiskStore(cache_dir or config.cache_dir)
    cache: Store[str] = disk
    if verbose:
        cache = LoggingStore(disk, console_log(console, "CACHE"), config.log_sink_ref)

    return Composition(
        store=CachingStore(strip_metadata(source), cache),
        cache=disk,
        remote=remote,
    )
