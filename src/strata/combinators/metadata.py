"""
Metadata-carrying stores.

A StoreWithMetadata holds ``Entry(data, metadata)`` values where the
metadata is itself a store scoped to a single resource (HttpStore hands
back a HeadersStore). Consumers that only want the data project it away
with ``strip_metadata``; the metadata is optional, so writes through the
projection carry none.
"""

from typing import Any

from strata.combinators.serializer import SerializerStore
from strata.core.types import Entry
from strata.storage.protocol import Store

StoreWithMetadata = Store[Entry]


def strip_metadata(source: StoreWithMetadata) -> SerializerStore[Any, Entry]:
    """View a metadata-carrying store as a plain store of its data."""
    return SerializerStore(
        source,
        encode=lambda data: Entry(data=data),
        decode=lambda entry: entry.data,
    )


async def read_metadata(source: StoreWithMetadata, ref: str, key: str) -> str | None:
    """Fetch one metadata field (e.g. a header) of the resource at ``ref``."""
    entry = await source.get(ref)
    if entry is None or entry.metadata is None:
        return None
    return await entry.metadata.get(key)
