"""
Combinators - stores that wrap other stores.

Each combinator implements the same protocol as what it wraps, so they
nest in any order:

    CachingStore(
        source=strip_metadata(LoggingStore(RelativeStore(HttpStore(), base), sink)),
        cache=DictStore(),
    )
"""

from strata.combinators.audit import LoggingStore
from strata.combinators.caching import CachingStore
from strata.combinators.metadata import StoreWithMetadata, read_metadata, strip_metadata
from strata.combinators.relative import RelativeStore, path_join, slash_join
from strata.combinators.serializer import (
    SerializerStore,
    json_codec,
    text_formatter,
    yaml_codec,
)

__all__ = [
    "LoggingStore",
    "CachingStore",
    "StoreWithMetadata",
    "read_metadata",
    "strip_metadata",
    "RelativeStore",
    "path_join",
    "slash_join",
    "SerializerStore",
    "json_codec",
    "text_formatter",
    "yaml_codec",
]
