"""
Strata

Compositional storage: one small get/put/merge/delete protocol, a few leaf
stores, and combinators (caching, logging, relative references, format
translation) that nest to build complex access patterns.
"""

__version__ = "0.1.0"
__author__ = "Strata Team"

from strata.core.config import settings
from strata.core.errors import (
    BackendFailure,
    PartialWriteFailure,
    StoreError,
    UnsupportedOperation,
)
from strata.core.types import Entry, MergePolicy, Operation
from strata.storage.protocol import Store
from strata.combinators import (
    CachingStore,
    LoggingStore,
    RelativeStore,
    SerializerStore,
    strip_metadata,
)

__all__ = [
    "settings",
    "BackendFailure",
    "PartialWriteFailure",
    "StoreError",
    "UnsupportedOperation",
    "Entry",
    "MergePolicy",
    "Operation",
    "Store",
    "CachingStore",
    "LoggingStore",
    "RelativeStore",
    "SerializerStore",
    "strip_metadata",
]
