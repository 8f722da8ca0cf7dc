"""
Storage Layer - the protocol and its leaf stores.

Leaves:
1. DictStore     → in-memory map, union merge
2. DiskStore     → files under a base directory, append merge
3. RegistryStore → SQLite JSON records, union merge
4. HttpStore     → read-only network source, headers as metadata
5. ConsoleStore  → write-only stream sink

Combinators live in strata.combinators and wrap any of these.
"""

from strata.storage.protocol import BaseStore, Store
from strata.storage.memory import DictStore
from strata.storage.disk import DiskStore
from strata.storage.registry import RegistryStore
from strata.storage.http import HeadersStore, HttpStore
from strata.storage.console import ConsoleStore

__all__ = [
    "BaseStore",
    "Store",
    "DictStore",
    "DiskStore",
    "RegistryStore",
    "HeadersStore",
    "HttpStore",
    "ConsoleStore",
]
