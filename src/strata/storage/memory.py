"""
Dict Store - in-memory map-backed storage.

The simplest leaf: a dict keyed by reference. Used as a fast cache layer
and as the reference implementation of union merge.
"""

from typing import ClassVar

from strata.core.types import MergePolicy, merge_values
from strata.storage.protocol import BaseStore, T, require_value


class DictStore(BaseStore[T]):
    """Store that keeps data in an in-memory dict."""

    merge_policy: ClassVar[MergePolicy] = MergePolicy.UNION

    def __init__(self, initial: dict[str, T] | None = None):
        self._data: dict[str, T] = dict(initial or {})

    async def get(self, ref: str) -> T | None:
        return self._data.get(ref)

    async def put(self, ref: str, data: T) -> None:
        require_value(ref, data)
        self._data[ref] = data

    async def merge(self, ref: str, data: T) -> None:
        require_value(ref, data)
        if ref in self._data:
            self._data[ref] = merge_values(self._data[ref], data)
        else:
            self._data[ref] = data

    async def delete(self, ref: str) -> None:
        self._data.pop(ref, None)

    def __contains__(self, ref: object) -> bool:
        return ref in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"DictStore({len(self._data)} refs)"
