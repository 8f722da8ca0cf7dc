"""
Relative Store - reference-mapping combinator.

Every operation is forwarded to the source with the reference rewritten as
``joiner(prefix, ref)``. Nothing else changes: values, absence and errors
pass straight through.
"""

import posixpath
from typing import Callable, Generic

from strata.core.types import MergePolicy
from strata.storage.protocol import Store, T, merge_policy_of

Joiner = Callable[[str, str], str]


def slash_join(prefix: str, ref: str) -> str:
    """Join with exactly one '/' at the seam (URLs and store keys)."""
    if not prefix:
        return ref
    return f"{prefix.rstrip('/')}/{ref.lstrip('/')}"


def path_join(base: str, ref: str) -> str:
    """Join filesystem-style path segments."""
    return posixpath.join(base, ref.lstrip("/"))


class RelativeStore(Generic[T]):
    """Store whose references are relative to a prefix in the source."""

    def __init__(self, source: Store[T], prefix: str, joiner: Joiner = slash_join):
        self._source = source
        self._prefix = prefix
        self._joiner = joiner

    @property
    def source(self) -> Store[T]:
        return self._source

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def merge_policy(self) -> MergePolicy | None:
        return merge_policy_of(self._source)

    def map_ref(self, ref: str) -> str:
        return self._joiner(self._prefix, ref)

    async def get(self, ref: str) -> T | None:
        return await self._source.get(self.map_ref(ref))

    async def put(self, ref: str, data: T) -> None:
        await self._source.put(self.map_ref(ref), data)

    async def merge(self, ref: str, data: T) -> None:
        await self._source.merge(self.map_ref(ref), data)

    async def delete(self, ref: str) -> None:
        await self._source.delete(self.map_ref(ref))

    def __repr__(self) -> str:
        return f"RelativeStore({self._source!r}, {self._prefix!r})"
