"""
Caching Store - read-through, write-through caching combinator.

Composes a ``source`` (system of record, possibly slow or remote) with a
``cache`` (fast, local):

    get     cache hit → return
            miss      → source; a value is put into the cache, then returned
                        (absent results are not cached)
    put     cache, then source
    merge   fill the cache via get, merge into the cache, read the merged
            record back and put it, whole, to the source
    delete  cache, then source, always both

Errors abort the operation and surface with ``layer`` set to "cache" or
"source". Store errors and ValueError/TypeError keep their type; anything
else is wrapped in BackendFailure. When the cache took a write the source
then refused, the error is a PartialWriteFailure: the cache holds data
that is not yet durable.

Concurrency: operations are not atomic. Two concurrent ``merge`` calls on
the same reference can interleave their fill/merge/read steps and lose
one update. Callers needing merge atomicity must serialize merges per
reference themselves (e.g. one asyncio.Lock per reference).
"""

from typing import Awaitable, Generic, TypeVar

from strata.core.config import get_logger
from strata.core.errors import BackendFailure, Layer, PartialWriteFailure, StoreError
from strata.core.types import MergePolicy
from strata.storage.protocol import Store, T, merge_policy_of, require_value

logger = get_logger("combinators.caching")

R = TypeVar("R")


class CachingStore(Generic[T]):
    """Store combining a source of truth with a cache."""

    def __init__(self, source: Store[T], cache: Store[T]):
        self._source = source
        self._cache = cache
        self._merge_checked = False

    @property
    def source(self) -> Store[T]:
        return self._source

    @property
    def cache(self) -> Store[T]:
        return self._cache

    @property
    def merge_policy(self) -> MergePolicy | None:
        return merge_policy_of(self._cache)

    async def _call(self, layer: Layer, operation: str, ref: str, pending: Awaitable[R]) -> R:
        """Await one layer's operation, tagging any failure with the layer."""
        try:
            return await pending
        except StoreError as e:
            raise e.tag(layer)
        except (ValueError, TypeError) as e:
            # Decode errors and bad references keep their type
            e.layer = layer
            raise
        except Exception as e:
            raise BackendFailure(f"{layer} {operation} failed for {ref!r}: {e}", ref=ref, layer=layer) from e

    async def _to_source(self, operation: str, ref: str, pending: Awaitable[None]) -> None:
        """Write to the source after the cache already accepted the data."""
        try:
            await self._call("source", operation, ref, pending)
        except StoreError as e:
            raise PartialWriteFailure(ref, e) from e

    async def get(self, ref: str) -> T | None:
        data = await self._call("cache", "get", ref, self._cache.get(ref))
        if data is not None:
            logger.debug(f"Cache hit: {ref}")
            return data

        logger.debug(f"Cache miss: {ref}")
        data = await self._call("source", "get", ref, self._source.get(ref))
        if data is None:
            return None

        await self._call("cache", "put", ref, self._cache.put(ref, data))
        logger.debug(f"Cache filled: {ref}")
        return data

    async def put(self, ref: str, data: T) -> None:
        require_value(ref, data)
        await self._call("cache", "put", ref, self._cache.put(ref, data))
        await self._to_source("put", ref, self._source.put(ref, data))

    def _check_merge_policy(self) -> None:
        if self._merge_checked:
            return
        self._merge_checked = True
        policy = merge_policy_of(self._cache)
        if policy is not None and policy != MergePolicy.UNION:
            logger.warning(
                f"Cache {self._cache!r} merges with policy '{policy.value}'; "
                "the source will receive that result rather than a record union"
            )

    async def merge(self, ref: str, data: T) -> None:
        require_value(ref, data)
        self._check_merge_policy()

        await self.get(ref)
        await self._call("cache", "merge", ref, self._cache.merge(ref, data))
        merged = await self._call("cache", "get", ref, self._cache.get(ref))
        if merged is not None:
            await self._to_source("put", ref, self._source.put(ref, merged))

    async def delete(self, ref: str) -> None:
        await self._call("cache", "delete", ref, self._cache.delete(ref))
        await self._call("source", "delete", ref, self._source.delete(ref))

    def __repr__(self) -> str:
        return f"CachingStore(source={self._source!r}, cache={self._cache!r})"
