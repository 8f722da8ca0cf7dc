"""
Logging Store - observation combinator.

Every operation passing through is first recorded to a sink store as
``"<OP> <ref>"`` (e.g. ``"PUT todos/1"``), then delegated to the source
untouched. This is enough for debugging (sink = ConsoleStore) and for
change-data-capture or pub/sub (sink = a queue-backed store).

Recording is not best-effort: the entry is written before the operation
is issued, and a sink failure fails the call without reaching the source.
"""

from typing import Generic

from strata.core.config import settings
from strata.core.types import MergePolicy, Operation
from strata.storage.protocol import Store, T, merge_policy_of


class LoggingStore(Generic[T]):
    """Pass-through store that reports each operation to ``sink``."""

    def __init__(self, source: Store[T], sink: Store[str], sink_ref: str | None = None):
        self._source = source
        self._sink = sink
        self._sink_ref = sink_ref if sink_ref is not None else settings.log_sink_ref

    @property
    def source(self) -> Store[T]:
        return self._source

    @property
    def merge_policy(self) -> MergePolicy | None:
        return merge_policy_of(self._source)

    async def _record(self, operation: Operation, ref: str) -> None:
        await self._sink.put(self._sink_ref, f"{operation.value} {ref}")

    async def get(self, ref: str) -> T | None:
        await self._record(Operation.GET, ref)
        return await self._source.get(ref)

    async def put(self, ref: str, data: T) -> None:
        await self._record(Operation.PUT, ref)
        await self._source.put(ref, data)

    async def merge(self, ref: str, data: T) -> None:
        await self._record(Operation.MERGE, ref)
        await self._source.merge(ref, data)

    async def delete(self, ref: str) -> None:
        await self._record(Operation.DELETE, ref)
        await self._source.delete(ref)

    def __repr__(self) -> str:
        return f"LoggingStore({self._source!r} → {self._sink!r})"
