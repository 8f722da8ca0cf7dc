"""
Storage Protocol - the contract every store and combinator implements.

A store maps string references to values through four coroutines:

    get(ref)          → value, or None when the reference is absent
    put(ref, value)   → store value, overwriting
    merge(ref, value) → combine value with what is there (see merge_policy)
    delete(ref)       → remove; deleting an absent reference is fine

Absence is data, not an error. A store that cannot perform an operation
raises UnsupportedOperation instead of silently doing nothing.
"""

from typing import ClassVar, Generic, Protocol, TypeVar, runtime_checkable

from strata.core.errors import UnsupportedOperation
from strata.core.types import MergePolicy

T = TypeVar("T")


@runtime_checkable
class Store(Protocol[T]):
    """Anything exposing the four storage coroutines."""

    async def get(self, ref: str) -> T | None:
        ...

    async def put(self, ref: str, data: T) -> None:
        ...

    async def merge(self, ref: str, data: T) -> None:
        ...

    async def delete(self, ref: str) -> None:
        ...


class BaseStore(Generic[T]):
    """
    Convenience base for concrete stores.

    Every operation is refused by default, so a read-only store only
    overrides ``get`` and a write-only sink only ``put``/``merge``.
    """

    merge_policy: ClassVar[MergePolicy] = MergePolicy.UNSUPPORTED

    @property
    def name(self) -> str:
        return type(self).__name__

    def _unsupported(self, operation: str, ref: str) -> UnsupportedOperation:
        return UnsupportedOperation(operation, self.name, ref=ref)

    async def get(self, ref: str) -> T | None:
        raise self._unsupported("get", ref)

    async def put(self, ref: str, data: T) -> None:
        raise self._unsupported("put", ref)

    async def merge(self, ref: str, data: T) -> None:
        raise self._unsupported("merge", ref)

    async def delete(self, ref: str) -> None:
        raise self._unsupported("delete", ref)

    def __repr__(self) -> str:
        return f"{self.name}()"


def require_value(ref: str, data: object) -> None:
    """None means 'absent' and can never be stored."""
    if data is None:
        raise ValueError(f"cannot store None at {ref!r}; use delete to remove a reference")


def merge_policy_of(store: object) -> MergePolicy | None:
    """The declared merge policy of a store, if it declares one."""
    return getattr(store, "merge_policy", None)
