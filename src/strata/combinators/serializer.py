"""
Serializer Store - format-translation combinator.

Presents a ``Store[In]`` on top of a ``Store[Out]``:

    put/merge:  In --encode--> Out --> source
    get:        source --> Out --decode--> In   (absent stays absent)
    delete:     passed through untouched

A pipeline may be one-way. Leaving ``decode`` out gives a write-only
store (e.g. a log line formatter in front of a ConsoleStore); leaving
``encode`` out gives a read-only view. The missing direction raises
UnsupportedOperation.
"""

import json
from typing import Any, Callable, Generic, TypeVar

import yaml

from strata.core.errors import UnsupportedOperation
from strata.core.types import MergePolicy
from strata.storage.protocol import Store, merge_policy_of

In = TypeVar("In")
Out = TypeVar("Out")

Codec = tuple[Callable[[Any], str], Callable[[str], Any]]


class SerializerStore(Generic[In, Out]):
    """Store that transforms data on writes and reads."""

    def __init__(
        self,
        source: Store[Out],
        encode: Callable[[In], Out] | None = None,
        decode: Callable[[Out], In] | None = None,
        merge_policy: MergePolicy | None = None,
    ):
        self._source = source
        self._encode = encode
        self._decode = decode
        self._merge_policy = merge_policy

    @classmethod
    def from_codec(cls, source: Store[str], codec: Codec) -> "SerializerStore[Any, str]":
        encode, decode = codec
        return cls(source, encode, decode)

    @property
    def source(self) -> Store[Out]:
        return self._source

    @property
    def merge_policy(self) -> MergePolicy | None:
        return self._merge_policy or merge_policy_of(self._source)

    def _encoded(self, operation: str, ref: str, data: In) -> Out:
        if self._encode is None:
            raise UnsupportedOperation(operation, "read-only SerializerStore", ref=ref)
        return self._encode(data)

    async def get(self, ref: str) -> In | None:
        if self._decode is None:
            raise UnsupportedOperation("get", "write-only SerializerStore", ref=ref)
        raw = await self._source.get(ref)
        if raw is None:
            return None
        return self._decode(raw)

    async def put(self, ref: str, data: In) -> None:
        await self._source.put(ref, self._encoded("put", ref, data))

    async def merge(self, ref: str, data: In) -> None:
        await self._source.merge(ref, self._encoded("merge", ref, data))

    async def delete(self, ref: str) -> None:
        await self._source.delete(ref)

    def __repr__(self) -> str:
        return f"SerializerStore({self._source!r})"


# ============================================
# Codecs
# ============================================

def json_codec(indent: int | None = None) -> Codec:
    """Records ↔ JSON text."""
    return (
        lambda data: json.dumps(data, indent=indent, sort_keys=True),
        json.loads,
    )


def yaml_codec() -> Codec:
    """Records ↔ YAML text."""
    return (
        lambda data: yaml.safe_dump(data, sort_keys=False, allow_unicode=True),
        yaml.safe_load,
    )


def text_formatter(template: str) -> Callable[[str], str]:
    """A write-only encoder rendering each value into ``template``."""
    return lambda data: template.format(data)
