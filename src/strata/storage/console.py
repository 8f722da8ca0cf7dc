"""
Console Store - write-only sink that writes values to a stream.

Used as the observation sink of LoggingStore. The stream is always passed
in (defaulting to stdout at construction), so tests can substitute an
in-memory buffer.
"""

import sys
from typing import IO, ClassVar

from strata.core.types import MergePolicy
from strata.storage.protocol import BaseStore, require_value


class ConsoleStore(BaseStore[str]):
    """
    Write-only store: ``put`` and ``merge`` both write the value verbatim.

    No newline is added and nothing is rendered, so tabs and control
    characters reach the stream unchanged. Pipe through a SerializerStore
    with a text codec to shape lines.
    """

    merge_policy: ClassVar[MergePolicy] = MergePolicy.APPEND

    def __init__(self, stream: IO[str] | None = None):
        self.stream = stream or sys.stdout

    def _write(self, ref: str, data: str) -> None:
        require_value(ref, data)
        self.stream.write(data)
        self.stream.flush()

    async def put(self, ref: str, data: str) -> None:
        self._write(ref, data)

    async def merge(self, ref: str, data: str) -> None:
        self._write(ref, data)
