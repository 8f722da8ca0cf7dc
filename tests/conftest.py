"""
Pytest configuration and fixtures for Strata tests.
"""

import itertools
import os
import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

# Set test environment before importing app modules
os.environ["STRATA_CACHE_DIR"] = tempfile.mkdtemp()
os.environ["STRATA_BASE_URL"] = "https://api.example.test"

from strata.core.errors import BackendFailure
from strata.storage.memory import DictStore


class Sequence:
    """A shared counter so calls on different stores can be ordered."""

    def __init__(self):
        self._counter = itertools.count(1)

    def next(self) -> int:
        return next(self._counter)


class SpyStore:
    """
    Instrumented store for tests.

    Delegates to an inner DictStore, records every call as
    ``(seq, operation, ref, data)`` and can be told to fail operations.
    """

    def __init__(self, sequence: Sequence, inner: Any = None, fail_on: tuple[str, ...] = ()):
        self.sequence = sequence
        self.inner = inner if inner is not None else DictStore()
        self.fail_on = set(fail_on)
        self.calls: list[tuple[int, str, str, Any]] = []

    def count(self, operation: str) -> int:
        return sum(1 for _, op, _, _ in self.calls if op == operation)

    def last(self, operation: str) -> tuple[int, str, str, Any] | None:
        matching = [call for call in self.calls if call[1] == operation]
        return matching[-1] if matching else None

    def refs(self, operation: str) -> list[str]:
        return [ref for _, op, ref, _ in self.calls if op == operation]

    def _record(self, operation: str, ref: str, data: Any = None) -> None:
        self.calls.append((self.sequence.next(), operation, ref, data))
        if operation in self.fail_on:
            raise BackendFailure(f"simulated {operation} failure", ref=ref)

    async def get(self, ref: str) -> Any:
        self._record("get", ref)
        return await self.inner.get(ref)

    async def put(self, ref: str, data: Any) -> None:
        self._record("put", ref, data)
        await self.inner.put(ref, data)

    async def merge(self, ref: str, data: Any) -> None:
        self._record("merge", ref, data)
        await self.inner.merge(ref, data)

    async def delete(self, ref: str) -> None:
        self._record("delete", ref)
        await self.inner.delete(ref)


@pytest.fixture
def temp_data_dir() -> Generator[Path, None, None]:
    """Create a temporary data directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sequence() -> Sequence:
    """Shared call counter."""
    return Sequence()


@pytest.fixture
def make_spy(sequence):
    """Factory for SpyStores sharing one sequence counter."""
    def _make_spy(inner: Any = None, fail_on: tuple[str, ...] = ()) -> SpyStore:
        return SpyStore(sequence, inner=inner, fail_on=fail_on)
    return _make_spy


@pytest.fixture
def source(make_spy) -> SpyStore:
    """An instrumented source of truth."""
    return make_spy()


@pytest.fixture
def cache(make_spy) -> SpyStore:
    """An instrumented cache."""
    return make_spy()
