"""Tests for the SQLite registry store."""

import pytest

from strata.combinators.caching import CachingStore
from strata.core.types import MergePolicy
from strata.storage import registry as registry_module
from strata.storage.memory import DictStore
from strata.storage.registry import RegistryStore


class TestRegistryStore:
    """Tests for RegistryStore."""

    @pytest.mark.asyncio
    async def test_put_and_get_records(self, temp_data_dir):
        store = RegistryStore(temp_data_dir / "registry.sqlite")

        await store.put("users/7", {"name": "Ada", "tags": ["math"]})

        assert await store.get("users/7") == {"name": "Ada", "tags": ["math"]}

    @pytest.mark.asyncio
    async def test_survives_reopen(self, temp_data_dir):
        """Records are durable across store instances."""
        db_path = temp_data_dir / "registry.sqlite"
        await RegistryStore(db_path).put("k", {"v": 1})

        assert await RegistryStore(db_path).get("k") == {"v": 1}

    @pytest.mark.asyncio
    async def test_missing_is_absent(self, temp_data_dir):
        assert await RegistryStore(temp_data_dir / "r.sqlite").get("nope") is None

    @pytest.mark.asyncio
    async def test_merge_is_union(self, temp_data_dir):
        store = RegistryStore(temp_data_dir / "registry.sqlite")

        await store.merge("r", {"a": 1})
        await store.merge("r", {"b": 2})

        assert await store.get("r") == {"a": 1, "b": 2}
        assert store.merge_policy == MergePolicy.UNION

    @pytest.mark.asyncio
    async def test_delete_idempotent(self, temp_data_dir):
        store = RegistryStore(temp_data_dir / "registry.sqlite")
        await store.put("r", 1)

        await store.delete("r")
        await store.delete("r")

        assert await store.get("r") is None

    @pytest.mark.asyncio
    async def test_as_durable_source_under_cache(self, temp_data_dir):
        """A registry source receives complete merged records."""
        registry = RegistryStore(temp_data_dir / "registry.sqlite")
        store = CachingStore(registry, DictStore())

        await store.merge("profile", {"name": "Ada"})
        await store.merge("profile", {"email": "ada@example.test"})

        assert await registry.get("profile") == {"name": "Ada", "email": "ada@example.test"}

    @pytest.mark.asyncio
    async def test_default_path_creates_cache_dir(self, monkeypatch, temp_data_dir):
        """Without a path the database lives in a freshly created cache directory."""
        cache_dir = temp_data_dir / "fresh" / "cache"
        monkeypatch.setattr(registry_module.settings, "cache_dir", cache_dir)

        store = RegistryStore()
        await store.put("k", {"v": 1})

        assert cache_dir.is_dir()
        assert store.db_path == cache_dir / "registry.sqlite"
