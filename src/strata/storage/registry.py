"""
SQLite Registry Store - durable record storage.

Values are JSON documents kept in one table:

    entries(ref TEXT PRIMARY KEY, value TEXT, updated_at TEXT)

Merge is a shallow field union applied inside a single transaction, which
makes this store a safe union-merge layer under CachingStore (unlike
DiskStore, whose merge appends).
"""

import asyncio
import json
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, ClassVar, Generator

from strata.core.config import settings, get_logger
from strata.core.errors import BackendFailure
from strata.core.types import MergePolicy, merge_values
from strata.storage.protocol import BaseStore, require_value

logger = get_logger("storage.registry")


class RegistryStore(BaseStore[Any]):
    """SQLite store for JSON-serializable records."""

    merge_policy: ClassVar[MergePolicy] = MergePolicy.UNION

    def __init__(self, db_path: Path | None = None):
        """Initialize the registry store."""
        if db_path is None:
            settings.ensure_directories()
            db_path = settings.cache_dir / "registry.sqlite"
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        """Initialize the database schema."""
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS entries (
                    ref TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.commit()

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection with row factory."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    # ==========================================
    # Blocking helpers
    # ==========================================

    def _read(self, ref: str) -> Any:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT value FROM entries WHERE ref = ?", (ref,)
            ).fetchone()
            if row:
                return json.loads(row["value"])
            return None

    def _upsert(self, conn: sqlite3.Connection, ref: str, data: Any) -> None:
        conn.execute("""
            INSERT INTO entries (ref, value, updated_at) VALUES (?, ?, ?)
            ON CONFLICT(ref) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
        """, (ref, json.dumps(data), datetime.now().isoformat()))

    def _write(self, ref: str, data: Any) -> None:
        with self._get_connection() as conn:
            self._upsert(conn, ref, data)
            conn.commit()

    def _merge(self, ref: str, data: Any) -> None:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT value FROM entries WHERE ref = ?", (ref,)
            ).fetchone()
            merged = merge_values(json.loads(row["value"]), data) if row else data
            self._upsert(conn, ref, merged)
            conn.commit()

    def _delete(self, ref: str) -> None:
        with self._get_connection() as conn:
            cursor = conn.execute("DELETE FROM entries WHERE ref = ?", (ref,))
            conn.commit()
            if cursor.rowcount > 0:
                logger.debug(f"Deleted {ref} from registry")

    async def _run(self, func, ref: str, *args) -> Any:
        try:
            return await asyncio.to_thread(func, ref, *args)
        except sqlite3.Error as e:
            raise BackendFailure(f"registry operation failed for {ref!r}: {e}", ref=ref) from e

    # ==========================================
    # Protocol
    # ==========================================

    async def get(self, ref: str) -> Any:
        return await self._run(self._read, ref)

    async def put(self, ref: str, data: Any) -> None:
        require_value(ref, data)
        await self._run(self._write, ref, data)

    async def merge(self, ref: str, data: Any) -> None:
        require_value(ref, data)
        await self._run(self._merge, ref, data)

    async def delete(self, ref: str) -> None:
        await self._run(self._delete, ref)

    def __repr__(self) -> str:
        return f"RegistryStore({str(self.db_path)!r})"
