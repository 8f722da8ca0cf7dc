"""
Disk Store - filesystem-backed storage of text values.

Each reference maps to a UTF-8 file under a base directory:

    base_dir/
    ├── todos/
    │   └── 1          ← ref "todos/1"
    └── users/
        └── 7          ← ref "users/7"

Merge appends to the file (a log-style policy), creating it when missing.
A missing file reads as absent and deletes as a no-op.
"""

import asyncio
import os
import posixpath
from pathlib import Path
from typing import ClassVar

from strata.core.config import settings, get_logger
from strata.core.errors import BackendFailure
from strata.core.types import MergePolicy
from strata.storage.protocol import BaseStore, require_value

logger = get_logger("storage.disk")


class DiskStore(BaseStore[str]):
    """
    Filesystem store - typically the cache layer.

    References are sanitized so that no reference resolves outside
    ``base_dir``.
    """

    merge_policy: ClassVar[MergePolicy] = MergePolicy.APPEND

    def __init__(self, base_dir: Path | None = None, encoding: str = "utf-8"):
        """Initialize the disk store."""
        self.base_dir = Path(base_dir or settings.cache_dir).resolve()
        self.encoding = encoding

    def get_path(self, ref: str) -> Path:
        """Map a reference to a file path inside the base directory."""
        normalized = posixpath.normpath(ref.replace("\\", "/"))
        parts = [p for p in normalized.split("/") if p not in ("", ".")]
        # Strip leading parent hops instead of failing on them
        while parts and parts[0] == "..":
            parts.pop(0)
        if not parts:
            raise ValueError(f"reference {ref!r} does not name a file")

        path = self.base_dir.joinpath(*parts).resolve()
        if path != self.base_dir and self.base_dir not in path.parents:
            raise ValueError(f"reference {ref!r} escapes {self.base_dir}")
        return path

    # ==========================================
    # Blocking helpers (run in a worker thread)
    # ==========================================

    def _read(self, path: Path) -> str | None:
        try:
            return path.read_text(encoding=self.encoding)
        except FileNotFoundError:
            return None

    def _write(self, path: Path, data: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(data, encoding=self.encoding)

    def _append(self, path: Path, data: str) -> None:
        if not path.exists():
            self._write(path, data)
            return
        with path.open("a", encoding=self.encoding) as f:
            f.write(data)

    def _unlink(self, path: Path) -> None:
        path.unlink(missing_ok=True)

    async def _run(self, func, ref: str, *args) -> str | None:
        try:
            return await asyncio.to_thread(func, *args)
        except OSError as e:
            raise BackendFailure(f"disk {func.__name__.strip('_')} failed for {ref!r}: {e}", ref=ref) from e

    # ==========================================
    # Protocol
    # ==========================================

    async def get(self, ref: str) -> str | None:
        return await self._run(self._read, ref, self.get_path(ref))

    async def put(self, ref: str, data: str) -> None:
        require_value(ref, data)
        path = self.get_path(ref)
        await self._run(self._write, ref, path, data)
        logger.debug(f"Wrote {ref} → {path}")

    async def merge(self, ref: str, data: str) -> None:
        require_value(ref, data)
        await self._run(self._append, ref, self.get_path(ref), data)

    async def delete(self, ref: str) -> None:
        await self._run(self._unlink, ref, self.get_path(ref))

    def __repr__(self) -> str:
        return f"DiskStore({os.fspath(self.base_dir)!r})"
