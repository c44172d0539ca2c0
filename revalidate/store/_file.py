"""
File store — one file per key under a directory.

Writes go to a temp file in the same directory and are moved into place
with os.replace, so a reader never sees a half-written record.
"""

from __future__ import annotations

import asyncio
import hashlib
import logging
import os
import tempfile
from pathlib import Path
from typing import Any
from urllib.parse import quote

from kungfu import Result, Ok, Error

from revalidate.store._serializer import PickleSerializer, Serializer
from revalidate.store._types import StoreError

logger = logging.getLogger(__name__)

ENTRY_SUFFIX = ".entry"
TEMP_PREFIX = ".tmp_"
MAX_NAME_BYTES = 200


class FileStore:
    """
    Directory-backed key/value store.

    Example:
        store = FileStore(Path.home() / ".cache" / "myapp")

    Note: Blocking file I/O runs in a worker thread (asyncio.to_thread).
    Note: Not transactional. The value and policy files of one entry are
    two separate atomic writes.
    """

    def __init__(
        self,
        directory: str | os.PathLike[str],
        serializer: Serializer | None = None,
    ) -> None:
        self.directory = Path(directory)
        self.serializer: Serializer = serializer or PickleSerializer()

    def path_for(self, key: str) -> Path:
        """
        File holding the record for key.

        Short keys keep a readable URL-quoted name. Keys whose quoted name
        would not fit a file name are stored under "#" + sha256 hex, which
        cannot collide with a quoted name (quote escapes "#").
        """
        name = quote(key, safe='')
        if len(name.encode()) > MAX_NAME_BYTES:
            name = "#" + hashlib.sha256(key.encode()).hexdigest()
        return self.directory / f"{name}{ENTRY_SUFFIX}"

    # ───────────────────────────────────────────────────────────────────────────
    # Store protocol
    # ───────────────────────────────────────────────────────────────────────────

    async def read(self, key: str) -> Result[Any, StoreError]:
        path = self.path_for(key)
        try:
            data = await asyncio.to_thread(path.read_bytes)
        except FileNotFoundError:
            return Error(StoreError.not_found(key))
        except OSError as e:
            logger.debug("Read failed for %s: %s", path, e)
            return Error(StoreError.io(key, e))

        try:
            return Ok(self.serializer.loads(data))
        except Exception as e:
            logger.debug("Corrupt record %s: %s", path, e)
            return Error(StoreError.serialization(key, e))

    async def write(self, key: str, value: Any) -> Result[None, StoreError]:
        try:
            data = self.serializer.dumps(value)
        except Exception as e:
            return Error(StoreError.serialization(key, e))

        try:
            await asyncio.to_thread(self._replace, self.path_for(key), data)
        except OSError as e:
            logger.debug("Write failed for %s: %s", key, e)
            return Error(StoreError.io(key, e))
        return Ok(None)

    async def delete(self, key: str) -> Result[bool, StoreError]:
        path = self.path_for(key)
        try:
            await asyncio.to_thread(path.unlink)
        except FileNotFoundError:
            return Ok(False)
        except OSError as e:
            return Error(StoreError.io(key, e))
        return Ok(True)

    async def exists(self, key: str) -> Result[bool, StoreError]:
        try:
            return Ok(await asyncio.to_thread(self.path_for(key).is_file))
        except OSError as e:
            return Error(StoreError.io(key, e))

    # ───────────────────────────────────────────────────────────────────────────
    # Maintenance
    # ───────────────────────────────────────────────────────────────────────────

    async def clear(self) -> int:
        """Delete every record and orphaned temp file. Returns record count."""
        return await asyncio.to_thread(self._clear)

    def _clear(self) -> int:
        if not self.directory.is_dir():
            return 0
        removed = 0
        for path in self.directory.glob(f"*{ENTRY_SUFFIX}"):
            path.unlink(missing_ok=True)
            removed += 1
        # Leftovers of writes interrupted before os.replace
        for path in self.directory.glob(f"{TEMP_PREFIX}*"):
            path.unlink(missing_ok=True)
        return removed

    def _replace(self, path: Path, data: bytes) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        # Same directory → same filesystem → os.replace is atomic
        fd, tmp_path = tempfile.mkstemp(prefix=TEMP_PREFIX, dir=self.directory)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise


__all__ = ("FileStore", "ENTRY_SUFFIX")
