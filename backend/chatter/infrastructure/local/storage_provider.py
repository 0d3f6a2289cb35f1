"""
Local file system object store.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Optional

from chatter.core.exceptions import PersistenceError, ValidationError
from chatter.interfaces.object_store import IObjectStore, ObjectInfo, StoredObject

_META_DIR = ".meta"


class LocalObjectStore(IObjectStore):
    """
    Local file system storage implementation.

    Objects are files under base_path named by their key. Content type and
    custom metadata live in a JSON sidecar under ``.meta/``.
    """

    def __init__(self, base_path: Optional[str] = None):
        """
        Initialize local object store.

        Args:
            base_path: Base directory for object storage (default: ./storage)
        """
        self.base_path = Path(base_path or "./storage").resolve()
        self.base_path.mkdir(parents=True, exist_ok=True)
        self._meta_root = self.base_path / _META_DIR

    async def get(self, key: str) -> Optional[StoredObject]:
        """Read an object and its sidecar metadata."""
        file_path = self._resolve_path(key)
        try:
            return await asyncio.to_thread(self._read, key, file_path)
        except OSError as e:
            raise PersistenceError(f"Failed to read object: {e}")

    async def put(
        self,
        key: str,
        data: bytes,
        metadata: Optional[dict[str, str]] = None,
        content_type: Optional[str] = None,
    ) -> None:
        """Write an object, replacing any previous version."""
        file_path = self._resolve_path(key)
        sidecar = {"content_type": content_type, "metadata": dict(metadata or {})}
        try:
            await asyncio.to_thread(self._write, key, file_path, data, sidecar)
        except OSError as e:
            raise PersistenceError(f"Failed to write object: {e}")

    async def delete(self, key: str) -> None:
        """Delete an object. Missing objects are ignored."""
        file_path = self._resolve_path(key)
        try:
            await asyncio.to_thread(self._remove, key, file_path)
        except OSError as e:
            raise PersistenceError(f"Failed to delete object: {e}")

    async def list(
        self,
        prefix: str,
        limit: Optional[int] = None,
        include_metadata: bool = False,
    ) -> list[ObjectInfo]:
        """List objects under a key prefix in key order."""
        try:
            return await asyncio.to_thread(self._scan, prefix, limit, include_metadata)
        except OSError as e:
            raise PersistenceError(f"Failed to list objects: {e}")

    def _resolve_path(self, key: str) -> Path:
        """Resolve key to a path inside base_path."""
        if not key or key.startswith("/") or ".." in key.split("/"):
            raise ValidationError(f"Invalid object key: {key!r}")
        if key.split("/", 1)[0] == _META_DIR:
            raise ValidationError(f"Invalid object key: {key!r}")
        file_path = (self.base_path / key).resolve()
        if self.base_path not in file_path.parents:
            raise ValidationError(f"Invalid object key: {key!r}")
        return file_path

    def _meta_path(self, key: str) -> Path:
        return self._meta_root / f"{key}.json"

    def _read_meta(self, key: str) -> dict:
        meta_path = self._meta_path(key)
        if not meta_path.exists():
            return {}
        try:
            return json.loads(meta_path.read_text(encoding="utf-8"))
        except ValueError:
            return {}

    def _read(self, key: str, file_path: Path) -> Optional[StoredObject]:
        if not file_path.is_file():
            return None
        data = file_path.read_bytes()
        meta = self._read_meta(key)
        return StoredObject(
            key=key,
            data=data,
            content_type=meta.get("content_type"),
            metadata=meta.get("metadata") or {},
        )

    def _write(self, key: str, file_path: Path, data: bytes, sidecar: dict) -> None:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(data)
        meta_path = self._meta_path(key)
        meta_path.parent.mkdir(parents=True, exist_ok=True)
        meta_path.write_text(json.dumps(sidecar, ensure_ascii=False), encoding="utf-8")

    def _remove(self, key: str, file_path: Path) -> None:
        file_path.unlink(missing_ok=True)
        self._meta_path(key).unlink(missing_ok=True)

    def _scan(self, prefix: str, limit: Optional[int], include_metadata: bool) -> list[ObjectInfo]:
        # Walk only the deepest directory named by the prefix
        directory = prefix.rsplit("/", 1)[0] if "/" in prefix else ""
        start = self.base_path / directory
        if not start.is_dir():
            return []

        keys = []
        for path in start.rglob("*"):
            if not path.is_file():
                continue
            relative = path.relative_to(self.base_path)
            if relative.parts[0] == _META_DIR:
                continue
            key = relative.as_posix()
            if key.startswith(prefix):
                keys.append((key, path))

        keys.sort(key=lambda item: item[0])
        if limit is not None:
            keys = keys[:limit]

        return [
            ObjectInfo(
                key=key,
                size=path.stat().st_size,
                metadata=(self._read_meta(key).get("metadata") or {}) if include_metadata else {},
            )
            for key, path in keys
        ]
