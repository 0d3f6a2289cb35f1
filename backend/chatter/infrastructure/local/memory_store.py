"""In-memory object store implementation."""

from typing import Optional

from chatter.interfaces.object_store import IObjectStore, ObjectInfo, StoredObject


class InMemoryObjectStore(IObjectStore):
    """In-memory implementation of the object store.

    Stores objects in a dictionary. Suitable for development and testing.
    Contents are lost on restart and are not shared between processes.
    """

    def __init__(self):
        self._objects: dict[str, StoredObject] = {}

    async def get(self, key: str) -> Optional[StoredObject]:
        """Get an object by key."""
        return self._objects.get(key)

    async def put(
        self,
        key: str,
        data: bytes,
        metadata: Optional[dict[str, str]] = None,
        content_type: Optional[str] = None,
    ) -> None:
        """Store an object, replacing any previous version."""
        self._objects[key] = StoredObject(
            key=key,
            data=bytes(data),
            content_type=content_type,
            metadata=dict(metadata or {}),
        )

    async def delete(self, key: str) -> None:
        """Delete an object if present."""
        self._objects.pop(key, None)

    async def list(
        self,
        prefix: str,
        limit: Optional[int] = None,
        include_metadata: bool = False,
    ) -> list[ObjectInfo]:
        """List objects under a prefix in key order."""
        keys = sorted(key for key in self._objects if key.startswith(prefix))
        if limit is not None:
            keys = keys[:limit]
        return [
            ObjectInfo(
                key=key,
                size=len(self._objects[key].data),
                metadata=dict(self._objects[key].metadata) if include_metadata else {},
            )
            for key in keys
        ]
