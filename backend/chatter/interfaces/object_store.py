"""
Object store interface.

Defines the contract for the flat, prefix-listable blob storage that backs
every persisted resource (chat history, settings, snippets, images).
Implementations: local file system, in-memory, S3-compatible (R2).
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class ObjectInfo:
    """Listing entry for a stored object."""

    key: str
    size: int = 0
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class StoredObject:
    """A stored object with its body and metadata."""

    key: str
    data: bytes
    content_type: Optional[str] = None
    metadata: dict[str, str] = field(default_factory=dict)

    def text(self) -> str:
        return self.data.decode("utf-8")

    def json(self) -> Any:
        """Parse the body as JSON. Raises ValueError on malformed content."""
        return json.loads(self.data)


class IObjectStore(ABC):
    """Abstract interface for object storage."""

    @abstractmethod
    async def get(self, key: str) -> Optional[StoredObject]:
        """
        Fetch an object.

        Args:
            key: Object key

        Returns:
            StoredObject, or None if the key does not exist

        Raises:
            PersistenceError: If the store operation fails
        """
        pass

    @abstractmethod
    async def put(
        self,
        key: str,
        data: bytes,
        metadata: Optional[dict[str, str]] = None,
        content_type: Optional[str] = None,
    ) -> None:
        """
        Write an object, replacing any existing object at the key.

        Args:
            key: Object key
            data: Object body
            metadata: Custom string metadata stored alongside the object
            content_type: MIME type of the body

        Raises:
            PersistenceError: If the store operation fails
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """
        Delete an object. Deleting a missing key is not an error.

        Raises:
            PersistenceError: If the store operation fails
        """
        pass

    @abstractmethod
    async def list(
        self,
        prefix: str,
        limit: Optional[int] = None,
        include_metadata: bool = False,
    ) -> list[ObjectInfo]:
        """
        List objects whose key starts with prefix, in lexicographic key order.

        Args:
            prefix: Key prefix
            limit: Max entries (None for all)
            include_metadata: Populate ObjectInfo.metadata

        Raises:
            PersistenceError: If the store operation fails
        """
        pass
