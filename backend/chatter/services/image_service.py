"""
Generated image index.

Images are stored at ``users/{user_id}/images/{timestamp}_{uuid}.png`` with the
prompt in object metadata. Creation time is read back from the key, since
listing metadata carries no sortable timestamp.
"""

from __future__ import annotations

import time
from typing import Optional
from urllib.parse import quote

from chatter.core.exceptions import ForbiddenError, NotFoundError
from chatter.interfaces.object_store import IObjectStore, StoredObject
from chatter.models.image import GeneratedImage
from chatter.services.storage_keys import (
    ResourceKind,
    image_timestamp,
    is_image_key,
    kind_prefix,
    new_image_id,
    resource_key,
)

PROMPT_METADATA_KEY = "prompt"
PROMPT_METADATA_MAX_LENGTH = 1000
NO_PROMPT = "No prompt"
VIEW_PATH = "/api/images/view"


def view_url(key: str) -> str:
    return f"{VIEW_PATH}?key={quote(key, safe='')}"


def _image_uuid(key: str) -> str:
    filename = key.rsplit("/", 1)[-1]
    stem = filename[: -len(".png")] if filename.endswith(".png") else filename
    return stem.split("_", 1)[1] if "_" in stem else stem


class ImageService:
    """Image storage and listing."""

    def __init__(self, store: IObjectStore, list_limit: int = 100):
        self._store = store
        self._list_limit = list_limit

    async def list_images(self, user_id: str) -> list[GeneratedImage]:
        """Images of a user, newest first, at most list_limit entries."""
        entries = await self._store.list(
            kind_prefix(user_id, ResourceKind.IMAGE),
            include_metadata=True,
        )
        images = [
            GeneratedImage(
                id=_image_uuid(entry.key),
                storage_key=entry.key,
                url=view_url(entry.key),
                prompt=entry.metadata.get(PROMPT_METADATA_KEY) or NO_PROMPT,
                created_at=image_timestamp(entry.key),
            )
            for entry in entries
        ]
        images.sort(key=lambda image: image.created_at, reverse=True)
        return images[: self._list_limit]

    async def store_image(
        self,
        user_id: str,
        data: bytes,
        prompt: str,
        now_ms: Optional[int] = None,
    ) -> GeneratedImage:
        """Persist a generated PNG under a new timestamped key."""
        created_at = now_ms if now_ms is not None else int(time.time() * 1000)
        image_id = new_image_id(created_at)
        key = resource_key(user_id, ResourceKind.IMAGE, image_id)
        await self._store.put(
            key,
            data,
            metadata={PROMPT_METADATA_KEY: prompt[:PROMPT_METADATA_MAX_LENGTH]},
            content_type="image/png",
        )
        return GeneratedImage(
            id=_image_uuid(key),
            storage_key=key,
            url=view_url(key),
            prompt=prompt,
            created_at=created_at,
        )

    async def get_image(self, key: str) -> StoredObject:
        """
        Raises:
            ForbiddenError: If the key is not an image key
            NotFoundError: If no object exists at key
        """
        if not is_image_key(key):
            raise ForbiddenError("Key is not an image")
        stored = await self._store.get(key)
        if stored is None:
            raise NotFoundError("Image not found")
        return stored

    async def delete_image(self, user_id: str, key: str) -> None:
        """
        Delete one of the user's images.

        Raises:
            ForbiddenError: If the key is outside the user's image prefix
        """
        if not is_image_key(key, user_id):
            raise ForbiddenError("Image does not belong to user")
        await self._store.delete(key)
