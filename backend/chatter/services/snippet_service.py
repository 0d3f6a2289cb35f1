"""
Prompt snippet persistence. Saves replace the whole list.
"""

from __future__ import annotations

import json

from chatter.core.logger import setup_logger
from chatter.interfaces.object_store import IObjectStore
from chatter.services.storage_keys import ResourceKind, resource_key

logger = setup_logger(__name__)


class SnippetService:
    """Snippet list storage."""

    def __init__(self, store: IObjectStore):
        self._store = store

    async def get(self, user_id: str) -> list[str]:
        key = resource_key(user_id, ResourceKind.SNIPPETS)
        stored = await self._store.get(key)
        if stored is None:
            return []
        try:
            snippets = stored.json()
        except ValueError as e:
            logger.warning(f"Ignoring unreadable snippets {key}: {e}")
            return []
        if not isinstance(snippets, list):
            logger.warning(f"Ignoring snippets that are not a list: {key}")
            return []
        return [snippet for snippet in snippets if isinstance(snippet, str)]

    async def save(self, user_id: str, snippets: list[str]) -> list[str]:
        key = resource_key(user_id, ResourceKind.SNIPPETS)
        body = json.dumps(list(snippets), ensure_ascii=False).encode("utf-8")
        await self._store.put(key, body, content_type="application/json")
        return list(snippets)
