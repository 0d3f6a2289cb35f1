"""
Chat history persistence.

Each session is one JSON object at ``users/{user_id}/chats/{chat_id}.json``,
overwritten as a whole on every save.
"""

from __future__ import annotations

import asyncio
import json
from typing import Optional

from chatter.core.logger import setup_logger
from chatter.interfaces.object_store import IObjectStore
from chatter.models.chat_session import ChatSession
from chatter.services.storage_keys import ResourceKind, kind_prefix, resource_key

logger = setup_logger(__name__)

UNTITLED_CHAT = "Untitled Chat"


def derive_title(session: ChatSession, max_length: int = 50) -> str:
    """Title from the first user message, truncated."""
    for message in session.messages:
        if message.role != "user":
            continue
        text = " ".join(message.text_content().split())
        if text:
            return text[:max_length]
    return UNTITLED_CHAT


class HistoryService:
    """Chat session storage on top of the object store."""

    def __init__(self, store: IObjectStore, title_max_length: int = 50):
        self._store = store
        self._title_max_length = title_max_length

    async def save(self, session: ChatSession) -> ChatSession:
        """Overwrite the stored session. Fills in the title when empty."""
        if not session.title.strip():
            session = session.model_copy(
                update={"title": derive_title(session, self._title_max_length)}
            )
        key = resource_key(session.user_id, ResourceKind.CHAT, session.id)
        body = json.dumps(session.to_storage(), ensure_ascii=False).encode("utf-8")
        await self._store.put(key, body, content_type="application/json")
        return session

    async def get(self, user_id: str, chat_id: str) -> Optional[ChatSession]:
        """Load one session, or None when missing or unreadable."""
        return await self._load(resource_key(user_id, ResourceKind.CHAT, chat_id))

    async def list_sessions(self, user_id: str) -> list[ChatSession]:
        """All sessions of a user, newest first. Unreadable entries are skipped."""
        entries = await self._store.list(kind_prefix(user_id, ResourceKind.CHAT))
        loaded = await asyncio.gather(*(self._load(entry.key) for entry in entries))
        sessions = [session for session in loaded if session is not None]
        sessions.sort(key=lambda session: session.created_at, reverse=True)
        return sessions

    async def delete(self, user_id: str, chat_id: str) -> None:
        """Delete a session. Deleting an unknown session is not an error."""
        await self._store.delete(resource_key(user_id, ResourceKind.CHAT, chat_id))

    async def _load(self, key: str) -> Optional[ChatSession]:
        stored = await self._store.get(key)
        if stored is None:
            return None
        try:
            return ChatSession.model_validate(stored.json())
        except ValueError as e:
            # Covers both JSON decode errors and schema mismatches
            logger.warning(f"Skipping unreadable chat {key}: {e}")
            return None
