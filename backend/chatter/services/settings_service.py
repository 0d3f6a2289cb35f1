"""
User settings persistence.

Saves are read-modify-merge: new keys win, unspecified keys are kept.
Two concurrent saves for the same user may lose one update (last write wins).
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError as SchemaError

from chatter.core.exceptions import PersistenceError, ValidationError
from chatter.interfaces.object_store import IObjectStore
from chatter.models.settings import UserSettings, UserSettingsPatch
from chatter.services.storage_keys import ResourceKind, resource_key


def default_settings() -> dict[str, Any]:
    return UserSettings().model_dump(by_alias=True)


class SettingsService:
    """Settings storage with shallow merge on save."""

    def __init__(self, store: IObjectStore):
        self._store = store

    async def get(self, user_id: str) -> dict[str, Any]:
        """Stored settings, or the defaults when none were saved."""
        key = resource_key(user_id, ResourceKind.SETTINGS)
        stored = await self._store.get(key)
        if stored is None:
            return default_settings()
        try:
            settings = stored.json()
        except ValueError as e:
            raise PersistenceError(f"Stored settings are unreadable: {key}") from e
        if not isinstance(settings, dict):
            raise PersistenceError(f"Stored settings are not an object: {key}")
        return settings

    async def save(self, user_id: str, partial: dict[str, Any]) -> dict[str, Any]:
        """
        Merge partial settings over the stored ones and write the result.

        Returns:
            The merged settings

        Raises:
            ValidationError: If a known setting has the wrong type
        """
        try:
            UserSettingsPatch.model_validate(partial)
        except SchemaError as e:
            raise ValidationError(f"Invalid settings: {e}") from e

        existing = await self.get(user_id)
        merged = {**existing, **partial}

        key = resource_key(user_id, ResourceKind.SETTINGS)
        body = json.dumps(merged, ensure_ascii=False).encode("utf-8")
        await self._store.put(key, body, content_type="application/json")
        return merged
