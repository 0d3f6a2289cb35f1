"""
Storage key namespace.

Every per-user resource lives under ``users/{user_id}/``. Ids are single path
segments, so a listing of ``users/{user_id}/{kind}/`` never reaches another
user's objects.
"""

from __future__ import annotations

import re
import time
from enum import Enum
from typing import Optional
from uuid import uuid4

from chatter.core.exceptions import ValidationError

USERS_ROOT = "users"

_LEADING_DIGITS = re.compile(r"^\d+")


class ResourceKind(str, Enum):
    """Category of persisted entity."""

    CHAT = "chat"
    SETTINGS = "settings"
    SNIPPETS = "snippets"
    IMAGE = "image"


_COLLECTION_DIRS: dict[ResourceKind, str] = {
    ResourceKind.CHAT: "chats",
    ResourceKind.IMAGE: "images",
}

_SINGLETON_FILES: dict[ResourceKind, str] = {
    ResourceKind.SETTINGS: "settings.json",
    ResourceKind.SNIPPETS: "snippets.json",
}


def _check_segment(value: Optional[str], field_name: str) -> str:
    if not value:
        raise ValidationError(f"{field_name} is required")
    if value in (".", "..") or "/" in value or "\\" in value:
        raise ValidationError(f"Invalid {field_name}: {value!r}")
    return value


def user_prefix(user_id: str) -> str:
    """Prefix owning every resource of a user."""
    return f"{USERS_ROOT}/{_check_segment(user_id, 'user_id')}/"


def kind_prefix(user_id: str, kind: ResourceKind) -> str:
    """Listing prefix for a collection kind (chat, image)."""
    directory = _COLLECTION_DIRS.get(kind)
    if directory is None:
        raise ValueError(f"{kind.value} is not a listable resource kind")
    return f"{user_prefix(user_id)}{directory}/"


def new_image_id(now_ms: Optional[int] = None) -> str:
    """Timestamp-first image id, so key order matches creation order."""
    timestamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{timestamp}_{uuid4()}"


def resource_key(user_id: str, kind: ResourceKind, resource_id: Optional[str] = None) -> str:
    """
    Build the storage key for a resource.

    Args:
        user_id: Owner user ID
        kind: Resource kind
        resource_id: Chat ID for chats, image ID (see new_image_id) for images.
            Ignored for settings and snippets.

    Returns:
        Storage key

    Raises:
        ValidationError: If user_id or resource_id is empty or not a single path segment
    """
    if kind in _SINGLETON_FILES:
        return f"{user_prefix(user_id)}{_SINGLETON_FILES[kind]}"

    prefix = kind_prefix(user_id, kind)
    if kind == ResourceKind.CHAT:
        return f"{prefix}{_check_segment(resource_id, 'chat_id')}.json"
    return f"{prefix}{_check_segment(resource_id, 'image_id')}.png"


def image_timestamp(key: str) -> int:
    """Creation time encoded in an image key, or 0 when the name is malformed."""
    filename = key.rsplit("/", 1)[-1]
    match = _LEADING_DIGITS.match(filename.split("_", 1)[0])
    return int(match.group(0)) if match else 0


def is_image_key(key: str, user_id: Optional[str] = None) -> bool:
    """Check that key is a direct child of an image prefix, of user_id when given."""
    parts = key.split("/")
    if len(parts) != 4 or parts[0] != USERS_ROOT or parts[2] != _COLLECTION_DIRS[ResourceKind.IMAGE]:
        return False
    if any(not part or part in (".", "..") or "\\" in part for part in parts[1:]):
        return False
    return user_id is None or parts[1] == user_id
