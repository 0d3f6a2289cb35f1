"""
Chat session model.

A session is stored as one JSON document and overwritten on every save.
"""

import time
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from chatter.models.chat import ChatMessage


def _now_ms() -> int:
    return int(time.time() * 1000)


class ChatSession(BaseModel):
    """Chat session model."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: str = Field(..., min_length=1, max_length=200, description="Chat session ID")
    user_id: str = Field(..., min_length=1, max_length=200, description="Owner user ID")
    title: str = Field("", max_length=500, description="Session title")
    messages: list[ChatMessage] = Field(default_factory=list)
    created_at: int = Field(default_factory=_now_ms, description="Epoch millis")
    model: str = ""
    system_prompt: Optional[str] = None

    def to_storage(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
