"""
Chat model definitions.

Messages accept two content shapes: a plain string, or an ordered list of
content parts tagged by "type". Content parts use the OpenAI wire names so
they can be forwarded to providers unchanged.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MessageRole = Literal["user", "assistant", "system"]


class TextPart(BaseModel):
    """Text content part."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["text"] = "text"
    text: str = ""


class ImageUrl(BaseModel):
    """Image reference (http(s) URL or data URL)."""

    url: str = Field(..., min_length=1)


class ImagePart(BaseModel):
    """Image content part."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["image_url"] = "image_url"
    image_url: ImageUrl


ContentPart = Annotated[Union[TextPart, ImagePart], Field(discriminator="type")]


class Attachment(BaseModel):
    """File attached to a message by the client."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    content_type: str = Field("", description="MIME type, e.g. image/png")
    url: Optional[str] = Field(None, description="Data URL or remote URL")
    name: Optional[str] = None

    @property
    def is_image(self) -> bool:
        return self.content_type.startswith("image/")


class ChatMessage(BaseModel):
    """
    Chat message.

    Unknown fields sent by the client are kept so persisted sessions
    round-trip without loss.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Optional[str] = None
    role: MessageRole
    content: Union[str, list[ContentPart]] = ""
    attachments: Optional[list[Attachment]] = Field(
        None,
        validation_alias=AliasChoices("attachments", "experimental_attachments"),
    )

    def text_content(self) -> str:
        """Return the textual portion of the message."""
        if isinstance(self.content, str):
            return self.content
        return "\n".join(
            part.text for part in self.content if isinstance(part, TextPart) and part.text
        )


class ChatRequestData(BaseModel):
    """Legacy side-channel payload sent next to the messages."""

    images: list[str] = Field(default_factory=list)


class ChatRequest(BaseModel):
    """Request model for the chat endpoint."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    messages: list[ChatMessage] = Field(..., min_length=1)
    model: Optional[str] = Field(None, description="Model identifier")
    system_prompt: Optional[str] = None
    user_id: Optional[str] = None
    chat_id: Optional[str] = None
    images: Optional[list[str]] = Field(
        None, description="Data URLs attached to the most recent message"
    )
    data: Optional[ChatRequestData] = None

    def sibling_images(self) -> list[str]:
        """Images sent beside the message list, top-level list first."""
        if self.images:
            return list(self.images)
        if self.data and self.data.images:
            return list(self.data.images)
        return []


class ModelDescriptor(BaseModel):
    """Selectable model offered by a provider."""

    id: str
    provider: str
