"""
Attachment normalization.

Folds client attachments into multimodal message content. Two legacy shapes
are accepted:

- per-message ``attachments`` entries of ``{contentType, url}``
- a request-level ``images`` list of data URLs belonging to the last message

The per-message list wins when both are present for the same message.
"""

from __future__ import annotations

from typing import Optional, Sequence

from chatter.models.chat import ChatMessage, ImagePart, ImageUrl, TextPart


def _attachment_image_urls(message: ChatMessage) -> list[str]:
    return [
        attachment.url
        for attachment in message.attachments or []
        if attachment.is_image and attachment.url
    ]


def normalize_message(
    message: ChatMessage,
    fallback_images: Sequence[str] = (),
) -> ChatMessage:
    """
    Normalize one message.

    The result has string content when it carries no images, otherwise a text
    part followed by one image part per image, in submission order. Content
    that already holds image parts is treated as normalized and gets no new
    images, which keeps the operation idempotent.
    """
    if isinstance(message.content, str):
        text = message.content
        image_parts: list[ImagePart] = []
    else:
        text = message.text_content()
        image_parts = [part for part in message.content if isinstance(part, ImagePart)]

    if not image_parts:
        if message.attachments:
            incoming = _attachment_image_urls(message)
        else:
            incoming = [url for url in fallback_images if url]
        image_parts = [ImagePart(image_url=ImageUrl(url=url)) for url in incoming]

    if image_parts:
        content = [TextPart(text=text), *image_parts]
    else:
        content = text
    return message.model_copy(update={"content": content})


def normalize_messages(
    messages: Sequence[ChatMessage],
    images: Optional[Sequence[str]] = None,
) -> list[ChatMessage]:
    """Normalize a conversation. `images` apply to the most recent message only."""
    last_index = len(messages) - 1
    return [
        normalize_message(message, (images or ()) if index == last_index else ())
        for index, message in enumerate(messages)
    ]
