"""
Streaming completion pipeline.

normalize attachments -> optional system prompt -> route -> stream deltas.
"""

from __future__ import annotations

from typing import Any, AsyncIterator, Optional, Sequence

from chatter.core.logger import setup_logger
from chatter.models.chat import ChatMessage
from chatter.services.attachment_normalizer import normalize_messages
from chatter.services.provider_router import ProviderRouter

logger = setup_logger(__name__)


def to_wire(message: ChatMessage) -> dict[str, Any]:
    """Convert a normalized message to the provider wire format."""
    if isinstance(message.content, str):
        content: Any = message.content
    else:
        content = [part.model_dump() for part in message.content]
    return {"role": message.role, "content": content}


def prepare_messages(
    messages: Sequence[ChatMessage],
    system_prompt: Optional[str] = None,
    images: Optional[Sequence[str]] = None,
) -> list[ChatMessage]:
    """Normalize messages and prepend the system prompt when one is given."""
    prepared = normalize_messages(messages, images)
    if system_prompt and system_prompt.strip():
        prepared.insert(0, ChatMessage(role="system", content=system_prompt))
    return prepared


class CompletionService:
    """Runs one streaming completion per call. No retries, no buffering."""

    def __init__(self, router: ProviderRouter, default_model: str = "gpt-4o"):
        self._router = router
        self._default_model = default_model

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        model: Optional[str] = None,
        system_prompt: Optional[str] = None,
        images: Optional[Sequence[str]] = None,
    ) -> AsyncIterator[str]:
        """
        Stream a completion as text deltas.

        The returned iterator is single-use; call again to regenerate.

        Raises:
            ConfigurationError: If no usable provider credential is configured
            UpstreamError: If the provider fails; deltas already yielded stand
        """
        prepared = prepare_messages(messages, system_prompt, images)
        model_id = model or self._default_model
        handle = self._router.route(model_id)

        logger.info(
            f"Dispatching {len(prepared)} messages to {handle.name} (model={model_id})"
        )
        wire_messages = [to_wire(message) for message in prepared]
        async for delta in handle.provider.stream_chat(wire_messages, model_id):
            if delta:
                yield delta
