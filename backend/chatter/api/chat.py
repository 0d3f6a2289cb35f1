"""
Chat API endpoint.

Streams the assistant reply as plain text deltas.
"""

from typing import AsyncGenerator, AsyncIterator, Optional

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse, StreamingResponse

from chatter.api.deps import CompletionSvc
from chatter.core.exceptions import UpstreamError
from chatter.core.logger import setup_logger
from chatter.models.chat import ChatRequest

router = APIRouter()
logger = setup_logger(__name__)


async def _first_delta(stream: AsyncIterator[str]) -> Optional[str]:
    try:
        return await stream.__anext__()
    except StopAsyncIteration:
        return None


@router.post("")
async def chat(request: ChatRequest, completion_service: CompletionSvc):
    """
    Stream a chat completion.

    Upstream failures before the first delta are returned with the provider's
    status code and body text. Failures after that abort the stream; text
    already sent stands.
    """
    stream = completion_service.complete(
        messages=request.messages,
        model=request.model,
        system_prompt=request.system_prompt,
        images=request.sibling_images(),
    )

    # Pull the first delta so provider errors can still set the status code
    try:
        first = await _first_delta(stream)
    except UpstreamError as e:
        logger.error(
            f"Chat upstream error (user={request.user_id}, chat={request.chat_id}): "
            f"{e.status_code} {e.message}"
        )
        return PlainTextResponse(e.message, status_code=e.status_code)

    async def text_generator() -> AsyncGenerator[str, None]:
        if first:
            yield first
        try:
            async for delta in stream:
                yield delta
        except UpstreamError as e:
            logger.error(
                f"Chat stream aborted (user={request.user_id}, chat={request.chat_id}): "
                f"{e.status_code} {e.message}"
            )
            raise

    return StreamingResponse(
        text_generator(),
        media_type="text/plain; charset=utf-8",
        headers={
            "Cache-Control": "no-cache",
            "X-Accel-Buffering": "no",  # Disable buffering for nginx
        },
    )
