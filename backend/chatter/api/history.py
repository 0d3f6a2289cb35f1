"""
Chat history endpoints.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from chatter.api.deps import HistorySvc
from chatter.core.exceptions import PersistenceError
from chatter.core.logger import setup_logger
from chatter.models.chat_session import ChatSession

router = APIRouter()
logger = setup_logger(__name__)


@router.get("", response_model=list[ChatSession], response_model_exclude_none=True)
async def list_history(
    history_service: HistorySvc,
    user_id: Optional[str] = Query(None, alias="userId"),
):
    """List a user's chat sessions, newest first."""
    if not user_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User ID required")

    try:
        return await history_service.list_sessions(user_id)
    except PersistenceError as e:
        logger.error(f"Error listing chats: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list chats",
        )


@router.post("")
async def save_history(session: ChatSession, history_service: HistorySvc):
    """Save (overwrite) a chat session."""
    try:
        await history_service.save(session)
    except PersistenceError as e:
        logger.error(f"Error saving chat: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save chat",
        )
    return {"success": True}


@router.delete("")
async def delete_history(
    history_service: HistorySvc,
    user_id: Optional[str] = Query(None, alias="userId"),
    chat_id: Optional[str] = Query(None, alias="chatId"),
):
    """Delete a chat session. Unknown sessions succeed."""
    if not user_id or not chat_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User ID and Chat ID required",
        )

    try:
        await history_service.delete(user_id, chat_id)
    except PersistenceError as e:
        logger.error(f"Error deleting chat: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete chat",
        )
    return {"success": True}
