"""
Prompt snippet endpoints.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from chatter.api.deps import SnippetSvc
from chatter.core.exceptions import PersistenceError
from chatter.core.logger import setup_logger
from chatter.models.settings import SnippetsUpdateRequest

router = APIRouter()
logger = setup_logger(__name__)


@router.get("", response_model=list[str])
async def get_snippets(
    snippet_service: SnippetSvc,
    user_id: Optional[str] = Query(None, alias="userId"),
):
    if not user_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User ID required")

    try:
        return await snippet_service.get(user_id)
    except PersistenceError as e:
        logger.error(f"Error fetching snippets: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch snippets",
        )


@router.post("")
async def save_snippets(request: SnippetsUpdateRequest, snippet_service: SnippetSvc):
    """Replace the user's snippet list."""
    if not request.user_id or request.snippets is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid data")

    try:
        await snippet_service.save(request.user_id, request.snippets)
    except PersistenceError as e:
        logger.error(f"Error saving snippets: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save snippets",
        )
    return {"success": True}
