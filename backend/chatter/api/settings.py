"""
User settings endpoints.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from chatter.api.deps import SettingsSvc
from chatter.core.exceptions import PersistenceError
from chatter.core.logger import setup_logger
from chatter.models.settings import SettingsUpdateRequest

router = APIRouter()
logger = setup_logger(__name__)


@router.get("")
async def get_user_settings(
    settings_service: SettingsSvc,
    user_id: Optional[str] = Query(None, alias="userId"),
):
    """Get user settings ({"hiddenModels": []} when none saved)."""
    if not user_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User ID required")

    try:
        return await settings_service.get(user_id)
    except PersistenceError as e:
        logger.error(f"Error fetching settings: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch settings",
        )


@router.post("")
async def save_user_settings(request: SettingsUpdateRequest, settings_service: SettingsSvc):
    """Merge the given settings into the stored ones."""
    if not request.user_id or request.settings is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User ID and settings required",
        )

    try:
        merged = await settings_service.save(request.user_id, request.settings)
    except PersistenceError as e:
        logger.error(f"Error saving settings: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save settings",
        )
    return {"success": True, "settings": merged}
