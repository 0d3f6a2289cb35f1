"""
Password gate endpoint.
"""

import secrets

from fastapi import APIRouter, HTTPException, status

from chatter.core.config import get_settings
from chatter.core.exceptions import ConfigurationError
from chatter.models.auth import AuthRequest

router = APIRouter()


@router.post("")
async def check_password(request: AuthRequest):
    """Compare the password with ADMIN_PASSWORD."""
    admin_password = get_settings().ADMIN_PASSWORD
    if not admin_password:
        raise ConfigurationError("ADMIN_PASSWORD not configured")

    if secrets.compare_digest(request.password.encode("utf-8"), admin_password.encode("utf-8")):
        return {"success": True}

    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
