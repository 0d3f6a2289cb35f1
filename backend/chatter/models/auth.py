"""
Password gate models.
"""

from pydantic import BaseModel


class AuthRequest(BaseModel):
    """Password gate request."""

    password: str = ""
