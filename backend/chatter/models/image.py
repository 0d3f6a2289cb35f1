"""
Generated image models.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GeneratedImage(BaseModel):
    """Generated image entry."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., description="Image UUID")
    storage_key: str
    url: str
    prompt: str = ""
    created_at: int = 0


class ImageGenerateRequest(BaseModel):
    """Request body for image generation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    prompt: Optional[str] = None
    user_id: Optional[str] = None
    width: Optional[int] = Field(None, gt=0)
    height: Optional[int] = Field(None, gt=0)
    steps: Optional[int] = Field(None, gt=0)
