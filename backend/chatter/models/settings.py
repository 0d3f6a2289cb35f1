"""
User settings models.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UserSettings(BaseModel):
    """Per-user settings. Extra keys are kept as-is."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    hidden_models: list[str] = Field(default_factory=list)


class UserSettingsPatch(BaseModel):
    """Partial settings sent by the client."""

    model_config = ConfigDict(alias_generator=to_camel, extra="allow")

    hidden_models: Optional[list[str]] = None


class SettingsUpdateRequest(BaseModel):
    """Request body for saving settings."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_id: Optional[str] = None
    settings: Optional[dict[str, Any]] = None


class SnippetsUpdateRequest(BaseModel):
    """Request body for replacing snippets."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_id: Optional[str] = None
    snippets: Optional[list[str]] = None
