"""
Application configuration using Pydantic Settings.

Storage backend and upstream providers are selected by environment variables.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Environment
    # ===========================================
    ENVIRONMENT: Literal["local", "production"] = "local"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # ===========================================
    # Object Storage
    # ===========================================
    # Storage provider: "local" | "memory" | "r2"
    # - local: files under STORAGE_BASE_PATH
    # - memory: process-local dict (tests, demos)
    # - r2: Cloudflare R2 or any S3-compatible bucket
    STORAGE_PROVIDER: Literal["local", "memory", "r2"] = "local"
    STORAGE_BASE_PATH: str = "./storage"

    R2_BUCKET: str = ""
    R2_ENDPOINT_URL: str = ""
    R2_ACCESS_KEY_ID: str = ""
    R2_SECRET_ACCESS_KEY: str = ""
    R2_REGION: str = "auto"

    # ===========================================
    # LLM Providers
    # ===========================================
    # Primary provider (required for chat)
    OPENAI_API_KEY: str = ""
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"

    # Secondary provider (optional, OpenAI-compatible)
    XAI_API_KEY: str = ""
    XAI_BASE_URL: str = "https://api.x.ai/v1"

    # Model ids containing one of these markers go to the secondary provider
    SECONDARY_MODEL_MARKERS: List[str] = Field(default=["grok", "xai"])
    ROUTER_CASE_SENSITIVE: bool = True

    # Only primary models whose id contains this substring are listed
    PRIMARY_MODEL_FILTER: str = "gpt"

    DEFAULT_MODEL: str = "gpt-4o"
    MODELS_FETCH_TIMEOUT: float = 10.0

    # ===========================================
    # Image Generation
    # ===========================================
    GETIMG_API_KEY: str = ""
    GETIMG_API_URL: str = "https://api.getimg.ai/v1/flux-schnell/text-to-image"
    GETIMG_TIMEOUT: float = 120.0
    IMAGE_LIST_LIMIT: int = 100

    # ===========================================
    # Auth (password gate)
    # ===========================================
    ADMIN_PASSWORD: str = ""

    # ===========================================
    # Chat History
    # ===========================================
    CHAT_TITLE_MAX_LENGTH: int = 50

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"]
    )

    @property
    def is_local(self) -> bool:
        """Check if running in local environment."""
        return self.ENVIRONMENT == "local"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
