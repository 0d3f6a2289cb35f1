"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that inject the correct
infrastructure implementations based on environment configuration.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from chatter.core.config import get_settings
from chatter.infrastructure.getimg.image_client import GetImgClient
from chatter.interfaces.llm_provider import ILLMProvider, ProviderConfig
from chatter.interfaces.object_store import IObjectStore
from chatter.services.completion_service import CompletionService
from chatter.services.history_service import HistoryService
from chatter.services.image_service import ImageService
from chatter.services.provider_router import ProviderRouter, RouterConfig
from chatter.services.settings_service import SettingsService
from chatter.services.snippet_service import SnippetService


# ===========================================
# Storage Dependencies
# ===========================================


@lru_cache()
def get_object_store() -> IObjectStore:
    """
    Get object store instance based on STORAGE_PROVIDER setting.

    Raises ConfigurationError when the selected backend is not configured,
    which every storage-backed endpoint reports as a 500.
    """
    settings = get_settings()

    if settings.STORAGE_PROVIDER == "memory":
        from chatter.infrastructure.local.memory_store import InMemoryObjectStore
        return InMemoryObjectStore()

    if settings.STORAGE_PROVIDER == "r2":
        from chatter.infrastructure.aws.r2_store import S3ObjectStore
        return S3ObjectStore(
            bucket_name=settings.R2_BUCKET,
            endpoint_url=settings.R2_ENDPOINT_URL,
            access_key_id=settings.R2_ACCESS_KEY_ID,
            secret_access_key=settings.R2_SECRET_ACCESS_KEY,
            region_name=settings.R2_REGION,
        )

    from chatter.infrastructure.local.storage_provider import LocalObjectStore
    return LocalObjectStore(settings.STORAGE_BASE_PATH)


# ===========================================
# Provider Dependencies
# ===========================================


@lru_cache()
def get_provider_router() -> ProviderRouter:
    """Get the provider router, built once per process from settings."""
    settings = get_settings()
    from chatter.infrastructure.local.litellm_provider import LiteLLMProvider

    def build_provider(config: ProviderConfig) -> ILLMProvider:
        return LiteLLMProvider(config, models_timeout=settings.MODELS_FETCH_TIMEOUT)

    return ProviderRouter(RouterConfig.from_settings(settings), build_provider)


def get_image_client() -> GetImgClient:
    """Get image generation client. Raises ConfigurationError without a key."""
    settings = get_settings()
    return GetImgClient(
        api_key=settings.GETIMG_API_KEY,
        api_url=settings.GETIMG_API_URL,
        timeout=settings.GETIMG_TIMEOUT,
    )


# ===========================================
# Service Dependencies
# ===========================================


def get_completion_service(
    router: ProviderRouter = Depends(get_provider_router),
) -> CompletionService:
    return CompletionService(router, default_model=get_settings().DEFAULT_MODEL)


def get_history_service(store: IObjectStore = Depends(get_object_store)) -> HistoryService:
    return HistoryService(store, title_max_length=get_settings().CHAT_TITLE_MAX_LENGTH)


def get_settings_service(store: IObjectStore = Depends(get_object_store)) -> SettingsService:
    return SettingsService(store)


def get_snippet_service(store: IObjectStore = Depends(get_object_store)) -> SnippetService:
    return SnippetService(store)


def get_image_service(store: IObjectStore = Depends(get_object_store)) -> ImageService:
    return ImageService(store, list_limit=get_settings().IMAGE_LIST_LIMIT)


# ===========================================
# Type Aliases for Dependency Injection
# ===========================================

ObjectStore = Annotated[IObjectStore, Depends(get_object_store)]
Router = Annotated[ProviderRouter, Depends(get_provider_router)]
ImageClient = Annotated[GetImgClient, Depends(get_image_client)]
CompletionSvc = Annotated[CompletionService, Depends(get_completion_service)]
HistorySvc = Annotated[HistoryService, Depends(get_history_service)]
SettingsSvc = Annotated[SettingsService, Depends(get_settings_service)]
SnippetSvc = Annotated[SnippetService, Depends(get_snippet_service)]
ImageSvc = Annotated[ImageService, Depends(get_image_service)]
