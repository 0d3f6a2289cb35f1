"""
Available models endpoint.

Aggregates the model catalogues of every configured provider. Providers that
fail are left out of the result.
"""

import asyncio

from fastapi import APIRouter

from chatter.api.deps import Router
from chatter.core.exceptions import UpstreamError
from chatter.core.logger import setup_logger
from chatter.interfaces.llm_provider import ILLMProvider
from chatter.models.chat import ModelDescriptor

router = APIRouter()
logger = setup_logger(__name__)


async def _fetch_models(provider: ILLMProvider) -> list[ModelDescriptor]:
    try:
        return await provider.list_models()
    except UpstreamError as e:
        logger.warning(f"Failed to fetch {provider.label} models: {e.message}")
        return []


@router.get("", response_model=list[ModelDescriptor])
async def list_available_models(provider_router: Router):
    """List models across configured providers, primary provider first."""
    results = await asyncio.gather(
        *(_fetch_models(provider) for provider in provider_router.configured_providers())
    )
    return [model for models in results for model in models]
