"""
Shared test fixtures.
"""

from typing import Any, AsyncIterator, Optional

import pytest

from chatter.core.exceptions import UpstreamError
from chatter.infrastructure.local.memory_store import InMemoryObjectStore
from chatter.interfaces.llm_provider import ILLMProvider, ProviderConfig
from chatter.models.chat import ModelDescriptor
from chatter.services.provider_router import ProviderRouter, RouterConfig


class FakeProvider(ILLMProvider):
    """Scripted provider: yields `deltas`, then raises `error` if set."""

    def __init__(
        self,
        config: ProviderConfig,
        deltas: Optional[list[str]] = None,
        error: Optional[Exception] = None,
        models: Optional[list[str]] = None,
        models_error: Optional[Exception] = None,
    ):
        self.config = config
        self.deltas = deltas if deltas is not None else ["Hello", ", ", "world"]
        self.error = error
        self.models = models or []
        self.models_error = models_error
        self.calls: list[dict[str, Any]] = []

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def label(self) -> str:
        return self.config.label

    async def stream_chat(self, messages: list[dict[str, Any]], model: str) -> AsyncIterator[str]:
        self.calls.append({"messages": messages, "model": model})
        for delta in self.deltas:
            yield delta
        if self.error is not None:
            raise self.error

    async def list_models(self) -> list[ModelDescriptor]:
        if self.models_error is not None:
            raise self.models_error
        return [ModelDescriptor(id=model_id, provider=self.label) for model_id in self.models]


def make_router_config(openai_key: str = "sk-openai", xai_key: str = "") -> RouterConfig:
    return RouterConfig(
        primary=ProviderConfig(
            name="openai",
            label="OpenAI",
            api_key=openai_key,
            base_url="https://api.openai.com/v1",
            model_filter="gpt",
        ),
        secondary=ProviderConfig(
            name="xai",
            label="xAI",
            api_key=xai_key,
            base_url="https://api.x.ai/v1",
        ),
    )


def make_router(
    openai_key: str = "sk-openai",
    xai_key: str = "",
    **provider_kwargs: Any,
) -> ProviderRouter:
    """Router whose providers are FakeProviders sharing provider_kwargs."""
    return ProviderRouter(
        make_router_config(openai_key, xai_key),
        lambda config: FakeProvider(config, **provider_kwargs),
    )


@pytest.fixture
def memory_store() -> InMemoryObjectStore:
    return InMemoryObjectStore()


@pytest.fixture
def upstream_rate_limit() -> UpstreamError:
    return UpstreamError("Rate limit reached for gpt-4o", status_code=429)


@pytest.fixture
def router_factory():
    """Build a ProviderRouter backed by FakeProviders."""
    return make_router


@pytest.fixture
def fake_provider_cls():
    return FakeProvider
