"""
LLM provider interface.

Defines the contract for upstream chat-completion providers.
Implementations: LiteLLM over OpenAI-compatible endpoints (OpenAI, xAI).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, AsyncIterator, Optional

from chatter.models.chat import ModelDescriptor


@dataclass(frozen=True)
class ProviderConfig:
    """Immutable connection settings for one upstream provider."""

    name: str
    label: str
    api_key: str
    base_url: str
    # Only model ids containing this substring are listed (None lists all)
    model_filter: Optional[str] = None

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key)


class ILLMProvider(ABC):
    """Abstract interface for LLM providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short provider key (e.g. "openai", "xai")."""
        pass

    @property
    @abstractmethod
    def label(self) -> str:
        """Human-readable provider label (e.g. "OpenAI", "xAI")."""
        pass

    @abstractmethod
    def stream_chat(
        self,
        messages: list[dict[str, Any]],
        model: str,
    ) -> AsyncIterator[str]:
        """
        Request a streaming completion.

        Args:
            messages: Wire-format chat messages
            model: Model identifier

        Returns:
            Async iterator of text deltas

        Raises:
            UpstreamError: On non-success status or transport failure
        """
        pass

    @abstractmethod
    async def list_models(self) -> list[ModelDescriptor]:
        """
        Fetch the models this provider currently offers.

        Raises:
            UpstreamError: If the provider cannot be reached
        """
        pass
