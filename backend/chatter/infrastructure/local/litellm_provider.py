"""
LiteLLM provider implementation.

Talks to OpenAI-compatible endpoints (OpenAI, xAI) through LiteLLM.
Streaming completions go through litellm.acompletion; the model catalogue is
read from the provider's /models endpoint with httpx.
"""

from typing import Any, AsyncIterator, Optional

import httpx
import litellm

from chatter.core.exceptions import UpstreamError
from chatter.core.logger import setup_logger
from chatter.interfaces.llm_provider import ILLMProvider, ProviderConfig
from chatter.models.chat import ModelDescriptor

logger = setup_logger(__name__)


def _status_of(error: Exception) -> int:
    status = getattr(error, "status_code", None)
    if isinstance(status, int) and 400 <= status <= 599:
        return status
    return 502


def _to_upstream_error(error: Exception) -> UpstreamError:
    """Keep the provider message as-is; callers log which provider failed."""
    if isinstance(error, UpstreamError):
        return error
    message = getattr(error, "message", None) or str(error) or error.__class__.__name__
    return UpstreamError(message, status_code=_status_of(error))


def _delta_text(chunk: Any) -> Optional[str]:
    choices = getattr(chunk, "choices", None)
    if not choices:
        return None
    delta = getattr(choices[0], "delta", None)
    return getattr(delta, "content", None) if delta is not None else None


class LiteLLMProvider(ILLMProvider):
    """LiteLLM provider for an OpenAI-compatible endpoint."""

    def __init__(self, config: ProviderConfig, models_timeout: float = 10.0):
        """
        Initialize LiteLLM provider.

        Args:
            config: Provider connection settings
            models_timeout: Timeout in seconds for the /models request
        """
        self._config = config
        self._models_timeout = models_timeout

    @property
    def name(self) -> str:
        return self._config.name

    @property
    def label(self) -> str:
        return self._config.label

    @property
    def config(self) -> ProviderConfig:
        return self._config

    async def stream_chat(
        self,
        messages: list[dict[str, Any]],
        model: str,
    ) -> AsyncIterator[str]:
        """Stream text deltas from the provider."""
        logger.info(f"Streaming completion: provider={self.name} model={model}")
        try:
            response = await litellm.acompletion(
                model=model,
                messages=messages,
                stream=True,
                api_key=self._config.api_key,
                api_base=self._config.base_url,
                custom_llm_provider="openai",
            )
        except Exception as e:
            logger.error(f"{self.label} completion request failed: {e}")
            raise _to_upstream_error(e) from e

        try:
            async for chunk in response:
                text = _delta_text(chunk)
                if text:
                    yield text
        except Exception as e:
            logger.error(f"{self.label} stream aborted: {e}")
            raise _to_upstream_error(e) from e

    async def list_models(self) -> list[ModelDescriptor]:
        """Fetch available models from the provider's /models endpoint."""
        headers = {"Authorization": f"Bearer {self._config.api_key}"}
        url = f"{self._config.base_url.rstrip('/')}/models"

        try:
            async with httpx.AsyncClient(timeout=self._models_timeout) as client:
                resp = await client.get(url, headers=headers)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"{self.label} models request failed: {e.response.status_code}")
            raise UpstreamError(e.response.text, status_code=e.response.status_code) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"{self.label} models request failed: {e}")
            raise UpstreamError(str(e) or e.__class__.__name__) from e

        # OpenAI-compatible format: { "data": [{"id": "model-name", ...}, ...] }
        entries = data.get("data", []) if isinstance(data, dict) else None
        if not isinstance(entries, list):
            logger.error(f"{self.label} models response has no data list")
            raise UpstreamError(f"Unexpected models response: {resp.text[:200]}")
        model_ids = [
            m["id"] for m in entries
            if isinstance(m, dict) and isinstance(m.get("id"), str) and m["id"]
        ]
        if self._config.model_filter:
            model_ids = [m for m in model_ids if self._config.model_filter in m]

        return [ModelDescriptor(id=model_id, provider=self.label) for model_id in model_ids]
