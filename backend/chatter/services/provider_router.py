"""
Provider routing.

Selects the upstream provider for a model id. Model ids carrying one of the
secondary markers go to the secondary provider when its key is configured;
everything else goes to the primary provider.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from chatter.core.config import Settings
from chatter.core.exceptions import ConfigurationError
from chatter.core.logger import setup_logger
from chatter.interfaces.llm_provider import ILLMProvider, ProviderConfig

logger = setup_logger(__name__)

ProviderFactory = Callable[[ProviderConfig], ILLMProvider]


@dataclass(frozen=True)
class RouterConfig:
    """Explicit routing configuration."""

    primary: ProviderConfig
    secondary: Optional[ProviderConfig] = None
    secondary_markers: tuple[str, ...] = ("grok", "xai")
    case_sensitive: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> "RouterConfig":
        return cls(
            primary=ProviderConfig(
                name="openai",
                label="OpenAI",
                api_key=settings.OPENAI_API_KEY,
                base_url=settings.OPENAI_BASE_URL,
                model_filter=settings.PRIMARY_MODEL_FILTER or None,
            ),
            secondary=ProviderConfig(
                name="xai",
                label="xAI",
                api_key=settings.XAI_API_KEY,
                base_url=settings.XAI_BASE_URL,
            ),
            secondary_markers=tuple(settings.SECONDARY_MODEL_MARKERS),
            case_sensitive=settings.ROUTER_CASE_SENSITIVE,
        )


@dataclass(frozen=True)
class ProviderHandle:
    """Routing result. `warning` is set when routing fell back to the primary."""

    provider: ILLMProvider
    warning: Optional[str] = None

    @property
    def name(self) -> str:
        return self.provider.name

    @property
    def fell_back(self) -> bool:
        return self.warning is not None


class ProviderRouter:
    """Routes model ids to providers built once from a RouterConfig."""

    def __init__(self, config: RouterConfig, provider_factory: ProviderFactory):
        self._config = config
        self._primary = provider_factory(config.primary)
        self._secondary: Optional[ILLMProvider] = None
        if config.secondary is not None and config.secondary.has_credentials:
            self._secondary = provider_factory(config.secondary)

    @property
    def config(self) -> RouterConfig:
        return self._config

    def wants_secondary(self, model_id: str) -> bool:
        """Check whether the model id names the secondary provider."""
        if self._config.case_sensitive:
            return any(marker in model_id for marker in self._config.secondary_markers)
        lowered = model_id.lower()
        return any(marker.lower() in lowered for marker in self._config.secondary_markers)

    def route(self, model_id: str) -> ProviderHandle:
        """
        Resolve the provider for a model id.

        Raises:
            ConfigurationError: If the primary provider is needed but has no key
        """
        warning = None
        if self.wants_secondary(model_id):
            if self._secondary is not None:
                return ProviderHandle(provider=self._secondary)
            secondary_label = self._config.secondary.label if self._config.secondary else "secondary"
            warning = (
                f"{secondary_label} credential not configured; "
                f"routing model '{model_id}' to {self._config.primary.label}"
            )
            logger.warning(warning)

        if not self._config.primary.has_credentials:
            raise ConfigurationError(f"{self._config.primary.label} API key not configured")
        return ProviderHandle(provider=self._primary, warning=warning)

    def configured_providers(self) -> list[ILLMProvider]:
        """Providers that have credentials, primary first."""
        providers: list[ILLMProvider] = []
        if self._config.primary.has_credentials:
            providers.append(self._primary)
        if self._secondary is not None:
            providers.append(self._secondary)
        return providers
