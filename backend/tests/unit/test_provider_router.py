import logging

import pytest

from chatter.core.exceptions import ConfigurationError
from chatter.interfaces.llm_provider import ProviderConfig
from chatter.services.provider_router import ProviderRouter, RouterConfig


def test_grok_model_routes_to_secondary_when_key_present(router_factory) -> None:
    router = router_factory(xai_key="xai-key")

    handle = router.route("grok-2")

    assert handle.name == "xai"
    assert handle.warning is None
    assert not handle.fell_back


def test_grok_model_falls_back_to_primary_without_key(router_factory, caplog) -> None:
    router = router_factory(xai_key="")

    with caplog.at_level(logging.WARNING, logger="chatter"):
        handle = router.route("grok-2")

    assert handle.name == "openai"
    assert handle.fell_back
    assert "xAI" in handle.warning
    assert any("grok-2" in record.getMessage() for record in caplog.records)


def test_other_models_route_to_primary(router_factory) -> None:
    router = router_factory(xai_key="xai-key")

    handle = router.route("gpt-4o")

    assert handle.name == "openai"
    assert handle.warning is None


def test_xai_marker_routes_to_secondary(router_factory) -> None:
    router = router_factory(xai_key="xai-key")
    assert router.route("xai-beta").name == "xai"


def test_marker_match_is_case_sensitive_by_default(router_factory) -> None:
    router = router_factory(xai_key="xai-key")
    assert router.route("Grok-2").name == "openai"


def test_case_insensitive_matching_when_configured(fake_provider_cls) -> None:
    config = RouterConfig(
        primary=ProviderConfig(name="openai", label="OpenAI", api_key="k", base_url="u"),
        secondary=ProviderConfig(name="xai", label="xAI", api_key="x", base_url="v"),
        case_sensitive=False,
    )
    router = ProviderRouter(config, fake_provider_cls)

    assert router.route("Grok-2").name == "xai"


def test_missing_primary_key_is_a_hard_error(router_factory) -> None:
    router = router_factory(openai_key="")

    with pytest.raises(ConfigurationError):
        router.route("gpt-4o")


def test_secondary_route_does_not_need_primary_key(router_factory) -> None:
    router = router_factory(openai_key="", xai_key="xai-key")
    assert router.route("grok-2").name == "xai"


def test_configured_providers_skip_missing_credentials(router_factory) -> None:
    assert [p.name for p in router_factory(xai_key="").configured_providers()] == ["openai"]
    assert [p.name for p in router_factory(xai_key="k").configured_providers()] == ["openai", "xai"]
    assert router_factory(openai_key="").configured_providers() == []


def test_router_config_from_settings() -> None:
    from types import SimpleNamespace

    settings = SimpleNamespace(
        OPENAI_API_KEY="sk",
        OPENAI_BASE_URL="https://api.openai.com/v1",
        PRIMARY_MODEL_FILTER="gpt",
        XAI_API_KEY="",
        XAI_BASE_URL="https://api.x.ai/v1",
        SECONDARY_MODEL_MARKERS=["grok", "xai"],
        ROUTER_CASE_SENSITIVE=True,
    )

    config = RouterConfig.from_settings(settings)

    assert config.primary.has_credentials
    assert config.primary.model_filter == "gpt"
    assert config.secondary is not None
    assert not config.secondary.has_credentials
    assert config.secondary_markers == ("grok", "xai")
