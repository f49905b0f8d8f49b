"""Shared fixtures for gateway and adapter tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from disasterwatch.client.notifications import LogNotifier
from disasterwatch.config import Settings
from disasterwatch.services.gateway_service import ProxyGatewayService

GATEWAY_URL = "http://gateway.test/api/api-proxy"

CREDENTIALS = {
    "openweathermap_api_key": "owm-test-key",
    "news_api_key": "news-test-key",
    "nasa_api_key": "nasa-test-key",
    "gemini_api_key": "gemini-test-key",
}


@pytest.fixture
def settings() -> Settings:
    """Settings with every provider credential configured and no .env lookup."""
    return Settings(_env_file=None, gateway_url=GATEWAY_URL, **CREDENTIALS)


@pytest.fixture
def gateway(settings: Settings) -> ProxyGatewayService:
    return ProxyGatewayService(settings)


@pytest.fixture
def notifier() -> LogNotifier:
    return LogNotifier(history_size=10)


@pytest.fixture
def app_with_gateway(gateway: ProxyGatewayService) -> Iterator:
    """The FastAPI app wired to the test gateway service."""
    from disasterwatch.main import app
    from disasterwatch.services.gateway_service import get_gateway_service

    app.dependency_overrides[get_gateway_service] = lambda: gateway
    yield app
    app.dependency_overrides.clear()
