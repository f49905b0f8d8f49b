"""
Unit tests for ProxyGatewayService.

Covers rule-table resolution, credential placement, response normalization
and the fixture fallback policy, with upstream providers mocked by respx.
"""

from __future__ import annotations

import json
import logging

import httpx
import pytest
from respx import MockRouter

from disasterwatch.config import Settings
from disasterwatch.exceptions import UnknownServiceError
from disasterwatch.schemas.gateway import DataSource, HttpMethod, ServiceName, ServiceRequest
from disasterwatch.services.fixtures import get_fixture
from disasterwatch.services.gateway_service import ProxyGatewayService, log_missing_credentials

ONECALL_URL = "https://api.openweathermap.org/data/2.5/onecall"
GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/gemini-1.5-flash:generateContent"

WEATHER_REQUEST = ServiceRequest(
    service="weather",
    endpoint="onecall",
    params={"lat": 37.7749, "lon": -122.4194, "exclude": "minutely,hourly", "units": "metric"},
)


@pytest.mark.parametrize(
    "service, endpoint, credential, location, name",
    [
        ("weather", "onecall", "owm-test-key", "query", "appid"),
        ("news", "everything", "news-test-key", "query", "apiKey"),
        ("nasa", "earth/assets", "nasa-test-key", "query", "api_key"),
        ("gemini", "generateContent", "gemini-test-key", "header", "x-goog-api-key"),
    ],
)
def test_credential_is_placed_only_where_the_rule_says(
    gateway: ProxyGatewayService,
    service: str,
    endpoint: str,
    credential: str,
    location: str,
    name: str,
) -> None:
    call = gateway.resolve(ServiceRequest(service=service, endpoint=endpoint, params={"q": "flood"}))

    placed = call.query if location == "query" else call.headers
    assert placed[name] == credential

    occurrences = (
        list(call.query.values()).count(credential)
        + list(call.headers.values()).count(credential)
        + call.url.count(credential)
        + (call.body or "").count(credential)
    )
    assert occurrences == 1


def test_resolve_get_service_encodes_params_as_query(gateway: ProxyGatewayService) -> None:
    call = gateway.resolve(WEATHER_REQUEST)

    assert call.method == HttpMethod.GET
    assert call.url == ONECALL_URL
    assert call.body is None
    assert call.query == {
        "lat": "37.7749",
        "lon": "-122.4194",
        "exclude": "minutely,hourly",
        "units": "metric",
        "appid": "owm-test-key",
    }


def test_resolve_stringifies_booleans_and_nested_values(gateway: ProxyGatewayService) -> None:
    call = gateway.resolve(
        ServiceRequest(service="nasa", endpoint="/earth/assets", params={"cloud_score": True, "bbox": [1, 2]})
    )

    assert call.url == "https://api.nasa.gov/earth/assets"
    assert call.query["cloud_score"] == "true"
    assert call.query["bbox"] == "[1,2]"


def test_request_params_cannot_override_credential(gateway: ProxyGatewayService) -> None:
    call = gateway.resolve(ServiceRequest(service="news", endpoint="everything", params={"apiKey": "stolen"}))

    assert call.query["apiKey"] == "news-test-key"


def test_resolve_post_service_sends_json_body(gateway: ProxyGatewayService) -> None:
    params = {"contents": [{"parts": [{"text": "Is Miami at risk?"}]}]}
    call = gateway.resolve(ServiceRequest(service="gemini", endpoint="generateContent", params=params))

    assert call.method == HttpMethod.POST
    assert call.url == GEMINI_URL
    assert call.query == {}
    assert call.headers["Content-Type"] == "application/json"
    assert json.loads(call.body) == params


def test_missing_credential_still_resolves(settings: Settings) -> None:
    gateway = ProxyGatewayService(settings.model_copy(update={"openweathermap_api_key": None}))

    call = gateway.resolve(WEATHER_REQUEST)

    assert call.query["appid"] == ""


@pytest.mark.parametrize("service", ["flood-watch", "", "WEATHER"])
async def test_unknown_service_is_rejected_without_upstream_call(
    gateway: ProxyGatewayService, respx_mock: MockRouter, service: str
) -> None:
    with pytest.raises(UnknownServiceError):
        await gateway.forward(ServiceRequest(service=service, endpoint="anything"))

    assert len(respx_mock.calls) == 0


async def test_forward_relays_live_json(gateway: ProxyGatewayService, respx_mock: MockRouter) -> None:
    upstream = {"current": {"temp": 19.5}, "alerts": []}
    route = respx_mock.get(ONECALL_URL).mock(return_value=httpx.Response(200, json=upstream))

    result = await gateway.forward(WEATHER_REQUEST)

    assert result.data == upstream
    assert result.error is None
    assert result.source == DataSource.LIVE
    assert route.call_count == 1
    sent = route.calls.last.request
    assert sent.url.params["appid"] == "owm-test-key"
    assert sent.url.params["lat"] == "37.7749"


async def test_forward_posts_to_gemini_with_header_credential(
    gateway: ProxyGatewayService, respx_mock: MockRouter
) -> None:
    upstream = {"candidates": [{"content": {"parts": [{"text": "ok"}]}}]}
    route = respx_mock.post(GEMINI_URL).mock(return_value=httpx.Response(200, json=upstream))

    result = await gateway.forward(
        ServiceRequest(service="gemini", endpoint="generateContent", params={"contents": []})
    )

    assert result.data == upstream
    sent = route.calls.last.request
    assert sent.headers["x-goog-api-key"] == "gemini-test-key"
    assert "key" not in sent.url.params
    assert json.loads(sent.content) == {"contents": []}


@pytest.mark.parametrize(
    "upstream",
    [
        httpx.Response(503, text="Service Unavailable"),
        httpx.Response(401, json={"cod": 401, "message": "Invalid API key"}),
        httpx.Response(200, text="<html>maintenance</html>", headers={"content-type": "text/html"}),
        httpx.Response(200, content=b"{broken", headers={"content-type": "application/json"}),
    ],
)
async def test_unusable_upstream_response_is_replaced_by_fixture(
    gateway: ProxyGatewayService, respx_mock: MockRouter, upstream: httpx.Response
) -> None:
    respx_mock.get(ONECALL_URL).mock(return_value=upstream)

    result = await gateway.forward(WEATHER_REQUEST)

    assert result.data == get_fixture(ServiceName.WEATHER)
    assert result.error is None
    assert result.source == DataSource.FALLBACK


async def test_json_content_type_is_matched_case_insensitively(
    gateway: ProxyGatewayService, respx_mock: MockRouter
) -> None:
    respx_mock.get(ONECALL_URL).mock(
        return_value=httpx.Response(
            200,
            content=b'{"alerts": []}',
            headers={"content-type": "Application/JSON; charset=utf-8"},
        )
    )

    result = await gateway.forward(WEATHER_REQUEST)

    assert result.data == {"alerts": []}
    assert result.source == DataSource.LIVE


@pytest.mark.parametrize("error", [httpx.ConnectError("refused"), httpx.ReadTimeout("too slow")])
async def test_transport_error_is_replaced_by_fixture(
    gateway: ProxyGatewayService, respx_mock: MockRouter, error: Exception
) -> None:
    route = respx_mock.get("https://newsapi.org/v2/everything").mock(side_effect=error)

    result = await gateway.forward(ServiceRequest(service="news", endpoint="everything", params={"q": "flood"}))

    assert result.data == get_fixture(ServiceName.NEWS)
    assert result.source == DataSource.FALLBACK
    assert route.call_count == 1


async def test_same_request_twice_yields_identical_responses(
    gateway: ProxyGatewayService, respx_mock: MockRouter
) -> None:
    respx_mock.get(ONECALL_URL).mock(return_value=httpx.Response(503))

    first = await gateway.forward(WEATHER_REQUEST)
    second = await gateway.forward(WEATHER_REQUEST)

    assert first == second


async def test_credentials_never_reach_the_logs(
    gateway: ProxyGatewayService, respx_mock: MockRouter, caplog: pytest.LogCaptureFixture
) -> None:
    respx_mock.get(ONECALL_URL).mock(return_value=httpx.Response(200, json={"alerts": []}))
    respx_mock.get("https://newsapi.org/v2/everything").mock(side_effect=httpx.ConnectError("refused"))
    respx_mock.post(GEMINI_URL).mock(return_value=httpx.Response(500))

    with caplog.at_level(logging.DEBUG):
        await gateway.forward(WEATHER_REQUEST)
        await gateway.forward(ServiceRequest(service="news", endpoint="everything"))
        await gateway.forward(ServiceRequest(service="gemini", endpoint="generateContent"))

    assert "owm-test-key" not in caplog.text
    assert "news-test-key" not in caplog.text
    assert "gemini-test-key" not in caplog.text


def test_fixture_copies_are_independent() -> None:
    fixture = get_fixture(ServiceName.WEATHER)
    fixture["alerts"].clear()

    assert len(get_fixture(ServiceName.WEATHER)["alerts"]) == 2


def test_missing_credentials_are_logged_as_warnings(caplog: pytest.LogCaptureFixture) -> None:
    settings = Settings(_env_file=None, nasa_api_key="nasa-test-key")

    with caplog.at_level(logging.WARNING):
        log_missing_credentials(settings)

    warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 3
    assert any("OPENWEATHERMAP_API_KEY" in message for message in warnings)
    assert not any("NASA_API_KEY" in message for message in warnings)
