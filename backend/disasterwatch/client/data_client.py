"""
Client Data Adapter

Typed fetch helpers over the proxy gateway. When the gateway cannot be
reached or answers with something unusable, the helpers fall back to local
demonstration data and notify the user, so callers always get data to show.
"""

import asyncio
import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from disasterwatch.config import Settings, get_settings
from disasterwatch.exceptions import RiskParseError
from disasterwatch.schemas.disaster import DisasterEvent, Region, RiskAnalysis
from disasterwatch.schemas.gateway import (
    DATA_SOURCE_HEADER, DataSource, ServiceName, ServiceRequest, ServiceResponse,
)
from .events import DEFAULT_REGIONS, events_from_news, events_from_weather
from .fixtures import get_local_fixture
from .notifications import CONNECTIVITY_MESSAGE, RISK_PARSE_MESSAGE, LogNotifier, Notifier
from .risk import build_generate_content_payload, build_risk_prompt, extract_reply_text, parse_risk_reply

logger = logging.getLogger(__name__)

DEFAULT_NEWS_QUERY = "natural disaster"

# Center of the contiguous United States
DEFAULT_FLOOD_LAT = 37.0902
DEFAULT_FLOOD_LON = -95.7129
DEFAULT_FLOOD_DIM = 0.025


def _validate_coordinates(lat: float, lon: float) -> None:
    for name, value, bound in (("lat", lat, 90), ("lon", lon, 180)):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"{name} must be a number, got {value!r}")
        if not math.isfinite(value) or abs(value) > bound:
            raise ValueError(f"{name} must be a finite number within ±{bound}, got {value!r}")


def _validate_text(name: str, value: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} must be a non-empty string")
    return value.strip()


class DisasterDataClient:
    """Typed access to disaster data through the proxy gateway."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        notifier: Optional[Notifier] = None,
    ):
        self.settings = settings or get_settings()
        self.gateway_url = self.settings.gateway_url
        self.upstream_timeout = self.settings.external_api_timeout_seconds
        self.deadline_margin = self.settings.adapter_deadline_margin_seconds
        self.max_attempts = self.settings.adapter_max_attempts
        self.notifier = notifier or LogNotifier(self.settings.notification_history_size)
        self._http_client = http_client

    async def fetch_disaster_data(
        self,
        service: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> ServiceResponse:
        """
        One gateway round trip for a logical service request.

        Never raises for network or gateway failures: those resolve to the
        local fixture for ``service`` with ``source=fallback``.
        """
        request = ServiceRequest(
            service=service,
            endpoint=endpoint,
            params=params or {},
            timeout_seconds=timeout,
        )
        logger.info(f"Fetching {service} data for endpoint {endpoint}")

        try:
            response = await self._post(request, self.round_trip_timeout(timeout))
        except httpx.HTTPError as e:
            logger.error(f"Error fetching {service} data: {type(e).__name__}: {e}")
            return self._fallback(service, "gateway unreachable")

        if not response.is_success:
            logger.error(f"Error response from {service}: {response.status_code} {response.text[:200]}")
            return self._fallback(service, f"gateway returned {response.status_code}")

        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type.lower():
            logger.error(f"Non-JSON response from {service}: {content_type or 'no content type'}")
            return self._fallback(service, "gateway returned non-JSON data")

        try:
            data = response.json()
        except ValueError:
            logger.error(f"Malformed JSON response from {service}")
            return self._fallback(service, "gateway returned malformed JSON")

        if data is None:
            return self._fallback(service, "gateway returned no data")

        try:
            source = DataSource(response.headers.get(DATA_SOURCE_HEADER, DataSource.LIVE.value))
        except ValueError:
            source = DataSource.LIVE

        logger.info(f"Successful {service} data response ({source.value})")
        return ServiceResponse(data=data, source=source)

    async def fetch_weather_alert(
        self, lat: float, lon: float, timeout: Optional[float] = None
    ) -> ServiceResponse:
        """Current conditions and active alerts for a coordinate."""
        _validate_coordinates(lat, lon)
        return await self.fetch_disaster_data(
            ServiceName.WEATHER.value,
            "onecall",
            {"lat": lat, "lon": lon, "exclude": "minutely,hourly", "units": "metric"},
            timeout,
        )

    async def fetch_disaster_news(
        self, query: str = DEFAULT_NEWS_QUERY, timeout: Optional[float] = None
    ) -> ServiceResponse:
        """Most recent news articles matching ``query``."""
        query = _validate_text("query", query)
        return await self.fetch_disaster_data(
            ServiceName.NEWS.value,
            "everything",
            {"q": query, "sortBy": "publishedAt", "pageSize": 10},
            timeout,
        )

    async def fetch_flood_data(
        self,
        lat: float = DEFAULT_FLOOD_LAT,
        lon: float = DEFAULT_FLOOD_LON,
        dim: float = DEFAULT_FLOOD_DIM,
        timeout: Optional[float] = None,
    ) -> ServiceResponse:
        """Satellite imagery asset covering a ``dim``-degree box around a coordinate."""
        _validate_coordinates(lat, lon)
        if isinstance(dim, bool) or not isinstance(dim, (int, float)) or not math.isfinite(dim) or dim <= 0:
            raise ValueError(f"dim must be a positive number, got {dim!r}")
        return await self.fetch_disaster_data(
            ServiceName.NASA.value,
            "earth/assets",
            {"lon": lon, "lat": lat, "dim": dim},
            timeout,
        )

    async def analyze_disaster_risk(
        self,
        location: str,
        context_data: Any = None,
        timeout: Optional[float] = None,
    ) -> RiskAnalysis:
        """
        Ask the generative-text service for a risk assessment of ``location``.

        ``risk`` is left empty when the reply holds no usable JSON object;
        the failure is logged and notified rather than raised.
        """
        location = _validate_text("location", location)
        prompt = build_risk_prompt(location, context_data if context_data is not None else {})

        response = await self.fetch_disaster_data(
            ServiceName.GEMINI.value,
            "generateContent",
            build_generate_content_payload(prompt),
            timeout,
        )
        if response.error is not None:
            return RiskAnalysis(response=response)

        try:
            risk = parse_risk_reply(extract_reply_text(response.data))
        except RiskParseError as e:
            logger.error(f"Error parsing risk analysis for {location}: {e}")
            self.notifier.notify(RISK_PARSE_MESSAGE)
            return RiskAnalysis(response=response)

        return RiskAnalysis(response=response, risk=risk)

    async def load_disaster_events(
        self,
        regions: Optional[Iterable[Region]] = None,
        news_query: str = DEFAULT_NEWS_QUERY,
    ) -> List[DisasterEvent]:
        """
        Build the map's event list from weather alerts per region plus news.

        All fetches run concurrently and independently; a failing region
        only contributes its fallback data.
        """
        regions = list(regions) if regions is not None else list(DEFAULT_REGIONS)
        fetched_at = datetime.now(timezone.utc)

        *weather_responses, news_response = await asyncio.gather(
            *(self.fetch_weather_alert(r.coordinates.lat, r.coordinates.lon) for r in regions),
            self.fetch_disaster_news(news_query),
        )

        events: List[DisasterEvent] = []
        for region, response in zip(regions, weather_responses):
            if response.data is not None:
                events.extend(events_from_weather(response.data, region, fetched_at))
        if news_response.data is not None:
            events.extend(events_from_news(news_response.data, fetched_at))

        logger.info(f"Synthesized {len(events)} disaster events from {len(regions)} regions")
        return events

    def round_trip_timeout(self, timeout: Optional[float] = None) -> float:
        """
        Deadline for one gateway round trip.

        Outlasts the gateway's own upstream deadline so a hung provider is
        answered with the gateway's fallback rather than a local one.
        """
        return (timeout or self.upstream_timeout) + self.deadline_margin

    async def _post(self, request: ServiceRequest, timeout: float) -> httpx.Response:
        """POST the request to the gateway, retrying connect errors and timeouts."""
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
            reraise=True,
        ):
            with attempt:
                return await self._send(request, timeout)

    async def _send(self, request: ServiceRequest, timeout: float) -> httpx.Response:
        body = request.model_dump(exclude_none=True)
        if self._http_client is not None:
            return await self._http_client.post(self.gateway_url, json=body, timeout=timeout)

        async with httpx.AsyncClient(timeout=timeout) as client:
            return await client.post(self.gateway_url, json=body)

    def _fallback(self, service: str, reason: str) -> ServiceResponse:
        self.notifier.notify(CONNECTIVITY_MESSAGE)
        fixture = get_local_fixture(service)
        if fixture is None:
            return ServiceResponse(error=f"{service} data unavailable: {reason}", source=DataSource.FALLBACK)

        logger.info(f"Using local data for {service} ({reason})")
        return ServiceResponse(data=fixture, source=DataSource.FALLBACK)
