"""
Proxy Gateway Service

Resolves a logical {service, endpoint, params} request into a concrete
upstream HTTP call, executes it and relays the JSON result. Upstream
failures are answered with canned fixture data so the dashboard never
blocks on a provider outage.
"""

import json
import logging
from typing import Any, Dict, Optional

import httpx

from disasterwatch.config import Settings, get_settings
from disasterwatch.exceptions import UnknownServiceError, UpstreamError
from disasterwatch.schemas.gateway import (
    DataSource, ServiceName, ServiceRequest, ServiceResponse, UpstreamCall,
)
from .fixtures import get_fixture
from .provider_rules import (
    CredentialPlacement, PayloadEncoding, ProviderRule, build_rule_table,
)

logger = logging.getLogger(__name__)

# httpx logs full request URLs at INFO, and those carry query-placed credentials
logging.getLogger("httpx").setLevel(logging.WARNING)


def _query_value(value: Any) -> str:
    """Render one request param as a query-string value."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


class ProxyGatewayService:
    """Stateless relay from logical service requests to upstream providers."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self.rules: Dict[ServiceName, ProviderRule] = build_rule_table(self.settings)
        self.timeout = self.settings.external_api_timeout_seconds
        self._transport = transport
        self._credentials = {
            service: getattr(self.settings, rule.credential_field) or ""
            for service, rule in self.rules.items()
        }

    def resolve(self, request: ServiceRequest) -> UpstreamCall:
        """
        Build the upstream call for a request.

        Raises UnknownServiceError when the service has no rule.
        """
        try:
            service = ServiceName(request.service)
        except ValueError:
            raise UnknownServiceError(request.service)

        rule = self.rules.get(service)
        if rule is None:
            raise UnknownServiceError(request.service)

        headers: Dict[str, str] = {}
        query: Dict[str, str] = {}
        body = None

        if rule.payload == PayloadEncoding.JSON:
            headers["Content-Type"] = "application/json"
            body = json.dumps(request.params)
        else:
            query = {key: _query_value(value) for key, value in request.params.items()}

        # Credential goes in last so a request param can never shadow it
        credential = self._credentials[service]
        if rule.credential_placement == CredentialPlacement.QUERY:
            query[rule.credential_name] = credential
        else:
            headers[rule.credential_name] = credential

        return UpstreamCall(
            service=service,
            url=rule.build_url(request.endpoint),
            method=rule.method,
            headers=headers,
            query=query,
            body=body,
        )

    async def forward(self, request: ServiceRequest) -> ServiceResponse:
        """
        Execute one upstream call for ``request`` and normalize the result.

        Returns live data on a 2xx JSON answer and the service's fixture on
        any upstream or transport failure. Never retries.
        """
        call = self.resolve(request)
        timeout = request.timeout_seconds or self.timeout

        logger.info(f"Processing request for {call.service.value}/{request.endpoint}")

        try:
            data = await self._execute(call, timeout)
        except UpstreamError as e:
            logger.error(f"{e}; serving fallback data")
            return self._fallback(call.service)
        except httpx.HTTPError as e:
            # httpx messages can carry the request URL, so only the type is logged
            logger.error(
                f"Transport error calling {call.service.value} API: "
                f"{type(e).__name__}; serving fallback data"
            )
            return self._fallback(call.service)

        logger.info(f"Successful response from {call.service.value} API")
        return ServiceResponse(data=data, source=DataSource.LIVE)

    async def _execute(self, call: UpstreamCall, timeout: float) -> Any:
        """Issue the HTTP call and return the decoded JSON body."""
        logger.debug(f"Making {call.method.value} request to: {call.url}")

        async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
            response = await client.request(
                call.method.value,
                call.url,
                params=call.query,
                headers=call.headers,
                content=call.body,
            )

        service = call.service.value
        if not response.is_success:
            raise UpstreamError(service, f"{response.status_code} {response.reason_phrase}")

        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type.lower():
            raise UpstreamError(service, f"expected JSON but received {content_type or 'no content type'}")

        try:
            data = response.json()
        except ValueError:
            raise UpstreamError(service, "response body is not valid JSON")

        if data is None:
            raise UpstreamError(service, "response body is JSON null")
        return data

    def _fallback(self, service: ServiceName) -> ServiceResponse:
        fixture = get_fixture(service)
        if fixture is None:
            return ServiceResponse(
                error=f"{service.value} API is unavailable",
                source=DataSource.FALLBACK,
            )
        logger.info(f"Using mock data for {service.value}")
        return ServiceResponse(data=fixture, source=DataSource.FALLBACK)


def get_gateway_service() -> ProxyGatewayService:
    """FastAPI dependency for the gateway service."""
    return ProxyGatewayService(get_settings())


def log_missing_credentials(settings: Settings) -> None:
    """Warn once per provider whose credential is not configured."""
    for rule in build_rule_table(settings).values():
        if not getattr(settings, rule.credential_field):
            logger.warning(
                f"Missing API key for {rule.service.value} "
                f"({rule.credential_field.upper()}); upstream calls will likely fail"
            )
