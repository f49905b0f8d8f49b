"""
Provider rule table.

The only per-provider knowledge in the gateway: where each service lives,
where its credential goes and how request params are encoded. Adding a
provider means adding a row here.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict

from disasterwatch.config import Settings, CredentialFields
from disasterwatch.schemas.gateway import ServiceName, HttpMethod


class CredentialPlacement(str, Enum):
    QUERY = "query"
    HEADER = "header"


class PayloadEncoding(str, Enum):
    QUERY = "query"  # params become the query string
    JSON = "json"    # params become the JSON request body


@dataclass(frozen=True)
class ProviderRule:
    """How to turn a logical request for one service into an HTTP call."""
    service: ServiceName
    base_url: str
    path_template: str
    credential_name: str
    credential_placement: CredentialPlacement
    credential_field: str
    method: HttpMethod = HttpMethod.GET
    payload: PayloadEncoding = PayloadEncoding.QUERY

    def build_url(self, endpoint: str) -> str:
        path = self.path_template.format(endpoint=endpoint.strip("/"))
        return f"{self.base_url.rstrip('/')}/{path}"


def build_rule_table(settings: Settings) -> Dict[ServiceName, ProviderRule]:
    """Rule table for the configured provider URLs."""
    rules = [
        ProviderRule(
            service=ServiceName.WEATHER,
            base_url=settings.weather_api_url,
            path_template="{endpoint}",
            credential_name="appid",
            credential_placement=CredentialPlacement.QUERY,
            credential_field=CredentialFields.WEATHER,
        ),
        ProviderRule(
            service=ServiceName.NEWS,
            base_url=settings.news_api_url,
            path_template="{endpoint}",
            credential_name="apiKey",
            credential_placement=CredentialPlacement.QUERY,
            credential_field=CredentialFields.NEWS,
        ),
        ProviderRule(
            service=ServiceName.NASA,
            base_url=settings.nasa_api_url,
            path_template="{endpoint}",
            credential_name="api_key",
            credential_placement=CredentialPlacement.QUERY,
            credential_field=CredentialFields.NASA,
        ),
        ProviderRule(
            service=ServiceName.GEMINI,
            base_url=settings.gemini_api_url,
            path_template=f"models/{settings.gemini_model}:{{endpoint}}",
            credential_name="x-goog-api-key",
            credential_placement=CredentialPlacement.HEADER,
            credential_field=CredentialFields.GEMINI,
            method=HttpMethod.POST,
            payload=PayloadEncoding.JSON,
        ),
    ]
    return {rule.service: rule for rule in rules}
