"""
Schemas for the proxy gateway request/response cycle.
"""

from enum import Enum
from typing import Optional, Dict, Any

from pydantic import BaseModel, Field, ConfigDict, model_validator

# Response header telling live provider data from fixture data
DATA_SOURCE_HEADER = "X-Data-Source"


class ServiceName(str, Enum):
    """Upstream services the gateway knows how to reach."""
    WEATHER = "weather"
    NEWS = "news"
    NASA = "nasa"      # satellite imagery / flood data
    GEMINI = "gemini"  # generative-text risk analysis


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"


class DataSource(str, Enum):
    """Whether a payload came from the provider or from a canned fixture."""
    LIVE = "live"
    FALLBACK = "fallback"


class ServiceRequest(BaseModel):
    """Logical request sent by the client adapter to the gateway."""
    model_config = ConfigDict(frozen=True)

    # Free text on purpose: unknown values must reach the gateway
    # and come back as UnknownServiceError, not a schema failure.
    service: str = Field(..., description="weather | news | nasa | gemini")
    endpoint: str = Field(..., min_length=1, description="Provider path, e.g. 'onecall'")
    params: Dict[str, Any] = Field(default_factory=dict)
    timeout_seconds: Optional[float] = Field(
        None,
        gt=0,
        le=300,
        description="Deadline for the upstream call; defaults to the configured timeout"
    )


class UpstreamCall(BaseModel):
    """Concrete HTTP call derived from a ServiceRequest."""
    model_config = ConfigDict(frozen=True)

    service: ServiceName
    url: str
    method: HttpMethod
    headers: Dict[str, str] = Field(default_factory=dict)
    query: Dict[str, str] = Field(default_factory=dict)
    body: Optional[str] = None


class ServiceResponse(BaseModel):
    """Result of one fetch: exactly one of ``data`` and ``error`` is set."""
    data: Optional[Any] = None
    error: Optional[str] = None
    source: DataSource = DataSource.LIVE

    @model_validator(mode="after")
    def _exactly_one_of_data_or_error(self):
        if (self.data is None) == (self.error is None):
            raise ValueError("ServiceResponse needs exactly one of data or error")
        return self

    @property
    def is_fallback(self) -> bool:
        return self.source == DataSource.FALLBACK
