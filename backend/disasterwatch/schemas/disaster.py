"""
Schemas for map-ready disaster events and AI risk assessments.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, List

from pydantic import BaseModel, Field, ConfigDict

from .common import BaseSchema, Coordinates
from .gateway import ServiceResponse


class DisasterType(str, Enum):
    WILDFIRE = "wildfire"
    FLOOD = "flood"
    HURRICANE = "hurricane"
    EARTHQUAKE = "earthquake"
    OTHER = "other"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Region(BaseSchema):
    """Named area the map view fetches weather alerts for."""
    name: str
    coordinates: Coordinates


class DisasterEvent(BaseSchema):
    """One map-displayable hazard occurrence, rebuilt on every refresh."""
    id: str
    type: DisasterType
    location: str
    coordinates: Coordinates
    severity: Severity
    timestamp: datetime


class DisasterTypeRisk(BaseModel):
    """Likelihood of a single disaster type."""
    type: str
    probability: str
    severity: str


class DisasterRisk(BaseModel):
    """Risk assessment parsed from the generative-text reply."""
    model_config = ConfigDict(populate_by_name=True)

    risk_level: str = Field(..., alias="riskLevel")
    disaster_types: List[DisasterTypeRisk] = Field(default_factory=list, alias="disasterTypes")
    areas_of_concern: List[str] = Field(default_factory=list, alias="areasOfConcern")
    recommendations: List[str] = Field(default_factory=list)


class RiskAnalysis(BaseModel):
    """Outcome of analyze_disaster_risk: the raw response plus the parsed risk, if any."""
    response: ServiceResponse
    risk: Optional[DisasterRisk] = None
