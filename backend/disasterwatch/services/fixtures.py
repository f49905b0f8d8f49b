"""
Canned provider payloads the gateway answers with when an upstream call fails.

Shapes follow the real provider responses (OpenWeatherMap One Call, NewsAPI
/everything, NASA Earth assets, Gemini generateContent). Timestamps are fixed
so repeated fallbacks are identical.
"""

import copy
from typing import Any, Dict, Optional

from disasterwatch.schemas.gateway import ServiceName

_RISK_REPLY = """Based on the available data, I've analyzed the disaster risk for your location:

{
  "riskLevel": "medium",
  "disasterTypes": [
    {"type": "flood", "probability": "60%", "severity": "medium"},
    {"type": "wildfire", "probability": "25%", "severity": "low"},
    {"type": "hurricane", "probability": "40%", "severity": "high"}
  ],
  "areasOfConcern": [
    "Low-lying regions near water bodies",
    "Areas with poor drainage systems",
    "Coastal regions susceptible to storm surge"
  ],
  "recommendations": [
    "Keep emergency supplies ready including water, non-perishable food, and medications",
    "Stay informed through local news and weather alerts",
    "Ensure proper drainage around your property",
    "Have an evacuation plan ready and discuss it with family members",
    "Secure outdoor items that could be carried away by strong winds",
    "Consider flood insurance if you live in a flood-prone area"
  ]
}"""

_GATEWAY_FIXTURES: Dict[ServiceName, Dict[str, Any]] = {
    ServiceName.WEATHER: {
        "lat": 37.7749,
        "lon": -122.4194,
        "timezone": "America/Los_Angeles",
        "current": {
            "dt": 1718035200,
            "temp": 28,
            "humidity": 65,
            "wind_speed": 12,
            "weather": [{"main": "Rain", "description": "moderate rain"}],
        },
        "alerts": [
            {
                "sender_name": "NWS",
                "event": "Flood Warning",
                "urgency": "Expected",
                "severity": "Moderate",
                "start": 1718035200,
                "end": 1718078400,
                "description": "River levels are forecast to rise above flood stage.",
            },
            {
                "sender_name": "NWS",
                "event": "Thunderstorm Watch",
                "urgency": "Expected",
                "severity": "Minor",
                "start": 1718038800,
                "end": 1718060400,
                "description": "Conditions are favorable for thunderstorms.",
            },
        ],
    },
    ServiceName.NEWS: {
        "status": "ok",
        "totalResults": 3,
        "articles": [
            {
                "source": {"id": None, "name": "Example News"},
                "title": "Heavy Rainfall Causes Flooding in Southeast Louisiana",
                "description": "Several areas have been evacuated as water levels continue to rise.",
                "url": "https://example.com/news/1",
                "publishedAt": "2024-06-10T16:00:00Z",
            },
            {
                "source": {"id": None, "name": "Example News"},
                "title": "Wildfire Alert Issued for Western California Counties",
                "description": "Dry conditions and high winds have increased fire risk.",
                "url": "https://example.com/news/2",
                "publishedAt": "2024-06-10T15:00:00Z",
            },
            {
                "source": {"id": None, "name": "Example News"},
                "title": "Hurricane Season Forecast: What to Expect",
                "description": "Meteorologists predict above-average hurricane activity this year.",
                "url": "https://example.com/news/3",
                "publishedAt": "2024-06-10T14:00:00Z",
            },
        ],
    },
    ServiceName.NASA: {
        "date": "2024-06-01T16:41:55.000000",
        "id": "LC08_L1TP_027034_20240601_20240601_01_RT",
        "resource": {"dataset": "LANDSAT/LC08/C01/T1_SR", "planet": "earth"},
        "service_version": "v5000",
        "url": "https://earthengine.googleapis.com/v1alpha/projects/earthengine-public/thumbnails/fallback:getPixels",
    },
    ServiceName.GEMINI: {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": _RISK_REPLY}]},
                "finishReason": "STOP",
            }
        ]
    },
}


def get_fixture(service: ServiceName) -> Optional[Dict[str, Any]]:
    """Return a private copy of the canned payload for ``service``."""
    fixture = _GATEWAY_FIXTURES.get(service)
    return copy.deepcopy(fixture) if fixture is not None else None
