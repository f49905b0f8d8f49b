"""
Local demonstration data used when the gateway itself cannot be reached.
"""

import copy
from typing import Any, Dict, Optional

from disasterwatch.schemas.gateway import ServiceName

_LOCAL_FIXTURES: Dict[ServiceName, Dict[str, Any]] = {
    ServiceName.WEATHER: {
        "alerts": [
            {"event": "Flood Warning", "urgency": "Expected", "severity": "Moderate", "start": 1718035200},
            {"event": "Thunderstorm Watch", "urgency": "Expected", "severity": "Minor", "start": 1718038800},
        ],
        "current": {"temp": 28, "humidity": 65, "wind_speed": 12},
    },
    ServiceName.NEWS: {
        "articles": [
            {
                "title": "Heavy Rainfall Causes Flooding in Florida",
                "description": "Several areas have been evacuated as water levels continue to rise.",
                "url": "https://example.com/news/1",
                "publishedAt": "2024-06-10T16:00:00Z",
            },
            {
                "title": "Wildfire Alert Issued for Western Counties in California",
                "description": "Dry conditions and high winds have increased fire risk.",
                "url": "https://example.com/news/2",
                "publishedAt": "2024-06-10T15:00:00Z",
            },
        ]
    },
    ServiceName.NASA: {
        "date": "2024-06-01T16:41:55",
        "id": "local-demo-asset",
        "url": "",
    },
    ServiceName.GEMINI: {
        "candidates": [
            {
                "content": {
                    "parts": [
                        {
                            "text": (
                                '{"riskLevel": "medium", '
                                '"disasterTypes": [{"type": "flood", "probability": "50%", "severity": "medium"}], '
                                '"areasOfConcern": ["Low-lying regions near water bodies"], '
                                '"recommendations": ["Keep emergency supplies ready", '
                                '"Stay informed through local news and weather alerts"]}'
                            )
                        }
                    ]
                }
            }
        ]
    },
}


def get_local_fixture(service: str) -> Optional[Dict[str, Any]]:
    """Private copy of the local payload for ``service``, or None if there is none."""
    try:
        fixture = _LOCAL_FIXTURES.get(ServiceName(service))
    except ValueError:
        return None
    return copy.deepcopy(fixture) if fixture is not None else None
