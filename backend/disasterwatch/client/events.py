"""
Synthesis of map-ready DisasterEvent records from weather alerts and news.

Events are rebuilt from scratch on every fetch cycle; nothing is merged with
a previous set.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from disasterwatch.schemas.common import Coordinates
from disasterwatch.schemas.disaster import DisasterEvent, Region
from .classification import classify_severity, classify_type

logger = logging.getLogger(__name__)

# Scanned in this order; the first state named in an article wins
STATE_CENTROIDS: Dict[str, Coordinates] = {
    "California": Coordinates(lat=36.7783, lon=-119.4179),
    "Texas": Coordinates(lat=31.9686, lon=-99.9018),
    "Florida": Coordinates(lat=27.6648, lon=-81.5158),
    "Louisiana": Coordinates(lat=30.9843, lon=-91.9623),
    "Oklahoma": Coordinates(lat=35.0078, lon=-97.0929),
}

DEFAULT_REGIONS: List[Region] = [
    Region(name=name, coordinates=coordinates)
    for name, coordinates in STATE_CENTROIDS.items()
]

# Epoch values above this are milliseconds, not seconds
_MILLISECONDS_THRESHOLD = 1e12


def _slug(name: str) -> str:
    return "-".join(name.lower().split())


def _epoch_to_datetime(value: Any, default: datetime) -> datetime:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    seconds = value / 1000 if value > _MILLISECONDS_THRESHOLD else value
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return default


def _iso_to_datetime(value: Any, default: datetime) -> datetime:
    if not isinstance(value, str) or not value:
        return default
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return default
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def find_state(text: str) -> Optional[str]:
    """First whitelisted state name mentioned in ``text``."""
    haystack = (text or "").lower()
    for state in STATE_CENTROIDS:
        if state.lower() in haystack:
            return state
    return None


def events_from_weather(
    payload: Any,
    region: Region,
    fetched_at: Optional[datetime] = None,
) -> List[DisasterEvent]:
    """One event per alert in a weather payload, placed at ``region``."""
    fetched_at = fetched_at or datetime.now(timezone.utc)
    alerts = payload.get("alerts") if isinstance(payload, dict) else None

    events = []
    for index, alert in enumerate(alerts or []):
        if not isinstance(alert, dict):
            continue
        text = " ".join(
            str(alert.get(key) or "")
            for key in ("event", "severity", "urgency", "description")
        )
        events.append(DisasterEvent(
            id=f"weather-{_slug(region.name)}-{index}",
            type=classify_type(text),
            location=region.name,
            coordinates=region.coordinates,
            severity=classify_severity(text),
            timestamp=_epoch_to_datetime(alert.get("start"), fetched_at),
        ))
    return events


def events_from_news(
    payload: Any,
    fetched_at: Optional[datetime] = None,
) -> List[DisasterEvent]:
    """
    One event per news article that names a whitelisted state.

    Articles naming none of the states are dropped.
    """
    fetched_at = fetched_at or datetime.now(timezone.utc)
    articles = payload.get("articles") if isinstance(payload, dict) else None

    events = []
    for index, article in enumerate(articles or []):
        if not isinstance(article, dict):
            continue
        text = f"{article.get('title') or ''} {article.get('description') or ''}"
        state = find_state(text)
        if state is None:
            continue
        events.append(DisasterEvent(
            id=f"news-{index}",
            type=classify_type(text),
            location=state,
            coordinates=STATE_CENTROIDS[state],
            severity=classify_severity(text),
            timestamp=_iso_to_datetime(article.get("publishedAt"), fetched_at),
        ))

    dropped = len(articles or []) - len(events)
    if dropped:
        logger.debug(f"Dropped {dropped} news articles without a known location")
    return events
