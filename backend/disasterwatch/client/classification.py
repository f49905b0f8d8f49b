"""
Keyword classification of free text into disaster type and severity.

Both rule lists are ordered and the first rule with a matching keyword wins,
so reordering them changes results.
"""

from typing import Iterable, Optional, Tuple, TypeVar

from disasterwatch.schemas.disaster import DisasterType, Severity

T = TypeVar("T")

TYPE_RULES: Tuple[Tuple[DisasterType, Tuple[str, ...]], ...] = (
    (DisasterType.FLOOD, ("flood", "rain")),
    (DisasterType.WILDFIRE, ("fire", "wildfire")),
    (DisasterType.HURRICANE, ("hurricane", "storm", "wind", "tornado")),
    (DisasterType.EARTHQUAKE, ("earthquake", "tremor", "quake")),
)

SEVERITY_RULES: Tuple[Tuple[Severity, Tuple[str, ...]], ...] = (
    (Severity.CRITICAL, ("devastating", "catastrophic", "emergency", "evacuate")),
    (Severity.HIGH, ("severe", "major", "significant")),
    (Severity.MEDIUM, ("moderate", "warning")),
)


def first_match(
    text: str,
    rules: Iterable[Tuple[T, Tuple[str, ...]]],
) -> Optional[T]:
    """Label of the first rule with a keyword contained in ``text`` (case-insensitive)."""
    haystack = (text or "").lower()
    for label, keywords in rules:
        if any(keyword in haystack for keyword in keywords):
            return label
    return None


def classify_type(text: str) -> DisasterType:
    return first_match(text, TYPE_RULES) or DisasterType.OTHER


def classify_severity(text: str) -> Severity:
    return first_match(text, SEVERITY_RULES) or Severity.LOW
