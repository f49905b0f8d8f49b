"""
User-facing notifications raised by the data adapter.

Notifications are transient and non-blocking; the adapter never raises
because a notification could not be shown.
"""

import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Deque, List, Protocol

logger = logging.getLogger(__name__)

CONNECTIVITY_MESSAGE = "Connectivity issues detected. Using local data for demonstrations."
RISK_PARSE_MESSAGE = "Could not interpret the risk analysis. Please try again."


@dataclass(frozen=True)
class Notification:
    message: str
    level: str
    created_at: datetime


class Notifier(Protocol):
    """Anything that can surface a message to the user."""

    def notify(self, message: str, level: str = "error") -> None:
        ...


class LogNotifier:
    """Logs notifications and keeps the most recent ones for the UI to drain."""

    def __init__(self, history_size: int = 50):
        self._history: Deque[Notification] = deque(maxlen=history_size)

    def notify(self, message: str, level: str = "error") -> None:
        log_level = logging.ERROR if level == "error" else logging.WARNING
        logger.log(log_level, f"User notification: {message}")
        self._history.append(Notification(message, level, datetime.now(timezone.utc)))

    def drain(self) -> List[Notification]:
        """Return pending notifications and forget them."""
        pending = list(self._history)
        self._history.clear()
        return pending

    @property
    def messages(self) -> List[str]:
        return [n.message for n in self._history]
