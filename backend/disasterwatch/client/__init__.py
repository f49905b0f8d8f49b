"""
Client Data Adapter: typed fetch helpers, event synthesis and risk parsing.
"""

from .data_client import DisasterDataClient
from .notifications import LogNotifier, Notifier

__all__ = [
    "DisasterDataClient",
    "LogNotifier",
    "Notifier",
]
