"""
DisasterWatch: Disaster Information Gateway

This package provides:
- Proxy Gateway for weather, news, satellite imagery and generative-text APIs
- Client Data Adapter with typed fetch helpers and local fallback data
- Disaster event synthesis from weather alerts and news articles
- AI risk analysis parsing
"""

__version__ = "1.0.0"
__author__ = "DisasterWatch Team"
