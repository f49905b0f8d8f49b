"""
Services for the DisasterWatch gateway
"""

from .gateway_service import ProxyGatewayService

__all__ = [
    "ProxyGatewayService",
]
