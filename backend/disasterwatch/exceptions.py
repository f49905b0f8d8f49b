"""
Exceptions raised by the gateway and the client data adapter.

All of them are ``ValueError`` subclasses so routers can translate them into
400 responses the same way as other input errors.
"""


class GatewayError(ValueError):
    """Base class for request errors the gateway reports as ``{"error": ...}``."""


class UnknownServiceError(GatewayError):
    """The requested service has no row in the provider rule table."""

    def __init__(self, service: str):
        self.service = service
        super().__init__(f"Unknown service requested: {service!r}")


class RiskParseError(ValueError):
    """An LLM reply did not contain a usable risk assessment object."""


class UpstreamError(Exception):
    """A provider answered with a non-2xx status or a non-JSON body."""

    def __init__(self, service: str, reason: str):
        self.service = service
        self.reason = reason
        super().__init__(f"Error from {service} API: {reason}")
