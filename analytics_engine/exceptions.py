"""Errors raised by the Analytics Engine client."""

from __future__ import annotations

REQUEST_FAILED = "Request failed."
INVALID_RESPONSE_DATA = "Invalid response data."
INVALID_INSTANCE_URL = "Invalid instance URL."


class AnalyticsEngineError(Exception):
    """Base error for the Analytics Engine client."""


class ConfigurationError(AnalyticsEngineError):
    """Raised when the credential or instance URL is missing, malformed or unreachable."""


class RequestError(AnalyticsEngineError):
    """Raised when a call does not produce a usable success envelope."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


__all__ = [
    "AnalyticsEngineError",
    "ConfigurationError",
    "RequestError",
    "REQUEST_FAILED",
    "INVALID_RESPONSE_DATA",
    "INVALID_INSTANCE_URL",
]
