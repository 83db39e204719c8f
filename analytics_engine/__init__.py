"""Async client for the Analytics Engine HTTP service."""

from .client import AnalyticsEngineClient, query_params
from .config import ClientConfig, ClientSettings, get_settings
from .exceptions import (
    INVALID_RESPONSE_DATA,
    REQUEST_FAILED,
    AnalyticsEngineError,
    ConfigurationError,
    RequestError,
)
from .models import (
    AnalyticsResult,
    EventRecord,
    FlushFilter,
    ServiceStats,
    StatisticsQuery,
    TimeSeriesBucket,
)

__all__ = [
    "AnalyticsEngineClient",
    "AnalyticsEngineError",
    "AnalyticsResult",
    "ClientConfig",
    "ClientSettings",
    "ConfigurationError",
    "EventRecord",
    "FlushFilter",
    "INVALID_RESPONSE_DATA",
    "REQUEST_FAILED",
    "RequestError",
    "ServiceStats",
    "StatisticsQuery",
    "TimeSeriesBucket",
    "get_settings",
    "query_params",
]
