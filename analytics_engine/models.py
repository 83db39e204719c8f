from __future__ import annotations

import time

from pydantic import BaseModel, ConfigDict, Field


def now_ms() -> int:
    return int(time.time() * 1000)


class EventRecord(BaseModel):
    """A single usage event as sent to ``POST /event``."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    unique_id: str | None = Field(default=None, alias="uniqueId")
    created_at: int | None = Field(default=None, alias="createdAt")  # milliseconds since epoch
    type: str | None = None

    def to_payload(self, timestamp_ms: int | None = None) -> dict[str, object]:
        payload = self.model_dump(by_alias=True, exclude_none=True)
        if self.created_at is None:
            payload["createdAt"] = timestamp_ms if timestamp_ms is not None else now_ms()
        return payload


class StatisticsQuery(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    lookback: int | None = None
    unique_id: str | None = Field(default=None, alias="uniqueId")
    type: str | None = None


class FlushFilter(BaseModel):
    type: str | None = None


class TimeSeriesBucket(BaseModel):
    daily: dict[str, int] = Field(default_factory=dict)  # YYYY-MM-DD
    weekly: dict[str, int] = Field(default_factory=dict)  # week start, YYYY-MM-DD
    monthly: dict[str, int] = Field(default_factory=dict)  # YYYY-MM


class AnalyticsResult(BaseModel):
    """Aggregated counts for all events plus one bucket per event name."""

    model_config = ConfigDict(populate_by_name=True)

    global_: TimeSeriesBucket = Field(alias="global")
    usages: dict[str, TimeSeriesBucket] = Field(default_factory=dict)


class RawServiceStats(BaseModel):
    total_redis_keys: int
    cpu_usage: float
    ram_usage: str
    ram_usage_bytes: int
    system_uptime: str
    system_uptime_seconds: int | None = None
    go_routines: int


class ServiceStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_keys: int = Field(alias="totalKeys")
    cpu_usage: float = Field(alias="cpuUsage")
    ram_usage: str = Field(alias="ramUsage")
    ram_usage_bytes: int = Field(alias="ramUsageBytes")
    system_uptime: str = Field(alias="systemUptime")
    system_uptime_seconds: int | None = Field(default=None, alias="systemUptimeSeconds")
    go_routine_count: int = Field(alias="goRoutimeCount")

    @classmethod
    def from_raw(cls, raw: RawServiceStats) -> "ServiceStats":
        return cls(
            total_keys=raw.total_redis_keys,
            cpu_usage=raw.cpu_usage,
            ram_usage=raw.ram_usage,
            ram_usage_bytes=raw.ram_usage_bytes,
            system_uptime=raw.system_uptime,
            system_uptime_seconds=raw.system_uptime_seconds,
            go_routine_count=raw.go_routines,
        )


__all__ = [
    "EventRecord",
    "StatisticsQuery",
    "FlushFilter",
    "TimeSeriesBucket",
    "AnalyticsResult",
    "RawServiceStats",
    "ServiceStats",
    "now_ms",
]
