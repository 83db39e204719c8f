from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from .config import ClientConfig, ClientSettings, get_settings
from .envelope import SUCCESS_STATUS, parse_envelope, unwrap
from .exceptions import INVALID_INSTANCE_URL, INVALID_RESPONSE_DATA, ConfigurationError, RequestError
from .models import AnalyticsResult, EventRecord, FlushFilter, RawServiceStats, ServiceStats, StatisticsQuery

logger = logging.getLogger(__name__)


def validate_instance_url(url: str) -> None:
    if not url:
        raise ConfigurationError("Instance URL is required.")
    # parsed the way the transport will parse it, so a bad port fails here
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, ValueError) as exc:
        raise ConfigurationError(INVALID_INSTANCE_URL) from exc
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise ConfigurationError(INVALID_INSTANCE_URL)


def query_params(params: BaseModel | Mapping[str, Any] | None) -> dict[str, str]:
    """
    Serialize filters into query parameters.

    ``None`` values are left out entirely; every other value, falsy ones
    included, is stringified (booleans as ``true``/``false``).
    """
    if params is None:
        return {}
    if isinstance(params, BaseModel):
        params = params.model_dump(by_alias=True)

    query: dict[str, str] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            query[key] = "true" if value else "false"
        else:
            query[key] = str(value)
    return query


class AnalyticsEngineClient:
    """Thin async wrapper around the Analytics Engine JSON API.

    Construction only validates the configuration. Use :meth:`create` or
    ``async with`` to also wait for the instance URL to answer the probe
    before issuing calls.
    """

    def __init__(
        self,
        authorization: str,
        instance_url: str,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if not authorization:
            raise ConfigurationError("Authorization is required.")
        validate_instance_url(instance_url)

        self.config = ClientConfig(authorization=authorization, instance_url=instance_url.rstrip("/"))
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient()

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> "AnalyticsEngineClient":
        settings = settings or get_settings()
        return cls(settings.authorization, settings.instance_url, client=client)

    @classmethod
    async def create(
        cls,
        authorization: str,
        instance_url: str,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> "AnalyticsEngineClient":
        """Build a client and wait until the instance URL passes the probe."""
        engine = cls(authorization, instance_url, client=client)
        try:
            await engine.verify()
        except ConfigurationError:
            await engine.aclose()
            raise
        return engine

    async def verify(self) -> None:
        """
        Probe ``GET {instance_url}``.

        Raises:
            ConfigurationError: when the instance is unreachable, answers with a
                non-200 status or reports an error in its body.
        """
        url = self.config.instance_url
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            logger.warning("Analytics Engine probe failed: url=%s error=%s", url, exc)
            raise ConfigurationError(INVALID_INSTANCE_URL) from exc

        if response.status_code != SUCCESS_STATUS:
            logger.warning("Analytics Engine probe rejected: url=%s status=%s", url, response.status_code)
            raise ConfigurationError(INVALID_INSTANCE_URL)

        try:
            body = response.json()
        except ValueError:
            return
        if isinstance(body, dict) and isinstance(body.get("error"), str):
            raise ConfigurationError(body["error"])

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": self.config.authorization,
            "Content-Type": "application/json",
        }

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        url = f"{self.config.instance_url}{path}"
        logger.debug("Analytics Engine request: %s %s params=%s", method, url, params)

        response: httpx.Response | None
        try:
            response = await self._client.request(
                method,
                url,
                params=params or None,
                json=json,
                headers=self._headers(),
            )
        except httpx.HTTPError as exc:
            logger.warning("Analytics Engine transport error: %s %s error=%s", method, url, exc)
            response = None

        try:
            return unwrap(parse_envelope(response))
        except RequestError as exc:
            logger.warning(
                "Analytics Engine call failed: %s %s status=%s error=%s",
                method,
                url,
                exc.status,
                exc.message,
            )
            raise

    async def record_event(self, data: EventRecord | Mapping[str, Any] | str) -> bool:
        """Store a single event; a bare string is used as the event name."""
        if isinstance(data, str):
            record = EventRecord(name=data)
        elif isinstance(data, EventRecord):
            record = data
        else:
            record = EventRecord.model_validate(data)

        await self._request("POST", "/event", json=record.to_payload())
        return True

    async def get_statistics(
        self, query: StatisticsQuery | Mapping[str, Any] | None = None
    ) -> AnalyticsResult:
        if query is not None and not isinstance(query, StatisticsQuery):
            query = StatisticsQuery.model_validate(query)

        data = await self._request("GET", "/analytics", params=query_params(query))
        try:
            return AnalyticsResult.model_validate(data)
        except ValidationError as exc:
            logger.warning("Analytics Engine returned malformed statistics: %s", exc)
            raise RequestError(INVALID_RESPONSE_DATA, SUCCESS_STATUS) from exc

    async def flush_statistics(self, options: FlushFilter | Mapping[str, Any] | None = None) -> bool:
        if options is not None and not isinstance(options, FlushFilter):
            options = FlushFilter.model_validate(options)

        await self._request("DELETE", "/analytics", params=query_params(options))
        return True

    async def get_stats(self) -> ServiceStats:
        data = await self._request("GET", "/stats")
        try:
            raw = RawServiceStats.model_validate(data)
        except ValidationError as exc:
            logger.warning("Analytics Engine returned malformed stats: %s", exc)
            raise RequestError(INVALID_RESPONSE_DATA, SUCCESS_STATUS) from exc
        return ServiceStats.from_raw(raw)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "AnalyticsEngineClient":
        try:
            await self.verify()
        except ConfigurationError:
            await self.aclose()
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


__all__ = ["AnalyticsEngineClient", "query_params", "validate_instance_url"]
