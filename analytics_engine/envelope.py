from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Union

import httpx

from .exceptions import INVALID_RESPONSE_DATA, REQUEST_FAILED, RequestError

logger = logging.getLogger(__name__)

SUCCESS_STATUS = 200


@dataclass(frozen=True)
class Success:
    data: Any
    status: int = SUCCESS_STATUS


@dataclass(frozen=True)
class Failure:
    error: str
    status: int | None = None


Envelope = Union[Success, Failure]


def parse_envelope(response: httpx.Response | None) -> Envelope:
    """
    Classify a raw transport outcome into a success or failure envelope.

    ``None`` stands for a request that never produced a response (DNS failure,
    refused connection, timeout). Every endpoint answers with
    ``{"status": 200, "data": ...}`` or ``{"status": <code>, "error": "..."}``;
    anything that is not a JSON object counts as a failed request.
    """
    if response is None:
        return Failure(REQUEST_FAILED)

    try:
        body = response.json()
    except ValueError:
        logger.warning("Analytics Engine returned a non-JSON body: status=%s", response.status_code)
        return Failure(REQUEST_FAILED, response.status_code)

    if not isinstance(body, dict):
        return Failure(REQUEST_FAILED, response.status_code)

    error = body.get("error")
    if isinstance(error, str):
        return Failure(error, response.status_code)

    if response.status_code != SUCCESS_STATUS:
        # 401 from the auth middleware carries its message in `data`
        message = body.get("data")
        if isinstance(message, str) and message:
            return Failure(message, response.status_code)
        return Failure(REQUEST_FAILED, response.status_code)

    return Success(body.get("data"), response.status_code)


def _is_empty(value: Any) -> bool:
    return value is None or value is False or (isinstance(value, str) and not value)


def unwrap(envelope: Envelope) -> Any:
    """Return the payload of a success envelope or raise :class:`RequestError`."""
    if isinstance(envelope, Failure):
        raise RequestError(envelope.error, envelope.status)
    if _is_empty(envelope.data):
        raise RequestError(INVALID_RESPONSE_DATA, envelope.status)
    return envelope.data


__all__ = ["Envelope", "Success", "Failure", "parse_envelope", "unwrap", "SUCCESS_STATUS"]
