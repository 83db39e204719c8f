import httpx
import pytest

from analytics_engine.envelope import Failure, Success, parse_envelope, unwrap
from analytics_engine.exceptions import INVALID_RESPONSE_DATA, REQUEST_FAILED, RequestError


def test_missing_response_is_a_failed_request():
    assert parse_envelope(None) == Failure(REQUEST_FAILED)


def test_error_field_wins_over_status():
    response = httpx.Response(200, json={"status": 200, "error": "quota exceeded"})
    assert parse_envelope(response) == Failure("quota exceeded", 200)


def test_non_object_body_is_a_failed_request():
    assert parse_envelope(httpx.Response(200, json=["a", "b"])) == Failure(REQUEST_FAILED, 200)
    assert parse_envelope(httpx.Response(200, text="plain")) == Failure(REQUEST_FAILED, 200)


def test_non_200_without_message_is_a_failed_request():
    assert parse_envelope(httpx.Response(500, json={"status": 500})) == Failure(REQUEST_FAILED, 500)


def test_success_envelope_carries_data():
    response = httpx.Response(200, json={"status": 200, "data": {"global": {}}})
    assert parse_envelope(response) == Success({"global": {}})


@pytest.mark.parametrize("data", [None, "", False])
def test_unwrap_rejects_empty_data(data):
    with pytest.raises(RequestError) as exc_info:
        unwrap(Success(data))
    assert str(exc_info.value) == INVALID_RESPONSE_DATA


def test_unwrap_keeps_generic_messages_apart():
    with pytest.raises(RequestError) as missing:
        unwrap(parse_envelope(None))
    with pytest.raises(RequestError) as malformed:
        unwrap(parse_envelope(httpx.Response(200, json={"status": 200})))

    assert str(missing.value) == REQUEST_FAILED
    assert str(malformed.value) == INVALID_RESPONSE_DATA
    assert str(missing.value) != str(malformed.value)


def test_unwrap_returns_data():
    assert unwrap(Success("Event stored successfully!")) == "Event stored successfully!"
    assert unwrap(Success({})) == {}
