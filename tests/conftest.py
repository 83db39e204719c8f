import sys
from pathlib import Path

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from analytics_engine import get_settings

INSTANCE_URL = "https://analytics.test"
AUTHORIZATION = "test-secret"


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def mock_http(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def envelope(data, status: int = 200) -> httpx.Response:
    return httpx.Response(status, json={"status": status, "data": data})


def failure(error: str, status: int = 500) -> httpx.Response:
    return httpx.Response(status, json={"status": status, "error": error})
