"""Shared fakes for tests that go through the HTTP layer."""

import json
from typing import Any, Dict, List, Optional

import pytest

from polygon_options.client.config import PolygonConfig
from polygon_options.client.http import PolygonHttpClient
from polygon_options.client.options_service import OptionsService


class FakeResponse:
    """Just enough of requests.Response for PolygonHttpClient."""

    def __init__(self, status_code: int = 200, payload: Any = None, reason: str = "OK", text: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    """Replays queued responses (or raises queued exceptions) and records every call."""

    def __init__(self):
        self.queue: List[Any] = []
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def add(self, payload: Any = None, status_code: int = 200, reason: str = "OK", text: Optional[str] = None):
        self.queue.append(FakeResponse(status_code, payload, reason, text))
        return self

    def add_error(self, error: Exception):
        self.queue.append(error)
        return self

    def get(self, url, headers=None, params=None, timeout=None):
        self.calls.append({'url': url, 'headers': headers, 'params': params, 'timeout': timeout})
        if not self.queue:
            raise AssertionError(f"Unexpected request to {url}")
        item = self.queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def close(self):
        self.closed = True

    @property
    def last_call(self) -> Dict[str, Any]:
        return self.calls[-1]


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def config():
    """Config with a key, a single attempt and no backoff."""
    return PolygonConfig(api_key="test-key", base_url="https://api.test", max_retry_attempts=1)


@pytest.fixture
def http_client(config, fake_session):
    return PolygonHttpClient(config, session=fake_session)


@pytest.fixture
def service(http_client):
    return OptionsService(http_client)


@pytest.fixture
def no_sleep(monkeypatch):
    """Record retry waits instead of sleeping."""
    waits: List[float] = []
    monkeypatch.setattr("polygon_options.utils.error_handling.time.sleep", waits.append)
    return waits
