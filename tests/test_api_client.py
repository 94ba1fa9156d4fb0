"""
Tests for the Motiv API client against a scripted aiohttp session.
"""

import asyncio
from datetime import datetime, timedelta, timezone

import aiohttp
import pytest

from custom_components.motiv_awake.api.base_api import (
    MotivApiError,
    MotivAuthError,
    MotivNetworkError,
)
from custom_components.motiv_awake.api.client import MotivApiClient
from custom_components.motiv_awake.models import MotivAccount


class FakeResponse:
    def __init__(self, status=200, payload=None, text="", content_type="application/json"):
        self.status = status
        self.headers = {"Content-Type": content_type}
        self._payload = payload
        self._text = text

    async def json(self):
        if self._payload is None:
            raise ValueError("no json body")
        return self._payload

    async def text(self):
        return self._text

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class FakeSession:
    """Returns queued responses and records each request."""

    def __init__(self, *responses):
        self._responses = list(responses)
        self.requests = []

    def request(self, method, url, headers=None, json=None, timeout=None):
        self.requests.append((method, url, headers))
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _account(**overrides):
    data = {
        "user_id": "u1",
        "email": "sleeper@example.com",
        "session_token": "token-123",
        "session_expiry": datetime.now(timezone.utc) + timedelta(days=30),
    }
    data.update(overrides)
    return MotivAccount(**data)


def _client(session, **overrides):
    return MotivApiClient(session, _account(**overrides), api_url="https://motiv.test/v1/")


def test_get_last_awakening_iso():
    session = FakeSession(FakeResponse(payload={"lastAwakening": "2026-10-18T06:45:00Z"}))

    woke_at = asyncio.run(_client(session).get_last_awakening())

    assert woke_at == datetime(2026, 10, 18, 6, 45, tzinfo=timezone.utc)
    method, url, headers = session.requests[0]
    assert method == "GET"
    assert url == "https://motiv.test/v1/users/u1/sleep/latest"
    assert headers["Authorization"] == "Bearer token-123"


def test_get_last_awakening_epoch_millis():
    expected = datetime(2026, 10, 18, 6, 45, tzinfo=timezone.utc)
    payload = {"lastAwakening": int(expected.timestamp() * 1000)}

    woke_at = asyncio.run(_client(FakeSession(FakeResponse(payload=payload))).get_last_awakening())

    assert woke_at == expected


def test_every_call_hits_the_api():
    session = FakeSession(
        FakeResponse(payload={"lastAwakening": "2026-10-18T06:45:00Z"}),
        FakeResponse(payload={"lastAwakening": "2026-10-18T08:00:00Z"}),
    )
    client = _client(session)

    first = asyncio.run(client.get_last_awakening())
    second = asyncio.run(client.get_last_awakening())

    assert first < second
    assert len(session.requests) == 2


@pytest.mark.parametrize("status", [401, 403])
def test_unauthenticated_response_raises_auth_error(status):
    session = FakeSession(FakeResponse(status=status))

    with pytest.raises(MotivAuthError):
        asyncio.run(_client(session).get_last_awakening())


def test_connection_error_raises_network_error():
    session = FakeSession(aiohttp.ClientConnectionError("refused"))

    with pytest.raises(MotivNetworkError) as exc_info:
        asyncio.run(_client(session).get_last_awakening())

    assert exc_info.value.code == "CONNECTION_ERROR"


def test_timeout_raises_network_error():
    session = FakeSession(asyncio.TimeoutError())

    with pytest.raises(MotivNetworkError) as exc_info:
        asyncio.run(_client(session).get_last_awakening())

    assert exc_info.value.code == "TIMEOUT"


def test_server_error_keeps_detail():
    session = FakeSession(
        FakeResponse(status=500, payload={"detail": "database down", "code": "DB-1"})
    )

    with pytest.raises(MotivApiError) as exc_info:
        asyncio.run(_client(session).get_last_awakening())

    assert not isinstance(exc_info.value, (MotivAuthError, MotivNetworkError))
    assert exc_info.value.status == 500
    assert exc_info.value.detail == "database down"
    assert exc_info.value.code == "DB-1"


def test_server_error_with_non_object_json_body():
    session = FakeSession(FakeResponse(status=500, payload=["boom"]))

    with pytest.raises(MotivApiError) as exc_info:
        asyncio.run(_client(session).get_last_awakening())

    assert exc_info.value.status == 500
    assert exc_info.value.detail == "Unknown error occurred."
    assert exc_info.value.code == "HTTP_ERROR"


def test_html_error_body_is_truncated():
    session = FakeSession(FakeResponse(status=502, text="x" * 500, content_type="text/html"))

    with pytest.raises(MotivApiError) as exc_info:
        asyncio.run(_client(session).get_last_awakening())

    assert exc_info.value.detail == "x" * 200 + "..."


@pytest.mark.parametrize(
    "payload",
    [{}, {"lastAwakening": "soon"}, ["not", "a", "dict"], {"lastAwakening": 10**30}],
)
def test_malformed_payload_raises_api_error(payload):
    session = FakeSession(FakeResponse(payload=payload))

    with pytest.raises(MotivApiError):
        asyncio.run(_client(session).get_last_awakening())


def test_needs_auth():
    assert _client(FakeSession()).needs_auth is False
    assert _client(FakeSession(), session_token=None).needs_auth is True
    assert _client(FakeSession(), user_id=None).needs_auth is True
    expired = datetime.now(timezone.utc) - timedelta(minutes=1)
    assert _client(FakeSession(), session_expiry=expired).needs_auth is True
    assert _client(FakeSession(), session_expiry=None).needs_auth is False


def test_validate_auth():
    ok = FakeSession(FakeResponse(payload={"id": "u1"}))
    rejected = FakeSession(FakeResponse(status=401))

    assert asyncio.run(_client(ok).async_validate_auth()) is True
    assert asyncio.run(_client(rejected).async_validate_auth()) is False
