"""
Shared fixtures: a recording host, a scripted account client and a
fixed clock for the Motiv platform.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from custom_components.motiv_awake.platform import (
    Accessory,
    MotivPlatform,
    PlatformContext,
)

NOW = datetime(2026, 10, 18, 7, 30, tzinfo=timezone.utc)


class FakeHost:
    """Host double that records every registry call."""

    def __init__(self):
        self.listeners = {}
        self.registered = []
        self.updated = []
        self.unregistered = []

    def on(self, event, callback):
        self.listeners.setdefault(event, []).append(callback)

    def emit(self, event):
        for callback in self.listeners.get(event, []):
            callback()

    def generate_uuid(self, name):
        return str(uuid.uuid5(uuid.NAMESPACE_DNS, name))

    def create_accessory(self, display_name, uuid):
        return Accessory(display_name=display_name, uuid=uuid)

    def register_platform_accessories(self, package_name, plugin_name, accessories):
        self.registered.append((package_name, plugin_name, list(accessories)))

    def update_platform_accessories(self, accessories):
        self.updated.append(list(accessories))

    def unregister_platform_accessories(self, package_name, plugin_name, accessories):
        self.unregistered.append((package_name, plugin_name, list(accessories)))


class FakeClient:
    """Account client double returning a scripted wake time or error."""

    def __init__(self, account, needs_auth=False, woke_at=None, error=None):
        self.account = account
        self.needs_auth = needs_auth
        self.woke_at = woke_at
        self.error = error
        self.calls = 0

    async def get_last_awakening(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.woke_at


def account_config(user_id="u1", expiry=NOW + timedelta(days=30)):
    return {
        "account": {
            "userId": user_id,
            "email": "sleeper@example.com",
            "sessionToken": "token-123",
            "sessionExpiry": expiry.isoformat(),
        }
    }


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def clients():
    return []


@pytest.fixture
def make_platform(host, clients):
    """Build a platform; client behaviour is passed as keyword arguments."""

    def _make(config, **client_kwargs):
        def _factory(account):
            client = FakeClient(account, **client_kwargs)
            clients.append(client)
            return client

        context = PlatformContext(
            logger=logging.getLogger("motiv_awake.test"),
            host=host,
            client_factory=_factory,
            clock=lambda: NOW,
        )
        return MotivPlatform(context, config)

    return _make
