"""Shared test fixtures for Pusher webhook tests."""

from __future__ import annotations

import pytest

from pusher_webhooks.protocol.signature import compute_signature
from pusher_webhooks.sdk.resolver import mapping_resolver

APP_KEY = "ebc2cca5d18f3cf01d99"
APP_SECRET = "6f87cba29d7b8f6f4a36"

CHANNEL_OCCUPIED_BODY = (
    b'{"time_ms":1502790365001,"events":[{"channel":"foo","name":"channel_occupied"}]}'
)
CHANNEL_OCCUPIED_SIGNATURE = "4b3d29966e4930d875ec01012e37c18070f4b779b09f71af99d1f0baaffabc98"


@pytest.fixture()
def app_key() -> str:
    return APP_KEY


@pytest.fixture()
def app_secret() -> str:
    return APP_SECRET


@pytest.fixture()
def resolver():
    """Resolver that knows only the test application."""
    return mapping_resolver({APP_KEY: APP_SECRET})


@pytest.fixture()
def sign():
    """Return a factory building ``(headers, body)`` signed with the test secret."""

    def _sign(body: bytes, *, key: str = APP_KEY, secret: str = APP_SECRET):
        headers = [
            ("X-Pusher-Key", key),
            ("X-Pusher-Signature", compute_signature(secret, body)),
        ]
        return headers, body

    return _sign
