"""Receiver configuration via dataclasses (no pydantic -- instant construction)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from pusher_webhooks.protocol.types import KEY_HEADER, SIGNATURE_HEADER

logger = logging.getLogger(__name__)


@dataclass
class WebhookConfig:
    """Configuration for webhook verification and decoding.

    Header names can be overridden via environment variables
    (``PUSHER_WEBHOOK_KEY_HEADER``, ``PUSHER_WEBHOOK_SIGNATURE_HEADER``)
    or constructor arguments.

    Priority (highest wins): constructor arg > env var > default.
    """

    key_header: str | None = None
    signature_header: str | None = None
    decode_client_data: bool = True

    def __post_init__(self) -> None:
        if self.key_header is None:
            self.key_header = os.getenv("PUSHER_WEBHOOK_KEY_HEADER", KEY_HEADER)
        if self.signature_header is None:
            self.signature_header = os.getenv(
                "PUSHER_WEBHOOK_SIGNATURE_HEADER", SIGNATURE_HEADER
            )

        if not self.key_header or not self.signature_header:
            raise ValueError("Header names must be non-empty")
        if self.key_header.lower() == self.signature_header.lower():
            raise ValueError(
                f"Key and signature headers must differ, got {self.key_header!r}"
            )


@dataclass(frozen=True)
class AppCredentials:
    """An application's identity as registered with the platform.

    The secret is excluded from ``repr`` so credentials can be logged safely.
    """

    app_id: str
    key: str
    secret: str = field(repr=False)

    @classmethod
    def from_env(cls) -> AppCredentials:
        """Read ``PUSHER_APP_ID``, ``PUSHER_APP_KEY`` and ``PUSHER_APP_SECRET``.

        Raises:
            ValueError: If any of the variables is unset or empty.
        """
        values = {
            name: os.getenv(name, "")
            for name in ("PUSHER_APP_ID", "PUSHER_APP_KEY", "PUSHER_APP_SECRET")
        }
        missing = sorted(name for name, value in values.items() if not value)
        if missing:
            raise ValueError(f"Missing environment variables: {missing}")
        logger.debug("Loaded credentials for app %s from environment", values["PUSHER_APP_ID"])
        return cls(
            app_id=values["PUSHER_APP_ID"],
            key=values["PUSHER_APP_KEY"],
            secret=values["PUSHER_APP_SECRET"],
        )
