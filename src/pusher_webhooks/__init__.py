"""pusher-webhooks -- verify and decode Pusher webhook deliveries.

Top-level convenience re-exports::

    from pusher_webhooks import verify_and_decode, mapping_resolver
    from pusher_webhooks.protocol import ClientEvent, parse_channel
"""

__version__ = "0.1.0"

from pusher_webhooks.protocol import (
    ChannelOccupied,
    ChannelVacated,
    ClientEvent,
    MemberAdded,
    MemberRemoved,
    WebhookError,
    Webhooks,
)
from pusher_webhooks.sdk import (
    AppCredentials,
    WebhookConfig,
    WebhookPayload,
    async_verify_and_decode,
    credentials_resolver,
    mapping_resolver,
    verify_and_decode,
)

__all__ = [
    "__version__",
    "ChannelOccupied",
    "ChannelVacated",
    "ClientEvent",
    "MemberAdded",
    "MemberRemoved",
    "WebhookError",
    "Webhooks",
    "AppCredentials",
    "WebhookConfig",
    "WebhookPayload",
    "async_verify_and_decode",
    "credentials_resolver",
    "mapping_resolver",
    "verify_and_decode",
]
