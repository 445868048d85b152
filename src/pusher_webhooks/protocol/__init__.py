"""Pusher webhook protocol -- types, signatures, and event decoding.

Public API re-exports for ``pusher_webhooks.protocol``.
"""

from pusher_webhooks.protocol.types import (
    KEY_HEADER,
    SIGNATURE_HEADER,
    SIGNATURE_LENGTH,
    MAX_TIME_MS,
    AppKey,
    AppSecret,
    AuthSignature,
    Channel,
    ChannelType,
    parse_channel,
    render_channel,
    ms_to_datetime,
)

from pusher_webhooks.protocol.errors import (
    WebhookErrorKind,
    WebhookError,
    AuthenticationError,
    MissingHeadersError,
    UnknownKeyError,
    InvalidSignatureError,
    DecodeError,
    MalformedEnvelopeError,
    UnknownEventTypeError,
    InvalidEventFieldsError,
)

from pusher_webhooks.protocol.signature import compute_signature, signature_matches

from pusher_webhooks.protocol.events import (
    EVENT_NAMES,
    ChannelOccupied,
    ChannelVacated,
    MemberAdded,
    MemberRemoved,
    ClientEvent,
    WebhookEvent,
    Webhooks,
    decode_event,
    decode_webhooks,
)

__all__ = [
    # Types
    "KEY_HEADER",
    "SIGNATURE_HEADER",
    "SIGNATURE_LENGTH",
    "MAX_TIME_MS",
    "AppKey",
    "AppSecret",
    "AuthSignature",
    "Channel",
    "ChannelType",
    "parse_channel",
    "render_channel",
    "ms_to_datetime",
    # Errors
    "WebhookErrorKind",
    "WebhookError",
    "AuthenticationError",
    "MissingHeadersError",
    "UnknownKeyError",
    "InvalidSignatureError",
    "DecodeError",
    "MalformedEnvelopeError",
    "UnknownEventTypeError",
    "InvalidEventFieldsError",
    # Signature
    "compute_signature",
    "signature_matches",
    # Events
    "EVENT_NAMES",
    "ChannelOccupied",
    "ChannelVacated",
    "MemberAdded",
    "MemberRemoved",
    "ClientEvent",
    "WebhookEvent",
    "Webhooks",
    "decode_event",
    "decode_webhooks",
]
