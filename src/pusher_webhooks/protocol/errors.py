"""Webhook exception hierarchy.

All webhook failures inherit from :class:`WebhookError` and carry a
stable :attr:`WebhookError.kind` tag so that callers can map them to
responses without matching on class names.
"""

from __future__ import annotations

from enum import Enum


class WebhookErrorKind(str, Enum):
    """Failure kinds surfaced by verification and decoding."""

    MISSING_HEADERS = "missing_headers"
    UNKNOWN_KEY = "unknown_key"
    INVALID_SIGNATURE = "invalid_signature"
    MALFORMED_ENVELOPE = "malformed_envelope"
    UNKNOWN_EVENT_TYPE = "unknown_event_type"
    INVALID_EVENT_FIELDS = "invalid_event_fields"


class WebhookError(Exception):
    """Base exception for all webhook errors."""

    kind: WebhookErrorKind | None = None


class AuthenticationError(WebhookError):
    """Raised when a delivery cannot be attributed to a known application."""

    def __init__(self, message: str = "", *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class MissingHeadersError(AuthenticationError):
    """Raised when the key or signature header is absent."""

    kind = WebhookErrorKind.MISSING_HEADERS


class UnknownKeyError(AuthenticationError):
    """Raised when the resolver has no secret for the claimed key."""

    kind = WebhookErrorKind.UNKNOWN_KEY


class InvalidSignatureError(AuthenticationError):
    """Raised when the recomputed digest does not match the claimed one."""

    kind = WebhookErrorKind.INVALID_SIGNATURE


class DecodeError(WebhookError):
    """Raised when a verified body cannot be decoded."""

    def __init__(self, message: str = "", *, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


class MalformedEnvelopeError(DecodeError):
    """Raised when ``time_ms`` or ``events`` is missing or mistyped."""

    kind = WebhookErrorKind.MALFORMED_ENVELOPE


class UnknownEventTypeError(DecodeError):
    """Raised when an event's ``name`` is not a known variant."""

    kind = WebhookErrorKind.UNKNOWN_EVENT_TYPE


class InvalidEventFieldsError(DecodeError):
    """Raised when a known event lacks a field or has one of the wrong type."""

    kind = WebhookErrorKind.INVALID_EVENT_FIELDS
