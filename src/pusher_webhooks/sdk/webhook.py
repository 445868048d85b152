"""Receiver-side webhook verification and decoding.

Authenticates a webhook delivery against the application secret and,
only once the signature checks out, decodes its events.

Usage::

    from pusher_webhooks import mapping_resolver, verify_and_decode

    resolver = mapping_resolver({"your-app-key": "your-app-secret"})
    payload = verify_and_decode(request.headers, raw_body, resolver)
    for event in payload.webhooks.events:
        ...

Every failure raises a :class:`~pusher_webhooks.protocol.errors.WebhookError`
subclass; the caller decides which HTTP status to answer with.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Awaitable, Union

from pusher_webhooks.protocol.errors import (
    DecodeError,
    InvalidSignatureError,
    MissingHeadersError,
    UnknownKeyError,
)
from pusher_webhooks.protocol.events import WebhookEvent, Webhooks, decode_webhooks
from pusher_webhooks.protocol.signature import signature_matches
from pusher_webhooks.protocol.types import AppKey, AppSecret, AuthSignature
from pusher_webhooks.sdk.config import WebhookConfig
from pusher_webhooks.sdk.resolver import AnySecretResolver

logger = logging.getLogger(__name__)

HeaderValue = Union[str, bytes]
Headers = Union[Mapping[str, str], Iterable[tuple[HeaderValue, HeaderValue]]]


@dataclass(frozen=True)
class VerifiedSignature:
    """Result of a successful signature check."""

    key: AppKey
    signature: AuthSignature
    secret: AppSecret = field(repr=False)


@dataclass(frozen=True)
class WebhookPayload:
    """A verified and fully decoded webhook delivery."""

    key: AppKey
    signature: AuthSignature
    webhooks: Webhooks

    @property
    def events(self) -> tuple[WebhookEvent, ...]:
        return self.webhooks.events


def _text(value: HeaderValue) -> str:
    if isinstance(value, bytes):
        return value.decode("latin-1")
    return value


def find_header(headers: Headers, name: str) -> str | None:
    """Return the value of header *name*, matched case-insensitively.

    *headers* may be a mapping (including framework header objects) or a
    sequence of ``(name, value)`` pairs with ``str`` or ``bytes`` items.

    Raises:
        MissingHeadersError: If the header is repeated with different values.
    """
    items = headers.items() if isinstance(headers, Mapping) else headers
    target = name.lower()
    found: str | None = None
    for raw_name, raw_value in items:
        if _text(raw_name).lower() != target:
            continue
        value = _text(raw_value).strip()
        if found is not None and value != found:
            raise MissingHeadersError(f"Ambiguous header {name!r}: conflicting values")
        found = value
    return found


def _claims(headers: Headers, config: WebhookConfig) -> tuple[AppKey, AuthSignature]:
    key = find_header(headers, config.key_header)
    signature = find_header(headers, config.signature_header)
    if not key or not signature:
        missing = [
            header
            for header, value in ((config.key_header, key), (config.signature_header, signature))
            if not value
        ]
        logger.warning("Webhook rejected: missing headers %s", missing)
        raise MissingHeadersError(f"Missing webhook headers: {missing}", key=key or None)
    return key, signature


def _await_secret(pending: Awaitable[AppSecret | None]) -> AppSecret | None:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        pass
    else:
        if inspect.iscoroutine(pending):
            pending.close()
        raise RuntimeError(
            "verify_and_decode() cannot wait on an async resolver inside a running "
            "event loop; use async_verify_and_decode() instead"
        )

    async def _wait() -> AppSecret | None:
        return await pending

    return asyncio.run(_wait())


def _check(
    key: AppKey,
    secret: AppSecret | None,
    signature: AuthSignature,
    body: bytes,
) -> VerifiedSignature:
    if secret is None:
        logger.warning("Webhook rejected: unknown app key %s", key)
        raise UnknownKeyError(f"Unknown app key: {key!r}", key=key)
    if not signature_matches(secret, body, signature):
        logger.warning("Webhook rejected: invalid signature for app key %s", key)
        raise InvalidSignatureError(f"Invalid signature for app key {key!r}", key=key)
    return VerifiedSignature(key=key, signature=signature, secret=secret)


def verify_signature(
    headers: Headers,
    body: bytes,
    resolver: AnySecretResolver,
    *,
    config: WebhookConfig | None = None,
) -> VerifiedSignature:
    """Authenticate a delivery by its key and signature headers.

    The resolver is always consulted before any signature comparison, so
    unknown keys are rejected the same way whatever signature they carry.
    A resolver returning an awaitable is run to completion with
    ``asyncio.run``; inside a running event loop use
    :func:`async_verify_signature` instead.

    Raises:
        MissingHeadersError: If the key or signature header is absent.
        UnknownKeyError: If the resolver returns ``None``.
        InvalidSignatureError: If the HMAC-SHA256 of *body* does not match.
        RuntimeError: If the resolver is async and an event loop is running.
    """
    config = config or WebhookConfig()
    key, signature = _claims(headers, config)
    secret = resolver(key)
    if inspect.isawaitable(secret):
        secret = _await_secret(secret)
    return _check(key, secret, signature, body)


async def async_verify_signature(
    headers: Headers,
    body: bytes,
    resolver: AnySecretResolver,
    *,
    config: WebhookConfig | None = None,
) -> VerifiedSignature:
    """Async version of :func:`verify_signature` (awaits the resolver)."""
    config = config or WebhookConfig()
    key, signature = _claims(headers, config)
    secret = resolver(key)
    if inspect.isawaitable(secret):
        secret = await secret
    return _check(key, secret, signature, body)


def _assemble(verified: VerifiedSignature, body: bytes, config: WebhookConfig) -> WebhookPayload:
    try:
        webhooks = decode_webhooks(body, decode_client_data=config.decode_client_data)
    except DecodeError as exc:
        logger.warning(
            "Webhook from app key %s failed to decode (%s): %s",
            verified.key,
            exc.kind.value if exc.kind else "decode_error",
            exc,
        )
        raise
    logger.debug(
        "Accepted webhook from app key %s with %d event(s)",
        verified.key,
        len(webhooks.events),
    )
    return WebhookPayload(key=verified.key, signature=verified.signature, webhooks=webhooks)


def verify_and_decode(
    headers: Headers,
    body: bytes,
    resolver: AnySecretResolver,
    *,
    config: WebhookConfig | None = None,
) -> WebhookPayload:
    """Verify a webhook delivery, then decode its body.

    Decoding is never attempted before verification succeeds, and no
    partially decoded payload is ever returned.

    Raises:
        AuthenticationError: If verification fails (see :func:`verify_signature`).
        DecodeError: If the verified body cannot be decoded.
    """
    config = config or WebhookConfig()
    verified = verify_signature(headers, body, resolver, config=config)
    return _assemble(verified, body, config)


async def async_verify_and_decode(
    headers: Headers,
    body: bytes,
    resolver: AnySecretResolver,
    *,
    config: WebhookConfig | None = None,
) -> WebhookPayload:
    """Async version of :func:`verify_and_decode`."""
    config = config or WebhookConfig()
    verified = await async_verify_signature(headers, body, resolver, config=config)
    return _assemble(verified, body, config)
