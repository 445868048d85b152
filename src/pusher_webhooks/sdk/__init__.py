"""Webhook receiver SDK -- verification, decoding, resolvers, config."""

from pusher_webhooks.sdk.config import AppCredentials, WebhookConfig
from pusher_webhooks.sdk.resolver import (
    AnySecretResolver,
    AsyncSecretResolver,
    SecretResolver,
    credentials_resolver,
    mapping_resolver,
)
from pusher_webhooks.sdk.webhook import (
    VerifiedSignature,
    WebhookPayload,
    async_verify_and_decode,
    async_verify_signature,
    find_header,
    verify_and_decode,
    verify_signature,
)

__all__ = [
    "AppCredentials",
    "WebhookConfig",
    "AnySecretResolver",
    "AsyncSecretResolver",
    "SecretResolver",
    "credentials_resolver",
    "mapping_resolver",
    "VerifiedSignature",
    "WebhookPayload",
    "async_verify_and_decode",
    "async_verify_signature",
    "find_header",
    "verify_and_decode",
    "verify_signature",
]
