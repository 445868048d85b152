"""HMAC-SHA256 body signatures.

The platform signs each webhook body with the application secret and
sends the lowercase hex digest in the ``X-Pusher-Signature`` header.
"""

from __future__ import annotations

import hashlib
import hmac

from pusher_webhooks.protocol.types import AppSecret, AuthSignature


def _secret_bytes(secret: AppSecret) -> bytes:
    if isinstance(secret, str):
        return secret.encode("utf-8")
    return bytes(secret)


def compute_signature(secret: AppSecret, body: bytes) -> AuthSignature:
    """Compute the hex HMAC-SHA256 of the exact *body* bytes under *secret*."""
    return hmac.new(_secret_bytes(secret), body, hashlib.sha256).hexdigest()


def signature_matches(
    secret: AppSecret,
    body: bytes,
    claimed: AuthSignature | bytes,
) -> bool:
    """Check *claimed* against the recomputed signature of *body*.

    Uses ``hmac.compare_digest`` on bytes so that the comparison time does
    not depend on where the first mismatch occurs, and so that non-ASCII
    input is rejected rather than raising.
    """
    expected = compute_signature(secret, body).encode("ascii")
    if isinstance(claimed, str):
        claimed = claimed.encode("utf-8")
    return hmac.compare_digest(expected, claimed)
