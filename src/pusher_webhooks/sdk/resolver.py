"""Secret resolvers: map a claimed application key to its secret.

A resolver is any callable taking an :data:`AppKey` and returning the
matching :data:`AppSecret`, or ``None`` if the key is unknown.  It may be
a coroutine function when the lookup needs I/O (a credential store, a
database); the verifier awaits it.  Resolvers own any caching or retry
policy -- the verifier calls them exactly once per delivery.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Mapping, Optional, Union

from pusher_webhooks.protocol.types import AppKey, AppSecret
from pusher_webhooks.sdk.config import AppCredentials

logger = logging.getLogger(__name__)

SecretResolver = Callable[[AppKey], Optional[AppSecret]]
AsyncSecretResolver = Callable[[AppKey], Awaitable[Optional[AppSecret]]]
AnySecretResolver = Union[SecretResolver, AsyncSecretResolver]


def mapping_resolver(secrets: Mapping[AppKey, AppSecret]) -> SecretResolver:
    """Resolve keys from a fixed ``key -> secret`` mapping.

    The mapping is copied, so later changes to *secrets* are not seen.
    """
    table = dict(secrets)

    def resolve(key: AppKey) -> AppSecret | None:
        return table.get(key)

    return resolve


def credentials_resolver(*credentials: AppCredentials) -> SecretResolver:
    """Resolve keys for one or more configured applications.

    Raises:
        ValueError: If two credentials share a key with different secrets.
    """
    table: dict[AppKey, AppSecret] = {}
    for creds in credentials:
        if creds.key in table and table[creds.key] != creds.secret:
            raise ValueError(f"Conflicting secrets for app key {creds.key!r}")
        table[creds.key] = creds.secret
    logger.debug("Built resolver for %d app key(s)", len(table))
    return mapping_resolver(table)
