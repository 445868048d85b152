"""Core types, constants, and utility functions for Pusher webhooks."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Union

# Header names as sent by the platform (matched case-insensitively)
KEY_HEADER = "X-Pusher-Key"
SIGNATURE_HEADER = "X-Pusher-Signature"

# Hex-encoded HMAC-SHA256 digest length
SIGNATURE_LENGTH = 64

AppKey = str
AppSecret = Union[str, bytes]
AuthSignature = str

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Last millisecond representable as a datetime (9999-12-31T23:59:59.999Z)
MAX_TIME_MS = 253402300799999


class ChannelType(str, Enum):
    """Channel visibility class, selected by the channel name prefix.

    Using ``str, Enum`` so that ``ChannelType.PRIVATE == "private-"`` is True.
    """

    PUBLIC = ""
    PRIVATE = "private-"
    PRESENCE = "presence-"


@dataclass(frozen=True)
class Channel:
    """A parsed channel name.

    ``name`` excludes the type prefix; ``str(channel)`` gives the full
    name back exactly as it appeared on the wire.
    """

    type: ChannelType
    name: str

    @property
    def full(self) -> str:
        """Return the full channel name including its prefix."""
        return f"{self.type.value}{self.name}"

    @property
    def is_presence(self) -> bool:
        return self.type is ChannelType.PRESENCE

    def __str__(self) -> str:
        return self.full


def parse_channel(raw: str) -> Channel:
    """Parse a channel name, splitting off a ``private-``/``presence-`` prefix.

    Any string is accepted; names without a known prefix are public.
    """
    for channel_type in (ChannelType.PRESENCE, ChannelType.PRIVATE):
        if raw.startswith(channel_type.value):
            return Channel(type=channel_type, name=raw[len(channel_type.value):])
    return Channel(type=ChannelType.PUBLIC, name=raw)


def render_channel(channel: Channel) -> str:
    """Inverse of :func:`parse_channel`."""
    return channel.full


def ms_to_datetime(time_ms: int) -> datetime:
    """Convert milliseconds since the epoch to an aware UTC datetime.

    Raises:
        OverflowError: If *time_ms* is past :data:`MAX_TIME_MS`.
    """
    return _EPOCH + timedelta(milliseconds=time_ms)
