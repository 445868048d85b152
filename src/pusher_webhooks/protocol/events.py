"""Webhook event variants and body decoding.

A verified webhook body has the form::

    {"time_ms": 1502790365001,
     "events": [{"name": "channel_occupied", "channel": "foo"}, ...]}

Each event's ``name`` selects exactly one of the variants below.  Decoding
is all-or-nothing: one bad event fails the whole batch, so callers never
see a partial view of the platform's state changes.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    JsonValue,
    PlainValidator,
    Strict,
    StrictInt,
    StrictStr,
    ValidationError,
)

from pusher_webhooks.protocol.errors import (
    InvalidEventFieldsError,
    MalformedEnvelopeError,
    UnknownEventTypeError,
)
from pusher_webhooks.protocol.types import MAX_TIME_MS, Channel, ms_to_datetime, parse_channel

logger = logging.getLogger(__name__)


def _validate_channel(value: Any) -> Channel:
    if isinstance(value, Channel):
        return value
    if isinstance(value, str):
        return parse_channel(value)
    raise ValueError("channel must be a string")


ChannelField = Annotated[Channel, PlainValidator(_validate_channel)]


class _Event(BaseModel):
    model_config = ConfigDict(frozen=True)

    channel: ChannelField


class ChannelOccupied(_Event):
    """The first subscriber joined *channel*."""

    name: Literal["channel_occupied"] = "channel_occupied"


class ChannelVacated(_Event):
    """The last subscriber left *channel*."""

    name: Literal["channel_vacated"] = "channel_vacated"


class MemberAdded(_Event):
    """A user joined a presence channel."""

    name: Literal["member_added"] = "member_added"
    user_id: StrictStr


class MemberRemoved(_Event):
    """A user left a presence channel."""

    name: Literal["member_removed"] = "member_removed"
    user_id: StrictStr


class ClientEvent(_Event):
    """An event triggered by a client on a private or presence channel.

    ``data`` is passed through as arbitrary JSON; ``None`` means the
    delivery carried no data.  ``user_id`` is only set on presence channels.
    """

    name: Literal["client_event"] = "client_event"
    event: StrictStr
    socket_id: StrictStr
    data: JsonValue = None
    user_id: StrictStr | None = None


WebhookEvent = Union[ChannelOccupied, ChannelVacated, MemberAdded, MemberRemoved, ClientEvent]

_EVENT_TYPES: dict[str, type[_Event]] = {
    "channel_occupied": ChannelOccupied,
    "channel_vacated": ChannelVacated,
    "member_added": MemberAdded,
    "member_removed": MemberRemoved,
    "client_event": ClientEvent,
}

EVENT_NAMES = frozenset(_EVENT_TYPES)


class _WireEnvelope(BaseModel):
    time_ms: StrictInt = Field(ge=0, le=MAX_TIME_MS)
    events: Annotated[list[Any], Strict()]


@dataclass(frozen=True)
class Webhooks:
    """A decoded batch of webhook events, in delivery order."""

    time_ms: int
    events: tuple[WebhookEvent, ...]

    @property
    def timestamp(self) -> datetime:
        """Return ``time_ms`` as an aware UTC datetime."""
        return ms_to_datetime(self.time_ms)


def _decode_client_data(value: str) -> JsonValue:
    # The platform sends client data as a JSON-encoded string.
    try:
        return json.loads(value)
    except (ValueError, RecursionError):
        return value


def _error_fields(exc: ValidationError) -> str:
    locs = {".".join(str(part) for part in err["loc"]) or "<root>" for err in exc.errors()}
    return ", ".join(sorted(locs))


def decode_event(raw: Any, index: int = 0, *, decode_client_data: bool = True) -> WebhookEvent:
    """Decode a single wire event object into its variant.

    Raises:
        MalformedEnvelopeError: If *raw* is not a JSON object.
        UnknownEventTypeError: If ``name`` is missing or not a known variant.
        InvalidEventFieldsError: If a required field is missing or mistyped.
    """
    if not isinstance(raw, dict):
        raise MalformedEnvelopeError(
            f"Event at index {index} is not an object", index=index
        )

    name = raw.get("name")
    event_cls = _EVENT_TYPES.get(name) if isinstance(name, str) else None
    if event_cls is None:
        raise UnknownEventTypeError(
            f"Unknown event type at index {index}: {name!r}", index=index
        )

    if (
        event_cls is ClientEvent
        and decode_client_data
        and isinstance(raw.get("data"), str)
    ):
        raw = {**raw, "data": _decode_client_data(raw["data"])}

    try:
        return event_cls.model_validate(raw)
    except ValidationError as exc:
        raise InvalidEventFieldsError(
            f"Invalid {name!r} event at index {index}: {_error_fields(exc)}",
            index=index,
        ) from exc


def decode_webhooks(body: bytes | str, *, decode_client_data: bool = True) -> Webhooks:
    """Decode a verified webhook body into :class:`Webhooks`.

    Only call this on a body whose signature has already been verified.

    Raises:
        MalformedEnvelopeError: If the body is not UTF-8 JSON or the root
            object lacks an in-range integer ``time_ms`` or an array ``events``.
        UnknownEventTypeError: If any event has an unrecognised ``name``.
        InvalidEventFieldsError: If any event is missing or mistypes a field.
    """
    try:
        if isinstance(body, bytes):
            body = body.decode("utf-8")
        document = json.loads(body)
    except UnicodeDecodeError as exc:
        raise MalformedEnvelopeError("Body is not valid UTF-8") from exc
    except (ValueError, RecursionError) as exc:
        raise MalformedEnvelopeError(f"Body is not valid JSON: {type(exc).__name__}") from exc

    try:
        envelope = _WireEnvelope.model_validate(document)
    except ValidationError as exc:
        raise MalformedEnvelopeError(
            f"Invalid webhook envelope: {_error_fields(exc)}"
        ) from exc

    events = tuple(
        decode_event(raw, index, decode_client_data=decode_client_data)
        for index, raw in enumerate(envelope.events)
    )
    logger.debug("Decoded %d webhook events (time_ms=%d)", len(events), envelope.time_ms)
    return Webhooks(time_ms=envelope.time_ms, events=events)
