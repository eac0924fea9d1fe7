"""
vonage_client/messages/webhooks.py

WHAT THIS FILE IS FOR
---------------------
Decoders for the two webhooks the Messages API POSTs to an application:

- MessageStatus:  delivery lifecycle of an outbound message
- InboundMessage: a message received from an end user

Both are lenient by construction:
- unknown properties are kept (see `unknown_properties`)
- unknown status / channel / message_type values decode to None

WHAT THIS FILE IS NOT FOR
-------------------------
Receiving HTTP requests or verifying webhook signatures; callers pass
the raw JSON body in.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import BeforeValidator, Field

from vonage_client.common.schemas import JsonableBaseObject, ProblemDetail, lenient_enum
from vonage_client.messages.schemas import Channel, MessageType

LenientChannel = lenient_enum(Channel)
LenientMessageType = lenient_enum(MessageType)

_LEGACY_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %z"


def _parse_timestamp(value: Any) -> Any:
    """Accept ISO-8601 as well as the older 'YYYY-MM-DD HH:MM:SS +0000' form."""
    if isinstance(value, str):
        try:
            return datetime.strptime(value, _LEGACY_TIMESTAMP_FORMAT)
        except ValueError:
            return value
    return value


Timestamp = Annotated[Optional[datetime], BeforeValidator(_parse_timestamp)]


class MessageStatusValue(str, Enum):
    SUBMITTED = "submitted"
    DELIVERED = "delivered"
    REJECTED = "rejected"
    UNDELIVERABLE = "undeliverable"
    READ = "read"


LenientStatus = lenient_enum(MessageStatusValue)


class Usage(JsonableBaseObject):
    """Price arrives as a decimal string; exposed as float."""

    price: Optional[float] = None
    currency: Optional[str] = None


class MessageStatus(JsonableBaseObject):
    timestamp: Timestamp = None
    message_uuid: Optional[str] = None
    to: Optional[str] = None
    from_: Optional[str] = Field(None, alias="from")
    status: LenientStatus = None
    channel: LenientChannel = None
    client_ref: Optional[str] = None
    error: Optional[ProblemDetail] = None
    usage: Optional[Usage] = None


# ---------------------------------------------------------------------------
# Inbound
# ---------------------------------------------------------------------------


class InboundMedia(JsonableBaseObject):
    url: Optional[str] = None
    name: Optional[str] = None
    caption: Optional[str] = None


class InboundLocation(JsonableBaseObject):
    lat: Optional[float] = None
    long: Optional[float] = None
    name: Optional[str] = None
    address: Optional[str] = None
    url: Optional[str] = None


class InboundContext(JsonableBaseObject):
    message_uuid: Optional[str] = None
    message_from: Optional[str] = None


class WhatsappProfile(JsonableBaseObject):
    name: Optional[str] = None


class SmsInboundMetadata(JsonableBaseObject):
    num_messages: Optional[int] = None
    keyword: Optional[str] = None


class InboundMessage(JsonableBaseObject):
    timestamp: Timestamp = None
    channel: LenientChannel = None
    message_type: LenientMessageType = None
    message_uuid: Optional[str] = None
    to: Optional[str] = None
    from_: Optional[str] = Field(None, alias="from")
    client_ref: Optional[str] = None
    text: Optional[str] = None
    image: Optional[InboundMedia] = None
    audio: Optional[InboundMedia] = None
    video: Optional[InboundMedia] = None
    file: Optional[InboundMedia] = None
    vcard: Optional[InboundMedia] = None
    sticker: Optional[InboundMedia] = None
    location: Optional[InboundLocation] = None
    context: Optional[InboundContext] = None
    profile: Optional[WhatsappProfile] = None
    sms: Optional[SmsInboundMetadata] = None
    provider_message: Optional[str] = None
    raw_usage: Optional[Usage] = Field(None, alias="usage")

    @property
    def sms_usage(self) -> Optional[Usage]:
        """Usage is only billed, and only meaningful, for inbound SMS."""
        if self.channel != Channel.SMS:
            raise ValueError(f"Usage is only applicable to SMS, not {self.channel}")
        return self.raw_usage

    @property
    def content(self) -> Any:
        """The payload selected by `message_type`, or None for unknown types."""
        if self.message_type is None:
            return None
        return getattr(self, self.message_type.value, None)
