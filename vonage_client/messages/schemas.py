# -------------------------------------------------------------------
# vonage_client/messages/schemas.py
#
# WHAT THIS FILE IS FOR
# --------------------
# Core request / response schema of the Messages API (POST /v1/messages).
#
# Every outbound message is one MessageRequest subclass per
# (channel, message_type) pair. The pair is fixed by the subclass and
# checked against ALLOWED_MESSAGE_TYPES, so e.g. an image over SMS
# cannot be constructed.
#
# Wire order of the common fields:
#   message_type, channel, from, to, client_ref, webhook_url, webhook_version
# followed by the channel-specific content fields.
#
# RECIPIENT NUMBERS
# -----------------
# For phone-number channels `to` is sanitised on construction
# (spaces, dashes, parentheses and a leading '+' removed) and must be
# 7..15 digits. The sanitised form is what gets stored and sent.
# -------------------------------------------------------------------

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Dict, FrozenSet, Optional

from pydantic import Field, field_validator, model_validator

from vonage_client.common.schemas import FrozenRequest, JsonableBaseObject
from vonage_client.common.validation import require, sanitize_e164


class Channel(str, Enum):
    SMS = "sms"
    MMS = "mms"
    WHATSAPP = "whatsapp"
    MESSENGER = "messenger"
    VIBER = "viber_service"
    RCS = "rcs"


class MessageType(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    FILE = "file"
    VCARD = "vcard"
    TEMPLATE = "template"
    STICKER = "sticker"
    CUSTOM = "custom"
    CARD = "card"
    # inbound only
    LOCATION = "location"
    REPLY = "reply"
    BUTTON = "button"
    ORDER = "order"
    REACTION = "reaction"
    UNSUPPORTED = "unsupported"


ALLOWED_MESSAGE_TYPES: Dict[Channel, FrozenSet[MessageType]] = {
    Channel.SMS: frozenset({MessageType.TEXT}),
    Channel.MMS: frozenset({MessageType.IMAGE, MessageType.VCARD, MessageType.AUDIO, MessageType.VIDEO}),
    Channel.WHATSAPP: frozenset({
        MessageType.TEXT,
        MessageType.IMAGE,
        MessageType.AUDIO,
        MessageType.VIDEO,
        MessageType.FILE,
        MessageType.TEMPLATE,
        MessageType.STICKER,
        MessageType.CUSTOM,
    }),
    Channel.MESSENGER: frozenset({
        MessageType.TEXT,
        MessageType.IMAGE,
        MessageType.AUDIO,
        MessageType.VIDEO,
        MessageType.FILE,
    }),
    Channel.VIBER: frozenset({MessageType.TEXT, MessageType.IMAGE, MessageType.VIDEO, MessageType.FILE}),
    Channel.RCS: frozenset({
        MessageType.TEXT,
        MessageType.IMAGE,
        MessageType.VIDEO,
        MessageType.FILE,
        MessageType.CARD,
        MessageType.CUSTOM,
    }),
}


class WebhookVersion(str, Enum):
    V0_1 = "v0.1"
    V1 = "v1"


class MessageRequest(FrozenRequest):
    """
    Base outbound message.

    Subclasses pin MESSAGE_TYPE / CHANNEL; callers only pass sender,
    recipient and content.
    """

    MESSAGE_TYPE: ClassVar[Optional[MessageType]] = None
    CHANNEL: ClassVar[Optional[Channel]] = None
    RECIPIENT_IS_NUMBER: ClassVar[bool] = True

    message_type: MessageType
    channel: Channel
    from_: str = Field(alias="from")
    to: str
    client_ref: Optional[str] = Field(None, max_length=100)
    webhook_url: Optional[str] = None
    webhook_version: Optional[WebhookVersion] = None

    @model_validator(mode="before")
    @classmethod
    def _pin_type_and_channel(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            if cls.MESSAGE_TYPE is not None:
                data.setdefault("message_type", cls.MESSAGE_TYPE)
            if cls.CHANNEL is not None:
                data.setdefault("channel", cls.CHANNEL)
        return data

    @field_validator("from_")
    @classmethod
    def _sender_required(cls, v: str) -> str:
        return require(v, "from")

    @field_validator("to")
    @classmethod
    def _recipient(cls, v: str) -> str:
        if cls.RECIPIENT_IS_NUMBER:
            return sanitize_e164(v, "to")
        return require(v, "to")

    @model_validator(mode="after")
    def _check_combination(self):
        if self.MESSAGE_TYPE is not None and self.message_type != self.MESSAGE_TYPE:
            raise ValueError(f"{type(self).__name__} only sends message_type '{self.MESSAGE_TYPE.value}'")
        if self.CHANNEL is not None and self.channel != self.CHANNEL:
            raise ValueError(f"{type(self).__name__} only sends over channel '{self.CHANNEL.value}'")
        if self.message_type not in ALLOWED_MESSAGE_TYPES[self.channel]:
            raise ValueError(
                f"Invalid message type '{self.message_type.value}' for channel '{self.channel.value}'"
            )
        return self


class MessageResponse(JsonableBaseObject):
    """202 Accepted body of POST /v1/messages."""

    message_uuid: Optional[str] = None
    workflow_id: Optional[str] = None


# ---------------------------------------------------------------------------
# Content payloads shared across channels
# ---------------------------------------------------------------------------


class UrlPayload(JsonableBaseObject):
    url: str

    @field_validator("url")
    @classmethod
    def _url_required(cls, v: str) -> str:
        return require(v, "url")


class MediaPayload(UrlPayload):
    caption: Optional[str] = Field(None, min_length=1, max_length=3000)


class FilePayload(MediaPayload):
    name: Optional[str] = None


class MessageContext(JsonableBaseObject):
    """Quoted message for replies (WhatsApp / Messenger)."""

    message_uuid: str
