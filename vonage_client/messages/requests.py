"""
vonage_client/messages/requests.py

Concrete outbound message types, one class per (channel, message type).

    SmsTextRequest(from_="447900000009", to="12002009000", text="Hello, World!")

SMS, MMS, WhatsApp and Viber recipients are phone numbers; Messenger
recipients are page-scoped IDs and only need to be non-empty. Viber
sender IDs are capped at 50 characters.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional

from pydantic import Field, field_validator, model_validator

from vonage_client.common.schemas import JsonableBaseObject
from vonage_client.common.validation import check_length
from vonage_client.messages.schemas import (
    Channel,
    FilePayload,
    MediaPayload,
    MessageContext,
    MessageRequest,
    MessageType,
    UrlPayload,
)

# ---------------------------------------------------------------------------
# SMS
# ---------------------------------------------------------------------------


class SmsEncodingType(str, Enum):
    TEXT = "text"
    UNICODE = "unicode"
    AUTO = "auto"


class SmsOptions(JsonableBaseObject):
    encoding_type: Optional[SmsEncodingType] = None
    content_id: Optional[str] = None
    entity_id: Optional[str] = None


class SmsTextRequest(MessageRequest):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.TEXT
    CHANNEL: ClassVar[Channel] = Channel.SMS

    text: str = Field(min_length=1, max_length=1000)
    ttl: Optional[int] = Field(None, ge=1)
    sms: Optional[SmsOptions] = None


# ---------------------------------------------------------------------------
# MMS
# ---------------------------------------------------------------------------


class _MmsRequest(MessageRequest):
    CHANNEL: ClassVar[Channel] = Channel.MMS

    ttl: Optional[int] = Field(None, ge=300, le=259200)


class MmsImageRequest(_MmsRequest):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.IMAGE
    image: MediaPayload


class MmsVcardRequest(_MmsRequest):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.VCARD
    vcard: MediaPayload


class MmsAudioRequest(_MmsRequest):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.AUDIO
    audio: MediaPayload


class MmsVideoRequest(_MmsRequest):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.VIDEO
    video: MediaPayload


# ---------------------------------------------------------------------------
# WhatsApp
# ---------------------------------------------------------------------------


class _WhatsappRequest(MessageRequest):
    CHANNEL: ClassVar[Channel] = Channel.WHATSAPP

    context: Optional[MessageContext] = None


class WhatsappTextRequest(_WhatsappRequest):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.TEXT
    text: str = Field(min_length=1, max_length=4096)


class WhatsappImageRequest(_WhatsappRequest):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.IMAGE
    image: MediaPayload


class WhatsappAudioRequest(_WhatsappRequest):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.AUDIO
    audio: UrlPayload


class WhatsappVideoRequest(_WhatsappRequest):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.VIDEO
    video: MediaPayload


class WhatsappFileRequest(_WhatsappRequest):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.FILE
    file: FilePayload


class WhatsappSticker(JsonableBaseObject):
    """Either a public URL or a previously uploaded sticker id."""

    url: Optional[str] = None
    id: Optional[str] = None

    @model_validator(mode="after")
    def _exactly_one(self):
        if bool(self.url) == bool(self.id):
            raise ValueError("Sticker requires exactly one of url or id")
        return self


class WhatsappStickerRequest(_WhatsappRequest):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.STICKER
    sticker: WhatsappSticker


class WhatsappPolicy(str, Enum):
    DETERMINISTIC = "deterministic"


class WhatsappTemplateSettings(JsonableBaseObject):
    locale: str = "en"
    policy: Optional[WhatsappPolicy] = None


class WhatsappTemplate(JsonableBaseObject):
    name: str = Field(min_length=1)
    parameters: Optional[List[str]] = None


class WhatsappTemplateRequest(_WhatsappRequest):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.TEMPLATE
    template: WhatsappTemplate
    whatsapp: WhatsappTemplateSettings = Field(default_factory=WhatsappTemplateSettings)


class WhatsappCustomRequest(_WhatsappRequest):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.CUSTOM
    custom: Dict[str, Any]


# ---------------------------------------------------------------------------
# Facebook Messenger
# ---------------------------------------------------------------------------


class MessengerCategory(str, Enum):
    RESPONSE = "response"
    UPDATE = "update"
    MESSAGE_TAG = "message_tag"


class MessengerOptions(JsonableBaseObject):
    category: Optional[MessengerCategory] = None
    tag: Optional[str] = None

    @model_validator(mode="after")
    def _tag_needs_category(self):
        if self.tag and self.category != MessengerCategory.MESSAGE_TAG:
            raise ValueError("tag requires category 'message_tag'")
        return self


class _MessengerRequest(MessageRequest):
    CHANNEL: ClassVar[Channel] = Channel.MESSENGER
    RECIPIENT_IS_NUMBER: ClassVar[bool] = False

    messenger: Optional[MessengerOptions] = None

    @field_validator("from_", "to")
    @classmethod
    def _id_length(cls, v: str) -> str:
        return check_length(v, "Messenger ID", 1, 50)


class MessengerTextRequest(_MessengerRequest):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.TEXT
    text: str = Field(min_length=1, max_length=640)


class MessengerImageRequest(_MessengerRequest):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.IMAGE
    image: UrlPayload


class MessengerAudioRequest(_MessengerRequest):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.AUDIO
    audio: UrlPayload


class MessengerVideoRequest(_MessengerRequest):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.VIDEO
    video: UrlPayload


class MessengerFileRequest(_MessengerRequest):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.FILE
    file: UrlPayload


# ---------------------------------------------------------------------------
# Viber
# ---------------------------------------------------------------------------


class ViberCategory(str, Enum):
    TRANSACTION = "transaction"
    PROMOTION = "promotion"


class ViberAction(JsonableBaseObject):
    url: str
    text: str = Field(min_length=1, max_length=30)


class ViberOptions(JsonableBaseObject):
    category: Optional[ViberCategory] = None
    ttl: Optional[int] = Field(None, ge=30, le=259200)
    type: Optional[str] = None
    action: Optional[ViberAction] = None


class ViberVideoPayload(MediaPayload):
    thumb_url: str
    duration: Optional[int] = Field(None, ge=1, le=600)
    file_size: Optional[int] = Field(None, ge=1, le=200)


class _ViberRequest(MessageRequest):
    CHANNEL: ClassVar[Channel] = Channel.VIBER

    viber_service: Optional[ViberOptions] = None

    @field_validator("from_")
    @classmethod
    def _sender_id_length(cls, v: str) -> str:
        return check_length(v, "Sender ID", 1, 50)


class ViberTextRequest(_ViberRequest):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.TEXT
    text: str = Field(min_length=1, max_length=1000)


class ViberImageRequest(_ViberRequest):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.IMAGE
    image: MediaPayload


class ViberVideoRequest(_ViberRequest):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.VIDEO
    video: ViberVideoPayload


class ViberFileRequest(_ViberRequest):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.FILE
    file: FilePayload
