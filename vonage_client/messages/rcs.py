"""
vonage_client/messages/rcs.py

RCS (Rich Communication Services) outbound messages.

Suggestions are a tagged union keyed by `type`:
    reply | dial | view_location | open_url | open_url_in_webview | create_calendar_event

Limits enforced on construction:
- suggestion text: 1..25 characters
- card title: 1..200, card text: 1..2000
- at most 4 suggestions per card, 11 per message
- ttl: 300..259200 seconds
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, ClassVar, Dict, List, Literal, Optional, Union

from pydantic import Field

from vonage_client.common.schemas import JsonableBaseObject
from vonage_client.messages.schemas import Channel, MessageRequest, MessageType, UrlPayload


class _Suggestion(JsonableBaseObject):
    text: str = Field(min_length=1, max_length=25)
    postback_data: str = Field(min_length=1)


class ReplySuggestion(_Suggestion):
    type: Literal["reply"] = "reply"


class DialSuggestion(_Suggestion):
    type: Literal["dial"] = "dial"
    phone_number: str
    fallback_url: Optional[str] = None


class ViewLocationSuggestion(_Suggestion):
    type: Literal["view_location"] = "view_location"
    latitude: str
    longitude: str
    pin_label: Optional[str] = None
    fallback_url: Optional[str] = None


class OpenUrlSuggestion(_Suggestion):
    type: Literal["open_url"] = "open_url"
    url: str
    description: str


class OpenUrlInWebviewSuggestion(_Suggestion):
    type: Literal["open_url_in_webview"] = "open_url_in_webview"
    url: str
    description: str
    view_mode: Optional[Literal["FULL", "TALL", "HALF"]] = None


class CreateCalendarEventSuggestion(_Suggestion):
    type: Literal["create_calendar_event"] = "create_calendar_event"
    start_time: datetime
    end_time: datetime
    title: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=500)
    fallback_url: Optional[str] = None


Suggestion = Annotated[
    Union[
        ReplySuggestion,
        DialSuggestion,
        ViewLocationSuggestion,
        OpenUrlSuggestion,
        OpenUrlInWebviewSuggestion,
        CreateCalendarEventSuggestion,
    ],
    Field(discriminator="type"),
]


class MediaHeight(str, Enum):
    SHORT = "SHORT"
    MEDIUM = "MEDIUM"
    TALL = "TALL"


class RcsCard(JsonableBaseObject):
    title: str = Field(min_length=1, max_length=200)
    text: str = Field(min_length=1, max_length=2000)
    media_url: str
    media_height: Optional[MediaHeight] = None
    media_description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    media_force_refresh: Optional[bool] = None
    suggestions: Optional[List[Suggestion]] = Field(None, max_length=4)


class _RcsRequest(MessageRequest):
    CHANNEL: ClassVar[Channel] = Channel.RCS
    RECIPIENT_IS_NUMBER: ClassVar[bool] = True

    ttl: Optional[int] = Field(None, ge=300, le=259200)
    suggestions: Optional[List[Suggestion]] = Field(None, max_length=11)


class RcsTextRequest(_RcsRequest):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.TEXT
    text: str = Field(min_length=1, max_length=3072)


class RcsImageRequest(_RcsRequest):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.IMAGE
    image: UrlPayload


class RcsVideoRequest(_RcsRequest):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.VIDEO
    video: UrlPayload


class RcsFileRequest(_RcsRequest):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.FILE
    file: UrlPayload


class RcsCardRequest(_RcsRequest):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.CARD
    card: RcsCard


class RcsCustomRequest(_RcsRequest):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.CUSTOM
    custom: Dict[str, Any]
