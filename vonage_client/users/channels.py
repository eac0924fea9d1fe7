"""
Per-channel contact points a user can be reached on.

Wire shape: {"channels": {"pstn": [{"number": ...}], "sip": [...], ...}}.
Every key is optional; an empty Channels object serializes as {}.
Number and URI checks apply to objects built by the caller only.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field, ValidationInfo, field_validator

from vonage_client.common.schemas import JsonableBaseObject, from_server, lenient_enum
from vonage_client.common.validation import sanitize_e164


class _NumberChannel(JsonableBaseObject):
    number: Optional[str] = None

    @field_validator("number")
    @classmethod
    def _e164(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        if v is None or from_server(info):
            return v
        return sanitize_e164(v, "number")


class Pstn(_NumberChannel):
    pass


class Sms(_NumberChannel):
    pass


class Mms(_NumberChannel):
    pass


class Whatsapp(_NumberChannel):
    pass


class Viber(_NumberChannel):
    pass


class Messenger(JsonableBaseObject):
    id: Optional[str] = None


class Sip(JsonableBaseObject):
    uri: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None


class Vbc(JsonableBaseObject):
    extension: Optional[str] = None


class WebsocketContentType(str, Enum):
    L16_8K = "audio/l16;rate=8000"
    L16_16K = "audio/l16;rate=16000"


LenientWebsocketContentType = lenient_enum(WebsocketContentType)


class Websocket(JsonableBaseObject):
    uri: Optional[str] = None
    content_type: LenientWebsocketContentType = Field(None, alias="content-type")
    headers: Optional[Dict[str, Any]] = None

    @field_validator("uri")
    @classmethod
    def _ws_scheme(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        if v is not None and not from_server(info) and not v.startswith(("ws://", "wss://")):
            raise ValueError("Websocket URI must use the ws:// or wss:// scheme")
        return v


class Channels(JsonableBaseObject):
    pstn: Optional[List[Pstn]] = None
    sip: Optional[List[Sip]] = None
    vbc: Optional[List[Vbc]] = None
    websocket: Optional[List[Websocket]] = None
    sms: Optional[List[Sms]] = None
    mms: Optional[List[Mms]] = None
    whatsapp: Optional[List[Whatsapp]] = None
    viber: Optional[List[Viber]] = None
    messenger: Optional[List[Messenger]] = None
