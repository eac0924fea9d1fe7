"""
vonage_client/voice/ncco/endpoints.py

What a Connect action dials. The address comes first, then "type",
then any options:

    {"number":"15554441234","type":"phone"}
    {"uri":"sip:test@sip.example.com","type":"sip"}
    {"uri":"wss://example.com","type":"websocket","content-type":"audio/l16;rate=16000"}
    {"extension":"1234","type":"vbc"}
    {"user":"alice","type":"app"}

SIP addressing is either a full `uri`, or a `domain` with an optional
`user`; the two forms cannot be mixed.
"""

from __future__ import annotations

from typing import ClassVar, Dict, Optional, Tuple, Union

from pydantic import Field, field_validator, model_validator

from vonage_client.common.validation import require, sanitize_e164
from vonage_client.voice.ncco.base import NccoModel, TaggedNccoModel


class ConnectEndpoint(TaggedNccoModel):
    TAG_KEY: ClassVar[str] = "type"


class OnAnswer(NccoModel):
    url: str
    ringback_tone: Optional[str] = None


class PhoneEndpoint(ConnectEndpoint):
    TAG: ClassVar[str] = "phone"
    AFTER_TAG: ClassVar[Tuple[str, ...]] = ("dtmfAnswer", "onAnswer")

    number: str
    dtmf_answer: Optional[str] = None
    on_answer: Optional[OnAnswer] = None

    @field_validator("number")
    @classmethod
    def _e164(cls, v: str) -> str:
        return sanitize_e164(v, "number")

    @field_validator("dtmf_answer")
    @classmethod
    def _dtmf_digits(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not all(c in "0123456789*#p" for c in v):
            raise ValueError("dtmf_answer may only contain digits, '*', '#' and 'p'")
        return v


class SipEndpoint(ConnectEndpoint):
    TAG: ClassVar[str] = "sip"
    AFTER_TAG: ClassVar[Tuple[str, ...]] = ("headers", "standardHeaders")

    uri: Optional[str] = None
    domain: Optional[str] = None
    user: Optional[str] = None
    headers: Optional[Dict[str, str]] = None
    standard_headers: Optional[Dict[str, str]] = None

    @model_validator(mode="after")
    def _addressing(self):
        if self.domain and self.uri:
            raise ValueError("SIP endpoint cannot have both domain and uri")
        if self.user and not self.domain:
            raise ValueError("SIP endpoint user requires a domain")
        if self.user and self.uri:
            raise ValueError("SIP endpoint cannot have both user and uri")
        if not self.uri and not self.domain:
            raise ValueError("SIP endpoint requires either uri or domain")
        return self


class WebSocketEndpoint(ConnectEndpoint):
    TAG: ClassVar[str] = "websocket"
    AFTER_TAG: ClassVar[Tuple[str, ...]] = ("content-type", "headers")

    uri: str
    content_type: str = Field(alias="content-type")
    headers: Optional[Dict[str, str]] = None

    @field_validator("uri")
    @classmethod
    def _ws_scheme(cls, v: str) -> str:
        require(v, "uri")
        if not v.startswith(("ws://", "wss://")):
            raise ValueError("WebSocket uri must start with ws:// or wss://")
        return v


class VbcEndpoint(ConnectEndpoint):
    TAG: ClassVar[str] = "vbc"

    extension: str = Field(min_length=1)


class AppEndpoint(ConnectEndpoint):
    TAG: ClassVar[str] = "app"

    user: str = Field(min_length=1)


Endpoint = Union[PhoneEndpoint, SipEndpoint, WebSocketEndpoint, VbcEndpoint, AppEndpoint]
