"""Option blocks nested inside NCCO actions (Input, Record, Pay)."""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import Field

from vonage_client.voice.ncco.base import NccoModel


class EventMethod(str, Enum):
    GET = "GET"
    POST = "POST"


class DtmfSettings(NccoModel):
    time_out: Optional[int] = Field(None, ge=0, le=10)
    max_digits: Optional[int] = Field(None, ge=0, le=20)
    submit_on_hash: Optional[bool] = None

    @property
    def fully_configured(self) -> bool:
        return all(v is not None for v in (self.time_out, self.max_digits, self.submit_on_hash))


class SpeechSettings(NccoModel):
    uuid: Optional[List[str]] = None
    end_on_silence: Optional[float] = Field(None, ge=0.4, le=10)
    language: Optional[str] = None
    context: Optional[List[str]] = None
    start_timeout: Optional[int] = Field(None, ge=1, le=60)
    max_duration: Optional[int] = Field(None, ge=1, le=60)
    save_audio: Optional[bool] = None
    sensitivity: Optional[int] = Field(None, ge=10, le=100)


class TranscriptionSettings(NccoModel):
    language: Optional[str] = None
    event_url: Optional[List[str]] = Field(None, min_length=1, max_length=1)
    event_method: Optional[EventMethod] = None
    sentiment_analysis: Optional[bool] = None


class PaymentPromptType(str, Enum):
    CARD_NUMBER = "CardNumber"
    EXPIRATION_DATE = "ExpirationDate"
    SECURITY_CODE = "SecurityCode"


class PaymentPrompt(NccoModel):
    """Text spoken for one payment step, with per-error overrides keyed by error name."""

    type: PaymentPromptType
    text: str = Field(min_length=1)
    errors: Optional[Dict[str, Dict[str, str]]] = None


class PayVoice(NccoModel):
    language: Optional[str] = None
    style: Optional[int] = Field(None, ge=0)
