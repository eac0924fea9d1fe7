"""
vonage_client/voice/ncco/actions.py

WHAT THIS FILE IS FOR
---------------------
The ten NCCO action types. Each is an immutable pydantic model whose
bounds are checked when it is constructed:

    ConnectAction(endpoint=[PhoneEndpoint(number="15554441234")], limit=7200)   # ok
    ConnectAction(endpoint=[PhoneEndpoint(number="15554441234")], limit=7201)   # ValueError

Serialized form: {<fields in declared order>, "action": "<name>"}, with
unset fields left out. Connect writes "timeout" after "action".

NOTABLE RULES
-------------
- Record: channels > 1 forces split="conversation"; channels == 1 drops split
- Input: at least one input type; asynchronous mode cannot be combined
  with fully configured DTMF settings
- Conversation: mute cannot be combined with can_speak
- Pay: amount is mandatory
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from pydantic import Field, field_validator, model_validator

from vonage_client.common.validation import sanitize_e164
from vonage_client.voice.ncco.base import NccoModel, TaggedNccoModel
from vonage_client.voice.ncco.endpoints import Endpoint
from vonage_client.voice.ncco.settings import (
    DtmfSettings,
    EventMethod,
    PaymentPrompt,
    PayVoice,
    SpeechSettings,
    TranscriptionSettings,
)

EventUrl = Optional[List[str]]


class Action(TaggedNccoModel):
    TAG_KEY: ClassVar[str] = "action"

    @property
    def action(self) -> Optional[str]:
        return self.TAG


# ---------------------------------------------------------------------------
# Audio out
# ---------------------------------------------------------------------------


class TalkAction(Action):
    TAG: ClassVar[str] = "talk"

    text: str = Field(min_length=1, max_length=1500)
    barge_in: Optional[bool] = None
    loop: Optional[int] = Field(None, ge=0)
    level: Optional[float] = Field(None, ge=-1, le=1)
    language: Optional[str] = None
    style: Optional[int] = Field(None, ge=0)
    premium: Optional[bool] = None


class StreamAction(Action):
    TAG: ClassVar[str] = "stream"

    stream_url: List[str] = Field(min_length=1, max_length=1)
    level: Optional[float] = Field(None, ge=-1, le=1)
    barge_in: Optional[bool] = None
    loop: Optional[int] = Field(None, ge=0)


# ---------------------------------------------------------------------------
# Recording and input
# ---------------------------------------------------------------------------


class RecordingFormat(str, Enum):
    MP3 = "mp3"
    WAV = "wav"
    OGG = "ogg"


class SplitRecording(str, Enum):
    CONVERSATION = "conversation"


class RecordAction(Action):
    TAG: ClassVar[str] = "record"

    format: Optional[RecordingFormat] = None
    end_on_silence: Optional[int] = Field(None, ge=3, le=10)
    time_out: Optional[int] = Field(None, ge=3, le=7200)
    channels: Optional[int] = Field(None, ge=1, le=32)
    end_on_key: Optional[str] = None
    beep_start: Optional[bool] = None
    event_url: EventUrl = None
    event_method: Optional[EventMethod] = None
    split: Optional[SplitRecording] = None
    transcription: Optional[TranscriptionSettings] = None

    @model_validator(mode="before")
    @classmethod
    def _split_follows_channels(cls, data: Any) -> Any:
        if isinstance(data, dict):
            channels = data.get("channels")
            if isinstance(channels, int):
                data = dict(data)
                data.pop("split", None)
                if channels > 1:
                    data["split"] = SplitRecording.CONVERSATION
        return data

    @field_validator("end_on_key")
    @classmethod
    def _single_key(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and (len(v) != 1 or v not in "0123456789*#"):
            raise ValueError("end_on_key must be a single digit, '*' or '#'")
        return v


class InputType(str, Enum):
    DTMF = "dtmf"
    SPEECH = "speech"


class InputMode(str, Enum):
    SYNCHRONOUS = "synchronous"
    ASYNCHRONOUS = "asynchronous"


class InputAction(Action):
    TAG: ClassVar[str] = "input"

    type: List[InputType] = Field(min_length=1)
    dtmf: Optional[DtmfSettings] = None
    speech: Optional[SpeechSettings] = None
    event_url: EventUrl = None
    event_method: Optional[EventMethod] = None
    mode: Optional[InputMode] = None

    @model_validator(mode="after")
    def _consistent_inputs(self):
        if self.dtmf is not None and InputType.DTMF not in self.type:
            raise ValueError("dtmf settings require input type 'dtmf'")
        if self.speech is not None and InputType.SPEECH not in self.type:
            raise ValueError("speech settings require input type 'speech'")
        if self.mode == InputMode.ASYNCHRONOUS and self.dtmf is not None and self.dtmf.fully_configured:
            raise ValueError("Asynchronous mode cannot be used with fully configured DTMF settings")
        return self


# ---------------------------------------------------------------------------
# Call control
# ---------------------------------------------------------------------------


class EventType(str, Enum):
    SYNCHRONOUS = "synchronous"


class MachineDetection(str, Enum):
    CONTINUE = "continue"
    HANGUP = "hangup"


class AdvancedMachineDetection(NccoModel):
    behavior: Optional[MachineDetection] = None
    mode: Optional[str] = None
    beep_timeout: Optional[int] = Field(None, ge=45, le=120)


class ConnectAction(Action):
    TAG: ClassVar[str] = "connect"
    AFTER_TAG: ClassVar[Tuple[str, ...]] = ("timeout",)

    endpoint: List[Endpoint] = Field(min_length=1)
    from_: Optional[str] = Field(None, alias="from")
    random_from_number: Optional[bool] = None
    event_type: Optional[EventType] = None
    limit: Optional[int] = Field(None, ge=1, le=7200)
    machine_detection: Optional[MachineDetection] = None
    advanced_machine_detection: Optional[AdvancedMachineDetection] = None
    event_url: EventUrl = None
    event_method: Optional[EventMethod] = None
    ringback_tone: Optional[str] = None
    timeout: Optional[int] = Field(None, ge=3, le=7200)

    @field_validator("from_")
    @classmethod
    def _from_number(cls, v: Optional[str]) -> Optional[str]:
        return sanitize_e164(v, "from") if v is not None else v

    @model_validator(mode="after")
    def _one_caller_id(self):
        if self.from_ and self.random_from_number:
            raise ValueError("from and random_from_number are mutually exclusive")
        if self.machine_detection and self.advanced_machine_detection:
            raise ValueError("machine_detection and advanced_machine_detection are mutually exclusive")
        return self


class ConversationAction(Action):
    TAG: ClassVar[str] = "conversation"

    name: str = Field(min_length=1)
    music_on_hold_url: EventUrl = None
    start_on_enter: Optional[bool] = None
    end_on_exit: Optional[bool] = None
    record: Optional[bool] = None
    event_url: EventUrl = None
    event_method: Optional[EventMethod] = None
    mute: Optional[bool] = None
    can_speak: Optional[List[str]] = None
    can_hear: Optional[List[str]] = None

    @model_validator(mode="after")
    def _mute_or_speak(self):
        if self.mute and self.can_speak:
            raise ValueError("mute cannot be combined with can_speak")
        return self


class TransferAction(Action):
    """Moves the call leg into an existing conversation."""

    TAG: ClassVar[str] = "transfer"

    conversation_id: str
    mute: Optional[bool] = None
    can_speak: Optional[List[str]] = None
    can_hear: Optional[List[str]] = None

    @field_validator("conversation_id")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Conversation ID cannot be empty.")
        return v


class NotifyAction(Action):
    TAG: ClassVar[str] = "notify"

    payload: Dict[str, Any]
    event_url: List[str] = Field(min_length=1, max_length=1)
    event_method: Optional[EventMethod] = None


class PayAction(Action):
    TAG: ClassVar[str] = "pay"

    event_url: EventUrl = None
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    amount: float = Field(gt=0)
    voice: Optional[PayVoice] = None
    prompts: Optional[List[PaymentPrompt]] = None


class WaitAction(Action):
    TAG: ClassVar[str] = "wait"

    timeout: Optional[float] = Field(None, ge=0)


ACTION_TYPES: Dict[str, type] = {
    cls.TAG: cls
    for cls in (
        TalkAction,
        StreamAction,
        RecordAction,
        InputAction,
        ConnectAction,
        ConversationAction,
        TransferAction,
        NotifyAction,
        PayAction,
        WaitAction,
    )
}
