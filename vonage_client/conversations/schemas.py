# -------------------------------------------------------------------
# vonage_client/conversations/schemas.py
#
# WHAT THIS FILE IS FOR
# --------------------
# DTOs for the Conversations API (/v1/conversations, /v1/users/{id}/conversations):
#   - Conversation (+ Callback, ConversationProperties, ConversationNumber)
#   - Member (+ channel, media, timestamps, initiator)
#   - Event
#   - list filters and cursor-paged envelopes
#
# ID RULES
# --------
#   conversation  CON-<uuid>
#   member        MEM-<uuid>
#   user          USR-<uuid>
#   event         integer, assigned by the server
#
# LIMITS (caller side)
# --------------------
#   Conversation.name            <= 100
#   Conversation.display_name    <= 50
#   Callback.event_mask          1..200
#   Callback.method              GET or POST
#   ConversationProperties.type / custom_sort_key   <= 200
# These apply to objects built by the caller, not to decoded responses.
#
# Unknown enum values (member state, channel type, event type) decode
# to None.
# -------------------------------------------------------------------

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import Field, ValidationInfo, field_validator, model_validator

from vonage_client.common.pagination import CursorFilter, HalLinks, HalPageResponse, QueryFilter, SortOrder
from vonage_client.common.schemas import FrozenRequest, JsonableBaseObject, from_server, lenient_enum
from vonage_client.common.validation import check_length, validate_prefixed_id
from vonage_client.users.schemas import USER_ID_PREFIX, User

CONVERSATION_ID_PREFIX = "CON-"
MEMBER_ID_PREFIX = "MEM-"


def validate_conversation_id(value: str) -> str:
    return validate_prefixed_id(value, CONVERSATION_ID_PREFIX, "conversation_id")


def validate_member_id(value: str) -> str:
    return validate_prefixed_id(value, MEMBER_ID_PREFIX, "member_id")


# ---------------------------------------------------------------------------
# Conversation
# ---------------------------------------------------------------------------


class ConversationStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    DELETED = "DELETED"


LenientConversationStatus = lenient_enum(ConversationStatus)


class CallbackParams(JsonableBaseObject):
    application_id: Optional[UUID] = Field(None, alias="applicationId")
    ncco_url: Optional[str] = None


class Callback(JsonableBaseObject):
    url: Optional[str] = None
    event_mask: Optional[str] = None
    params: Optional[CallbackParams] = None
    method: Optional[str] = None

    @field_validator("event_mask")
    @classmethod
    def _event_mask(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        if v is not None and not from_server(info) and (not v.strip() or len(v) > 200):
            raise ValueError("Event mask must be between 1 and 200 characters")
        return v

    @field_validator("method")
    @classmethod
    def _get_or_post(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        if v is None or from_server(info):
            return v
        method = v.upper()
        if method not in ("GET", "POST"):
            raise ValueError(f"Callback HTTP method must be either POST or GET, not {v}")
        return method


class ConversationProperties(JsonableBaseObject):
    ttl: Optional[int] = Field(None, ge=0)
    type: Optional[str] = None
    custom_sort_key: Optional[str] = None
    custom_data: Optional[Dict[str, Any]] = None

    @field_validator("type", "custom_sort_key")
    @classmethod
    def _max_200(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        return v if from_server(info) else check_length(v, info.field_name, 0, 200)


class ConversationNumber(JsonableBaseObject):
    """A number attached to a conversation, e.g. {"type": "phone", "number": "447700900000"}."""

    type: Optional[str] = None
    number: Optional[str] = None


class ConversationTimestamp(JsonableBaseObject):
    created: Optional[datetime] = None
    updated: Optional[datetime] = None
    destroyed: Optional[datetime] = None


class Conversation(JsonableBaseObject):
    id: Optional[str] = None
    name: Optional[str] = None
    display_name: Optional[str] = None
    image_url: Optional[str] = None
    timestamp: Optional[ConversationTimestamp] = None
    state: LenientConversationStatus = None
    sequence_number: Optional[int] = None
    properties: Optional[ConversationProperties] = None
    numbers: Optional[List[ConversationNumber]] = None
    callback: Optional[Callback] = None
    links: Optional[HalLinks] = Field(None, alias="_links")

    @field_validator("name", "display_name")
    @classmethod
    def _name_lengths(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        if from_server(info):
            return v
        return check_length(v, info.field_name, 1, 100 if info.field_name == "name" else 50)


# ---------------------------------------------------------------------------
# Member
# ---------------------------------------------------------------------------


class MemberState(str, Enum):
    INVITED = "INVITED"
    JOINED = "JOINED"
    LEFT = "LEFT"
    UNKNOWN = "UNKNOWN"


LenientMemberState = lenient_enum(MemberState)


class ChannelType(str, Enum):
    APP = "app"
    PHONE = "phone"
    SMS = "sms"
    MMS = "mms"
    WHATSAPP = "whatsapp"
    VIBER = "viber"
    MESSENGER = "messenger"


LenientChannelType = lenient_enum(ChannelType)


class ChannelEndpoint(JsonableBaseObject):
    """One side (from / to) of a member channel."""

    type: LenientChannelType = None
    number: Optional[str] = None
    user: Optional[str] = None
    id: Optional[str] = None


class MemberChannel(JsonableBaseObject):
    type: LenientChannelType = None
    from_: Optional[ChannelEndpoint] = Field(None, alias="from")
    to: Optional[ChannelEndpoint] = None


class AudioSettings(JsonableBaseObject):
    enabled: Optional[bool] = None
    earmuffed: Optional[bool] = None
    muted: Optional[bool] = None


class MemberMedia(JsonableBaseObject):
    audio: Optional[bool] = None
    audio_settings: Optional[AudioSettings] = None


class MemberTimestamp(JsonableBaseObject):
    invited: Optional[datetime] = None
    joined: Optional[datetime] = None
    left: Optional[datetime] = None


class MemberInitiatorDetails(JsonableBaseObject):
    is_system: Optional[bool] = None
    user_id: Optional[str] = None
    member_id: Optional[str] = None


class MemberInitiator(JsonableBaseObject):
    joined: Optional[MemberInitiatorDetails] = None


class _MemberEmbedded(JsonableBaseObject):
    user: Optional[User] = None


class Member(JsonableBaseObject):
    id: Optional[str] = None
    conversation_id: Optional[str] = None
    embedded: Optional[_MemberEmbedded] = Field(None, alias="_embedded")
    state: LenientMemberState = None
    timestamp: Optional[MemberTimestamp] = None
    initiator: Optional[MemberInitiator] = None
    channel: Optional[MemberChannel] = None
    media: Optional[MemberMedia] = None
    knocking_id: Optional[UUID] = None
    invited_by: Optional[str] = None
    member_id_inviting: Optional[str] = None
    from_: Optional[str] = Field(None, alias="from")
    links: Optional[HalLinks] = Field(None, alias="_links")

    @field_validator("links", mode="before")
    @classmethod
    def _bare_href(cls, v: Any) -> Any:
        # single member responses carry {"href": ...} instead of {"self": {"href": ...}}
        if isinstance(v, dict) and "href" in v:
            return {"self": {"href": v["href"]}}
        return v

    @property
    def user(self) -> Optional[User]:
        return self.embedded.user if self.embedded else None


class MemberUser(JsonableBaseObject):
    id: Optional[str] = None
    name: Optional[str] = None


class CreateMemberRequest(FrozenRequest):
    """
    Body for POST /v1/conversations/{id}/members.

    `user` may be given as a plain string: a well-formed USR- id is sent
    as {"id": ...}, anything else as {"name": ...}.
    """

    state: MemberState
    user: MemberUser
    member_id_inviting: Optional[str] = None
    from_: Optional[str] = Field(None, alias="from")
    knocking_id: Optional[UUID] = None
    channel: MemberChannel
    media: Optional[MemberMedia] = None

    @field_validator("user", mode="before")
    @classmethod
    def _user_ref(cls, v: Any) -> Any:
        if isinstance(v, str):
            if not v.strip():
                raise ValueError("Invalid user name or ID.")
            if v.startswith(USER_ID_PREFIX) and len(v) == len(USER_ID_PREFIX) + 36:
                return {"id": v}
            return {"name": v}
        return v


class MemberLeaveReason(JsonableBaseObject):
    code: Optional[str] = None
    text: Optional[str] = None


class UpdateMemberRequest(FrozenRequest):
    """Body for PATCH /v1/conversations/{cid}/members/{mid}; the ids are path-only."""

    conversation_id: str = Field(exclude=True)
    member_id: str = Field(exclude=True)
    state: MemberState
    from_: Optional[str] = Field(None, alias="from")
    reason: Optional[MemberLeaveReason] = None

    @field_validator("conversation_id")
    @classmethod
    def _conversation_id(cls, v: str) -> str:
        return validate_conversation_id(v)

    @field_validator("member_id")
    @classmethod
    def _member_id(cls, v: str) -> str:
        return validate_member_id(v)

    @field_validator("state")
    @classmethod
    def _left_or_joined(cls, v: MemberState) -> MemberState:
        if v not in (MemberState.LEFT, MemberState.JOINED):
            raise ValueError("State must be either LEFT or JOINED")
        return v

    @model_validator(mode="after")
    def _reason_only_when_leaving(self):
        if self.reason is not None and self.state != MemberState.LEFT:
            raise ValueError("A reason can only be given when the state is LEFT")
        return self


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


class EventType(str, Enum):
    AUDIO_SAY = "audio:say"
    AUDIO_SAY_STOP = "audio:say:stop"
    AUDIO_SAY_DONE = "audio:say:done"
    AUDIO_PLAY = "audio:play"
    AUDIO_PLAY_STOP = "audio:play:stop"
    AUDIO_PLAY_DONE = "audio:play:done"
    AUDIO_RECORD = "audio:record"
    AUDIO_RECORD_STOP = "audio:record:stop"
    AUDIO_RECORD_DONE = "audio:record:done"
    AUDIO_DTMF = "audio:dtmf"
    AUDIO_MUTE_ON = "audio:mute:on"
    AUDIO_MUTE_OFF = "audio:mute:off"
    AUDIO_EARMUFF_ON = "audio:earmuff:on"
    AUDIO_EARMUFF_OFF = "audio:earmuff:off"
    AUDIO_SPEAKING_ON = "audio:speaking:on"
    AUDIO_SPEAKING_OFF = "audio:speaking:off"
    MESSAGE = "message"
    MESSAGE_SUBMITTED = "message:submitted"
    MESSAGE_DELIVERED = "message:delivered"
    MESSAGE_SEEN = "message:seen"
    MESSAGE_REJECTED = "message:rejected"
    MESSAGE_UNDELIVERABLE = "message:undeliverable"
    EPHEMERAL = "ephemeral"
    CUSTOM = "custom"
    MEMBER_INVITED = "member:invited"
    MEMBER_JOINED = "member:joined"
    MEMBER_LEFT = "member:left"
    MEMBER_MEDIA = "member:media"
    CONVERSATION_UPDATED = "conversation:updated"
    LEG_STATUS_UPDATE = "leg:status:update"
    RTC_HANGUP = "rtc:hangup"


class _EventEmbedded(JsonableBaseObject):
    from_user: Optional[User] = None
    from_member: Optional[Member] = None


class Event(JsonableBaseObject):
    """
    A conversation event. `type` is kept as sent; custom events use
    "custom:<name>". `event_type` gives the known enum, or None.
    """

    id: Optional[int] = None
    type: Optional[str] = None
    from_: Optional[str] = Field(None, alias="from")
    body: Optional[Any] = None
    timestamp: Optional[datetime] = None
    embedded: Optional[_EventEmbedded] = Field(None, alias="_embedded")
    links: Optional[HalLinks] = Field(None, alias="_links")

    @property
    def event_type(self) -> Optional[EventType]:
        try:
            return EventType(self.type) if self.type else None
        except ValueError:
            return None


class CreateEventRequest(FrozenRequest):
    type: str = Field(min_length=1, max_length=100)
    from_: str = Field(alias="from")
    body: Optional[Dict[str, Any]] = None

    @field_validator("from_")
    @classmethod
    def _from_member(cls, v: str) -> str:
        return validate_member_id(v)


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


class ListConversationsRequest(CursorFilter):
    pass


class MembersFilter(QueryFilter):
    page_size: Optional[int] = Field(None, ge=1, le=100)
    order: Optional[SortOrder] = None
    cursor: Optional[str] = None


class UserConversationsOrderBy(str, Enum):
    CREATED = "created"
    CUSTOM = "custom"


class ListUserConversationsRequest(MembersFilter):
    state: Optional[MemberState] = None
    order_by: Optional[UserConversationsOrderBy] = None
    include_custom_data: Optional[bool] = None
    date_start: Optional[datetime] = None


class ListEventsRequest(MembersFilter):
    start_id: Optional[int] = Field(None, ge=0)
    end_id: Optional[int] = Field(None, ge=0)
    event_type: Optional[str] = None
    exclude_deleted_events: Optional[bool] = None

    @model_validator(mode="after")
    def _id_range(self):
        if self.start_id is not None and self.end_id is not None and self.start_id > self.end_id:
            raise ValueError("start_id cannot be greater than end_id")
        return self


# ---------------------------------------------------------------------------
# Pages
# ---------------------------------------------------------------------------


class _ConversationsEmbedded(JsonableBaseObject):
    conversations: Optional[List[Conversation]] = None


class ListConversationsResponse(HalPageResponse):
    embedded: Optional[_ConversationsEmbedded] = Field(None, alias="_embedded")


class UserConversationMember(JsonableBaseObject):
    id: Optional[str] = None
    state: LenientMemberState = None


class UserConversation(Conversation):
    member: Optional[UserConversationMember] = Field(None, alias="_embedded")


class _UserConversationsEmbedded(JsonableBaseObject):
    conversations: Optional[List[UserConversation]] = None


class ListUserConversationsResponse(HalPageResponse):
    embedded: Optional[_UserConversationsEmbedded] = Field(None, alias="_embedded")


class _MembersEmbedded(JsonableBaseObject):
    members: Optional[List[Member]] = None


class ListMembersResponse(HalPageResponse):
    embedded: Optional[_MembersEmbedded] = Field(None, alias="_embedded")


class ListEventsResponse(HalPageResponse):
    """Unlike the other pages, `_embedded` here is the event array itself."""

    embedded: Optional[List[Event]] = Field(None, alias="_embedded")
