# -------------------------------------------------------------------
# vonage_client/proactive_connect/schemas.py
#
# WHAT THIS FILE IS FOR
# --------------------
# DTOs for the Proactive Connect bulk API: contact lists, their items,
# and the event log produced by runs.
#
# ContactsList is used both as the create/update body and as the
# decoded response, so only its caller-side limits are enforced here:
#   - tags: at most 10, each 1..15 characters
#   - name: 1..255 characters when present
#   - description: at most 1024 characters
# Decoded responses skip these checks.
#
# Datasource is a tagged union on "type" (manual | salesforce). A
# datasource with an unrecognised type decodes to None instead of
# failing the whole list.
# -------------------------------------------------------------------

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from uuid import UUID

from pydantic import BeforeValidator, Field, ValidationInfo, field_validator

from vonage_client.common.pagination import (
    DateRangeMixin,
    HalPageResponse,
    QueryFilter,
    SortOrder,
)
from vonage_client.common.schemas import JsonableBaseObject, from_server, lenient_enum
from vonage_client.common.validation import check_length

MAX_TAGS = 10
MAX_TAG_LENGTH = 15
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 1000


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------


class ManualDatasource(JsonableBaseObject):
    type: Literal["manual"] = "manual"


class SalesforceDatasource(JsonableBaseObject):
    type: Literal["salesforce"] = "salesforce"
    integration_id: Optional[str] = None
    soql: Optional[str] = None


_DATASOURCE_TYPES = {"manual", "salesforce"}


def _known_datasource(value: Any) -> Any:
    if isinstance(value, dict) and value.get("type") not in _DATASOURCE_TYPES:
        return None
    return value


Datasource = Annotated[
    Optional[Annotated[Union[ManualDatasource, SalesforceDatasource], Field(discriminator="type")]],
    BeforeValidator(_known_datasource),
]


class ListAttribute(JsonableBaseObject):
    name: Optional[str] = None
    alias: Optional[str] = None
    key: Optional[bool] = None


class SyncStatusValue(str, Enum):
    CONFIGURED = "configured"
    COMPLETED = "completed"
    ERROR = "error"
    PAUSED = "paused"
    DRAFT = "draft"


LenientSyncStatusValue = lenient_enum(SyncStatusValue)


class SyncStatus(JsonableBaseObject):
    value: LenientSyncStatusValue = None
    details: Optional[str] = None
    metadata_modified: Optional[bool] = None
    data_modified: Optional[bool] = None
    dirty: Optional[bool] = None


class ContactsList(JsonableBaseObject):
    name: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None
    attributes: Optional[List[ListAttribute]] = None
    datasource: Datasource = None
    id: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    items_count: Optional[int] = None
    sync_status: Optional[SyncStatus] = None

    @field_validator("name")
    @classmethod
    def _name_length(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        return v if from_server(info) else check_length(v, "name", 1, 255)

    @field_validator("description")
    @classmethod
    def _description_length(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        return v if from_server(info) else check_length(v, "description", 0, 1024)

    @field_validator("tags")
    @classmethod
    def _tag_limits(cls, v: Optional[List[str]], info: ValidationInfo) -> Optional[List[str]]:
        if v is None or from_server(info):
            return v
        if len(v) > MAX_TAGS:
            raise ValueError(f"At most {MAX_TAGS} tags are allowed (got {len(v)})")
        for tag in v:
            if not 1 <= len(tag) <= MAX_TAG_LENGTH:
                raise ValueError(f"Tag '{tag}' must be between 1 and {MAX_TAG_LENGTH} characters")
        return v


class ListItem(JsonableBaseObject):
    id: Optional[UUID] = None
    list_id: Optional[UUID] = None
    data: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UploadListItemsResponse(JsonableBaseObject):
    inserted: Optional[int] = None
    updated: Optional[int] = None
    deleted: Optional[int] = None


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


class EventType(str, Enum):
    ACTION_CALL_SUCCEEDED = "action-call-succeeded"
    ACTION_CALL_FAILED = "action-call-failed"
    RECIPIENT_RESPONSE = "recipient-response"
    RUN_STARTED = "run-started"
    RUN_FINISHED = "run-finished"
    RUN_PAUSED = "run-paused"
    RUN_ITEM_SKIPPED = "run-item-skipped"
    RUN_ITEM_FAILED = "run-item-failed"
    RUN_ITEM_SUBMITTED = "run-item-submitted"
    INCOMING_MESSAGE_SUBMITTED = "incoming-message-submitted"


class SourceType(str, Enum):
    ACTION_RUN_ITEM = "action-run-item"
    EVENT_HANDLER = "event-handler"


LenientEventType = lenient_enum(EventType)


class Event(JsonableBaseObject):
    id: Optional[UUID] = None
    job_id: Optional[UUID] = None
    run_id: Optional[UUID] = None
    run_item_id: Optional[UUID] = None
    action_id: Optional[UUID] = None
    invocation_id: Optional[UUID] = None
    recipient_id: Optional[str] = None
    source_context: Optional[str] = Field(None, alias="src_ctx")
    type: LenientEventType = None
    occurred_at: Optional[datetime] = Field(None, alias="occured_at")
    data: Any = None


class ListEventsFilter(DateRangeMixin, QueryFilter):
    page: int = Field(DEFAULT_PAGE, ge=1)
    page_size: int = Field(DEFAULT_PAGE_SIZE, ge=1, le=1000)
    order: Optional[SortOrder] = None
    run_id: Optional[UUID] = None
    run_item_id: Optional[UUID] = None
    invocation_id: Optional[UUID] = None
    action_id: Optional[UUID] = None
    trace_id: Optional[UUID] = None
    recipient_id: Optional[str] = None
    source_context: Optional[str] = Field(None, alias="src_ctx")
    source_type: Optional[SourceType] = Field(None, alias="src_type")
    date_start: Optional[datetime] = None
    date_end: Optional[datetime] = None


# ---------------------------------------------------------------------------
# Pages
# ---------------------------------------------------------------------------


class _ListsEmbedded(JsonableBaseObject):
    lists: Optional[List[ContactsList]] = None


class ListListsResponse(HalPageResponse):
    embedded: Optional[_ListsEmbedded] = Field(None, alias="_embedded")


class _ItemsEmbedded(JsonableBaseObject):
    items: Optional[List[ListItem]] = None


class ListItemsResponse(HalPageResponse):
    embedded: Optional[_ItemsEmbedded] = Field(None, alias="_embedded")


class _EventsEmbedded(JsonableBaseObject):
    events: Optional[List[Event]] = None


class ListEventsResponse(HalPageResponse):
    embedded: Optional[_EventsEmbedded] = Field(None, alias="_embedded")
