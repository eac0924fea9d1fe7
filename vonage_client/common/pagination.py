"""
vonage_client/common/pagination.py

WHAT THIS FILE IS FOR
---------------------
List filters that flatten into query parameters, and the HAL envelope
the list endpoints answer with.

QUERY PARAMETER RULES
---------------------
- A field left as None produces NO parameter (absent, never empty)
- Datetimes are UTC instants truncated to seconds: 2024-01-31T09:15:00Z
- Enums are sent by value, booleans as "true" / "false"
- List values become repeated parameters (requests handles the encoding)

HAL UNWRAPPING
--------------
Callers usually want the embedded collection, not the envelope.
`embedded_collection` returns:
- None  when the response has no `_embedded` or no such key
- []    when the key is present with an empty array
The two cases are kept distinct.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qs, urlparse

from pydantic import BaseModel, ConfigDict, Field, model_validator

from vonage_client.common.schemas import JsonableBaseObject


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


def format_instant(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _param_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return format_instant(value)
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return [_param_value(v) for v in value]
    return str(value)


class QueryFilter(BaseModel):
    """Base for immutable list filters."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")

    def make_params(self) -> Dict[str, Any]:
        raw = self.model_dump(by_alias=True, exclude_none=True)
        return {key: _param_value(value) for key, value in raw.items()}


class HalFilterRequest(QueryFilter):
    page: Optional[int] = Field(None, ge=1)
    page_size: Optional[int] = Field(None, ge=1, le=1000)
    order: Optional[SortOrder] = None


class DateRangeMixin(BaseModel):
    """Rejects ranges whose start is after their end."""

    @model_validator(mode="after")
    def _check_date_range(self):
        start = getattr(self, "date_start", None) or getattr(self, "start_date", None)
        end = getattr(self, "date_end", None) or getattr(self, "end_date", None)
        if start is not None and end is not None and _aware(start) > _aware(end):
            raise ValueError("Start date cannot be later than end date")
        return self


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class CursorFilter(DateRangeMixin, QueryFilter):
    """Cursor-paged lists (conversations, users, members, events)."""

    page_size: Optional[int] = Field(None, ge=1, le=100)
    order: Optional[SortOrder] = None
    cursor: Optional[str] = None
    date_start: Optional[datetime] = None
    date_end: Optional[datetime] = None


# ---------------------------------------------------------------------------
# HAL envelope
# ---------------------------------------------------------------------------


class HalLink(JsonableBaseObject):
    href: Optional[str] = None


class HalLinks(JsonableBaseObject):
    first: Optional[HalLink] = None
    self_: Optional[HalLink] = Field(None, alias="self")
    prev: Optional[HalLink] = None
    next: Optional[HalLink] = None
    last: Optional[HalLink] = None


def _cursor_of(link: Optional[HalLink]) -> Optional[str]:
    if link is None or not link.href:
        return None
    values = parse_qs(urlparse(link.href).query).get("cursor")
    return values[0] if values else None


class HalPageResponse(JsonableBaseObject):
    """
    Common HAL page envelope.

    Subclasses declare `embedded: Optional[<Embedded>] = Field(None, alias="_embedded")`.
    """

    page: Optional[int] = None
    page_size: Optional[int] = None
    total_pages: Optional[int] = None
    total_items: Optional[int] = None
    links: Optional[HalLinks] = Field(None, alias="_links")

    @property
    def next_cursor(self) -> Optional[str]:
        return _cursor_of(self.links.next) if self.links else None

    @property
    def prev_cursor(self) -> Optional[str]:
        return _cursor_of(self.links.prev) if self.links else None


def embedded_collection(page: Optional[HalPageResponse], key: str) -> Optional[List[Any]]:
    embedded = getattr(page, "embedded", None) if page is not None else None
    if embedded is None:
        return None
    return getattr(embedded, key, None)
