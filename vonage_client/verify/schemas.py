# -------------------------------------------------------------------
# vonage_client/verify/schemas.py
#
# WHAT THIS FILE IS FOR
# --------------------
# Request / response shapes of the legacy Verify API (/verify/*.json).
#
# Requests are form-encoded; each request object flattens itself with
# make_params(), leaving out every field that was not set.
#
# Responses always come back as HTTP 200. The outcome is in `status`:
# "0" means success, anything else is an API-level error described by
# `error_text`. Those results are returned to the caller as-is.
# -------------------------------------------------------------------

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Any, List, Optional

from pydantic import Field, field_validator, model_validator

from vonage_client.common.pagination import QueryFilter
from vonage_client.common.schemas import JsonableBaseObject, lenient_enum
from vonage_client.common.validation import sanitize_e164

STATUS_OK = "0"


class Workflow(IntEnum):
    SMS_TTS_TTS = 1
    SMS_SMS_TTS = 2
    TTS_TTS = 3
    SMS_SMS = 4
    SMS_TTS = 5
    SMS = 6
    TTS = 7


class LineType(str, Enum):
    ALL = "all"
    MOBILE = "mobile"
    LANDLINE = "landline"


class _BaseVerifyRequest(QueryFilter):
    number: str
    code_length: Optional[int] = None
    locale: Optional[str] = Field(None, alias="lg")
    country: Optional[str] = Field(None, min_length=2, max_length=2)
    pin_expiry: Optional[int] = Field(None, ge=60, le=3600)
    next_event_wait: Optional[int] = Field(None, ge=60, le=900)
    workflow_id: Optional[Workflow] = None

    @field_validator("number")
    @classmethod
    def _e164(cls, v: str) -> str:
        return sanitize_e164(v, "number")

    @field_validator("code_length")
    @classmethod
    def _four_or_six(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v not in (4, 6):
            raise ValueError("code_length must be 4 or 6.")
        return v

    @field_validator("locale")
    @classmethod
    def _dashed_locale(cls, v: Optional[str]) -> Optional[str]:
        return v.replace("_", "-").lower() if v else v


class VerifyRequest(_BaseVerifyRequest):
    brand: str = Field(min_length=1, max_length=18)
    sender_id: Optional[str] = Field(None, min_length=1, max_length=11)
    pin_code: Optional[str] = Field(None, min_length=4, max_length=10)
    type: Optional[LineType] = None


class Psd2Request(_BaseVerifyRequest):
    payee: str
    amount: float = Field(gt=0)

    @field_validator("payee")
    @classmethod
    def _payee(cls, v: str) -> str:
        if not v or len(v) > 18:
            raise ValueError("Payee is required and cannot exceed 18 characters.")
        return v


class CheckRequest(QueryFilter):
    request_id: str = Field(min_length=1, max_length=32)
    code: str = Field(min_length=4, max_length=10)
    ip_address: Optional[str] = None


class SearchRequest(QueryFilter):
    request_id: Optional[str] = None
    request_ids: Optional[List[str]] = Field(None, min_length=2, max_length=10)

    @model_validator(mode="after")
    def _exactly_one_form(self):
        if bool(self.request_id) == bool(self.request_ids):
            raise ValueError("Provide either one request_id or 2..10 request_ids")
        return self

    @classmethod
    def for_ids(cls, *request_ids: str) -> "SearchRequest":
        if len(request_ids) == 1:
            return cls(request_id=request_ids[0])
        return cls(request_ids=list(request_ids))


class ControlCommand(str, Enum):
    CANCEL = "cancel"
    TRIGGER_NEXT_EVENT = "trigger_next_event"


class ControlRequest(QueryFilter):
    request_id: str = Field(min_length=1)
    cmd: ControlCommand


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class _VerifyResult(JsonableBaseObject):
    status: Optional[str] = None
    error_text: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def _status_as_text(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v

    @property
    def is_successful(self) -> bool:
        return self.status == STATUS_OK


class VerifyResponse(_VerifyResult):
    request_id: Optional[str] = None
    network: Optional[str] = None


class CheckResponse(_VerifyResult):
    request_id: Optional[str] = None
    event_id: Optional[str] = None
    price: Optional[float] = None
    currency: Optional[str] = None
    estimated_price_messages_sent: Optional[float] = None


class ControlResponse(_VerifyResult):
    command: Optional[ControlCommand] = None


class VerifyDetailsStatus(str, Enum):
    IN_PROGRESS = "IN PROGRESS"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    EXPIRED = "EXPIRED"
    CANCELLED = "CANCELLED"


LenientVerifyDetailsStatus = lenient_enum(VerifyDetailsStatus)


class VerifyCheck(JsonableBaseObject):
    date_received: Optional[str] = None
    code: Optional[str] = None
    status: Optional[str] = None
    ip_address: Optional[str] = None


class VerifyEvent(JsonableBaseObject):
    type: Optional[str] = None
    id: Optional[str] = None


class VerifyDetails(JsonableBaseObject):
    request_id: Optional[str] = None
    account_id: Optional[str] = None
    number: Optional[str] = None
    sender_id: Optional[str] = None
    date_submitted: Optional[str] = None
    date_finalized: Optional[str] = None
    first_event_date: Optional[str] = None
    last_event_date: Optional[str] = None
    price: Optional[float] = None
    currency: Optional[str] = None
    status: LenientVerifyDetailsStatus = None
    checks: Optional[List[VerifyCheck]] = None
    events: Optional[List[VerifyEvent]] = None
    estimated_price_messages_sent: Optional[float] = None


class SearchVerifyResponse(_VerifyResult):
    """
    /verify/search answers with a bare details object for one id and a
    `verification_requests` array for several; both decode to the list form.
    """

    verification_requests: Optional[List[VerifyDetails]] = None

    @model_validator(mode="before")
    @classmethod
    def _single_to_list(cls, data: Any) -> Any:
        if isinstance(data, dict) and "verification_requests" not in data and "request_id" in data:
            return {"verification_requests": [data]}
        return data
