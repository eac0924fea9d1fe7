# -------------------------------------------------------------------
# vonage_client/common/schemas.py
#
# WHAT THIS FILE IS FOR
# --------------------
# Shared pydantic building blocks for every request / response DTO
# in the library.
#
# KEY DESIGN DECISION
# -------------------
# Server payloads are never rejected for carrying properties we do not
# model. Every DTO allows extra fields; they survive decoding (at any
# nesting depth) and are written back out, after the declared fields,
# when the object is serialized again.
#
# Wire names are set per field with alias=...; populate_by_name=True lets
# Python callers use the attribute names instead.
#
# Caller-side limits (lengths, E.164 numbers, URI schemes) guard what we
# send. They are skipped when decoding a payload the API produced
# (from_dict, from_json and every response body), which is validated with
# SERVER_PAYLOAD as its context.
#
# Serialization rules (to_dict / to_json):
#   - by alias
#   - None fields omitted entirely
#   - declared field order, then unknown properties
#
# WHAT THIS FILE IS NOT FOR
# ------------------------
# It does not know any specific API family and performs no I/O.
# -------------------------------------------------------------------

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, ValidationInfo

T = TypeVar("T", bound="JsonableBaseObject")
E = TypeVar("E", bound=Enum)

SERVER_PAYLOAD: Dict[str, Any] = {"server_payload": True}


def from_server(info: ValidationInfo) -> bool:
    return bool(info.context and info.context.get("server_payload"))


class JsonableBaseObject(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @property
    def unknown_properties(self) -> Dict[str, Any]:
        """Properties present in the decoded JSON that this type does not declare."""
        return dict(self.model_extra or {})

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)

    @classmethod
    def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
        return cls.model_validate(data, context=SERVER_PAYLOAD)

    @classmethod
    def from_json(cls: Type[T], text: str | bytes) -> T:
        return cls.model_validate_json(text, context=SERVER_PAYLOAD)


class FrozenRequest(JsonableBaseObject):
    """Caller-built request object: validated once at construction, immutable afterwards."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)


def _lenient(enum_cls: Type[E]):
    def _coerce(value: Any) -> Optional[E]:
        if value is None or isinstance(value, enum_cls):
            return value
        try:
            return enum_cls(value)
        except ValueError:
            return None

    return _coerce


def lenient_enum(enum_cls: Type[E]) -> Any:
    """
    Optional enum field type that decodes unrecognised values to None.

    The API adds statuses and event types over time; an unknown value must
    not make the whole payload undecodable.
    """
    return Annotated[Optional[enum_cls], BeforeValidator(_lenient(enum_cls))]


class ProblemDetail(JsonableBaseObject):
    """RFC 7807 error object, as embedded in webhooks (e.g. failed message status)."""

    type: Optional[str] = None
    title: Optional[str] = None
    detail: Optional[str] = None
    instance: Optional[str] = None
