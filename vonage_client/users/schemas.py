# -------------------------------------------------------------------
# vonage_client/users/schemas.py
#
# WHAT THIS FILE IS FOR
# --------------------
# User DTO (request body and response) and the cursor-paged list
# envelope returned by GET /v1/users.
#
# User IDs are "USR-" followed by a UUID; the server assigns them.
# -------------------------------------------------------------------

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import Field, ValidationInfo, field_validator

from vonage_client.common.pagination import CursorFilter, HalLinks, HalPageResponse
from vonage_client.common.schemas import JsonableBaseObject, from_server
from vonage_client.common.validation import check_length, validate_prefixed_id
from vonage_client.users.channels import Channels

USER_ID_PREFIX = "USR-"


def validate_user_id(value: str) -> str:
    return validate_prefixed_id(value, USER_ID_PREFIX, "user_id")


class UserProperties(JsonableBaseObject):
    custom_data: Optional[Dict[str, Any]] = None


class User(JsonableBaseObject):
    id: Optional[str] = None
    name: Optional[str] = None
    display_name: Optional[str] = None
    image_url: Optional[str] = None
    properties: Optional[UserProperties] = None
    channels: Optional[Channels] = None
    links: Optional[HalLinks] = Field(None, alias="_links")

    @field_validator("name")
    @classmethod
    def _name(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        return v if from_server(info) else check_length(v, "name", 1)

    @property
    def custom_data(self) -> Optional[Dict[str, Any]]:
        return self.properties.custom_data if self.properties else None


class ListUsersRequest(CursorFilter):
    name: Optional[str] = None


class _UsersEmbedded(JsonableBaseObject):
    users: Optional[List[User]] = None


class ListUsersResponse(HalPageResponse):
    embedded: Optional[_UsersEmbedded] = Field(None, alias="_embedded")
