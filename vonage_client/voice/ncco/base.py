"""
vonage_client/voice/ncco/base.py

Base model for NCCO documents.

- snake_case attributes in Python, camelCase on the wire
- declared fields are written in order, then the discriminator ("action"
  for actions, "type" for endpoints), then any keys listed in AFTER_TAG;
  unset fields are omitted
- unknown keyword arguments are rejected; NCCOs are built by callers,
  so a misspelt option is a bug, not server data to preserve
"""

from __future__ import annotations

import json
from typing import Any, ClassVar, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, model_serializer, model_validator

from vonage_client.utils.json_naming_converter import snake_to_camel


class NccoModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=snake_to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)


class TaggedNccoModel(NccoModel):
    """NCCO object carrying a constant discriminator key."""

    TAG_KEY: ClassVar[str] = ""
    TAG: ClassVar[Optional[str]] = None
    # wire keys that follow the discriminator instead of preceding it
    AFTER_TAG: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="before")
    @classmethod
    def _strip_tag(cls, data: Any) -> Any:
        if isinstance(data, dict) and cls.TAG_KEY in data:
            data = dict(data)
            tag = data.pop(cls.TAG_KEY)
            if tag != cls.TAG:
                raise ValueError(f"{cls.__name__} expects {cls.TAG_KEY}='{cls.TAG}', got '{tag}'")
        return data

    @model_serializer(mode="wrap")
    def _insert_tag(self, handler):
        fields = handler(self)
        data = {k: v for k, v in fields.items() if k not in self.AFTER_TAG}
        data[self.TAG_KEY] = self.TAG
        data.update((k, v) for k, v in fields.items() if k in self.AFTER_TAG)
        return data
