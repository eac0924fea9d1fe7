"""
vonage_client/voice/ncco/ncco.py

An NCCO (call control object) is an ordered list of actions, serialized
as a JSON array. This is what an answer webhook returns, or what is sent
inline when creating or transferring a call.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List

from vonage_client.voice.ncco.actions import ACTION_TYPES, Action


class Ncco:
    def __init__(self, *actions: Action) -> None:
        self.actions: List[Action] = list(actions)

    @classmethod
    def of(cls, actions: Iterable[Action]) -> "Ncco":
        return cls(*actions)

    def add(self, action: Action) -> "Ncco":
        self.actions.append(action)
        return self

    def to_list(self) -> List[Dict[str, Any]]:
        return [action.to_dict() for action in self.actions]

    def to_json(self) -> str:
        return json.dumps(self.to_list(), separators=(",", ":"), ensure_ascii=False)

    @classmethod
    def from_list(cls, data: List[Dict[str, Any]]) -> "Ncco":
        """Decode a JSON array of actions; each element is dispatched on its "action" key."""
        actions = []
        for item in data:
            name = item.get("action")
            action_type = ACTION_TYPES.get(name)
            if action_type is None:
                raise ValueError(f"Unknown NCCO action '{name}'")
            actions.append(action_type.model_validate(item))
        return cls(*actions)

    @classmethod
    def from_json(cls, text: str) -> "Ncco":
        return cls.from_list(json.loads(text))

    def __iter__(self):
        return iter(self.actions)

    def __len__(self) -> int:
        return len(self.actions)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Ncco) and self.actions == other.actions

    __hash__ = None  # type: ignore[assignment]
