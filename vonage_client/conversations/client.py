"""
vonage_client/conversations/client.py

WHAT THIS FILE IS FOR
---------------------
Façade for the Conversations API, JWT auth, rooted at {api_base_url}/v1.

    conversations   list / create / get / update (PUT) / delete
    user            list conversations a user is a member of
    members         list / get / create / update (PATCH)
    events          list / get / create / delete

Every id argument is checked for its prefix (CON- / MEM- / USR-) and
UUID suffix before a request is built.

The plain list_* methods return the first page (100 entries) unwrapped;
the *_page variants take a filter and return the HAL envelope.
"""

from __future__ import annotations

from typing import List, Optional

from vonage_client.common.endpoint import BODY_JSON, ResourceClient
from vonage_client.common.exceptions import ConversationsResponseException
from vonage_client.common.pagination import embedded_collection
from vonage_client.conversations.schemas import (
    Conversation,
    CreateEventRequest,
    CreateMemberRequest,
    Event,
    ListConversationsRequest,
    ListConversationsResponse,
    ListEventsRequest,
    ListEventsResponse,
    ListMembersResponse,
    ListUserConversationsRequest,
    ListUserConversationsResponse,
    Member,
    MembersFilter,
    UpdateMemberRequest,
    UserConversation,
    validate_conversation_id,
    validate_member_id,
)
from vonage_client.users.schemas import validate_user_id
from vonage_client.utils.auth import AuthCollection, JwtAuth
from vonage_client.utils.http_client import HttpClient

DEFAULT_PAGE_SIZE = 100

_CONVERSATION = "/conversations/{conversation_id}"
_MEMBERS = _CONVERSATION + "/members"
_EVENTS = _CONVERSATION + "/events"


class ConversationsClient(ResourceClient):
    AUTH_METHODS = (JwtAuth,)
    EXCEPTION_TYPE = ConversationsResponseException

    def __init__(self, http: HttpClient, auth: AuthCollection, base_url: str) -> None:
        super().__init__(http, auth, f"{base_url.rstrip('/')}/v1")

        self._list_conversations = self._endpoint("GET", "/conversations", response_type=ListConversationsResponse)
        self._create_conversation = self._endpoint(
            "POST", "/conversations", body=BODY_JSON, response_type=Conversation
        )
        self._get_conversation = self._endpoint("GET", _CONVERSATION, response_type=Conversation)
        self._update_conversation = self._endpoint("PUT", _CONVERSATION, body=BODY_JSON, response_type=Conversation)
        self._delete_conversation = self._endpoint("DELETE", _CONVERSATION)

        self._list_user_conversations = self._endpoint(
            "GET", "/users/{user_id}/conversations", response_type=ListUserConversationsResponse
        )

        self._list_members = self._endpoint("GET", _MEMBERS, response_type=ListMembersResponse)
        self._get_member = self._endpoint("GET", _MEMBERS + "/{member_id}", response_type=Member)
        self._create_member = self._endpoint("POST", _MEMBERS, body=BODY_JSON, response_type=Member)
        self._update_member = self._endpoint("PATCH", _MEMBERS + "/{member_id}", body=BODY_JSON, response_type=Member)

        self._list_events = self._endpoint("GET", _EVENTS, response_type=ListEventsResponse)
        self._get_event = self._endpoint("GET", _EVENTS + "/{event_id}", response_type=Event)
        self._create_event = self._endpoint("POST", _EVENTS, body=BODY_JSON, response_type=Event)
        self._delete_event = self._endpoint("DELETE", _EVENTS + "/{event_id}")

    # ------------------------------------------------------------------
    # Conversations
    # ------------------------------------------------------------------
    def list_conversations(self) -> Optional[List[Conversation]]:
        page = self.list_conversations_page(ListConversationsRequest(page_size=DEFAULT_PAGE_SIZE))
        return embedded_collection(page, "conversations")

    def list_conversations_page(self, request: Optional[ListConversationsRequest] = None) -> ListConversationsResponse:
        return self._list_conversations.execute(query=request)

    def create_conversation(self, conversation: Optional[Conversation] = None) -> Conversation:
        return self._create_conversation.execute(conversation or Conversation())

    def get_conversation(self, conversation_id: str) -> Conversation:
        return self._get_conversation.execute(path=_conversation_path(conversation_id))

    def update_conversation(self, conversation_id: str, conversation: Conversation) -> Conversation:
        if conversation is None:
            raise ValueError("conversation is required")
        return self._update_conversation.execute(conversation, path=_conversation_path(conversation_id))

    def delete_conversation(self, conversation_id: str) -> None:
        self._delete_conversation.execute(path=_conversation_path(conversation_id))

    # ------------------------------------------------------------------
    # User conversations
    # ------------------------------------------------------------------
    def list_user_conversations(self, user_id: str) -> Optional[List[UserConversation]]:
        page = self.list_user_conversations_page(
            user_id, ListUserConversationsRequest(page_size=DEFAULT_PAGE_SIZE)
        )
        return embedded_collection(page, "conversations")

    def list_user_conversations_page(
        self, user_id: str, request: Optional[ListUserConversationsRequest] = None
    ) -> ListUserConversationsResponse:
        return self._list_user_conversations.execute(path={"user_id": validate_user_id(user_id)}, query=request)

    # ------------------------------------------------------------------
    # Members
    # ------------------------------------------------------------------
    def list_members(self, conversation_id: str) -> Optional[List[Member]]:
        page = self.list_members_page(conversation_id, MembersFilter(page_size=DEFAULT_PAGE_SIZE))
        return embedded_collection(page, "members")

    def list_members_page(self, conversation_id: str, request: Optional[MembersFilter] = None) -> ListMembersResponse:
        return self._list_members.execute(path=_conversation_path(conversation_id), query=request)

    def get_member(self, conversation_id: str, member_id: str) -> Member:
        path = _conversation_path(conversation_id)
        path["member_id"] = validate_member_id(member_id)
        return self._get_member.execute(path=path)

    def create_member(self, conversation_id: str, request: CreateMemberRequest) -> Member:
        if request is None:
            raise ValueError("request is required")
        return self._create_member.execute(request, path=_conversation_path(conversation_id))

    def update_member(self, request: UpdateMemberRequest) -> Member:
        if request is None:
            raise ValueError("request is required")
        path = {"conversation_id": request.conversation_id, "member_id": request.member_id}
        return self._update_member.execute(request, path=path)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def list_events(self, conversation_id: str) -> Optional[List[Event]]:
        page = self.list_events_page(conversation_id, ListEventsRequest(page_size=DEFAULT_PAGE_SIZE))
        return page.embedded if page is not None else None

    def list_events_page(self, conversation_id: str, request: Optional[ListEventsRequest] = None) -> ListEventsResponse:
        return self._list_events.execute(path=_conversation_path(conversation_id), query=request)

    def get_event(self, conversation_id: str, event_id: int) -> Event:
        return self._get_event.execute(path=_event_path(conversation_id, event_id))

    def create_event(self, conversation_id: str, request: CreateEventRequest) -> Event:
        if request is None:
            raise ValueError("request is required")
        return self._create_event.execute(request, path=_conversation_path(conversation_id))

    def delete_event(self, conversation_id: str, event_id: int) -> None:
        self._delete_event.execute(path=_event_path(conversation_id, event_id))


def _conversation_path(conversation_id: str) -> dict:
    return {"conversation_id": validate_conversation_id(conversation_id)}


def _event_path(conversation_id: str, event_id: int) -> dict:
    if isinstance(event_id, bool) or not isinstance(event_id, int) or event_id < 0:
        raise ValueError(f"Invalid event_id '{event_id}': expected a non-negative integer")
    path = _conversation_path(conversation_id)
    path["event_id"] = event_id
    return path
