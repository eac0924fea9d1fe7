# tests/test_users.py
from __future__ import annotations

import pytest
from pydantic import ValidationError

from conftest import _FakeHttp
from vonage_client.common.exceptions import UsersResponseException
from vonage_client.common.pagination import SortOrder
from vonage_client.users.channels import Channels, Pstn, Sip, Websocket, WebsocketContentType
from vonage_client.users.client import UsersClient
from vonage_client.users.schemas import ListUsersRequest, User, UserProperties
from vonage_client.utils.auth import AuthCollection

API = "https://api.nexmo.com"
USERS = f"{API}/v1/users"
USER_ID = "USR-d3e5a0a4-4e6a-4ed7-a48b-4f0d7e6b5d9a"

USER_BODY = {
    "id": USER_ID,
    "name": "my_user_name",
    "display_name": "My User Name",
    "image_url": "https://example.com/image.png",
    "properties": {"custom_data": {"custom_key": "custom_value"}},
    "channels": {
        "pstn": [{"number": "447700900000"}],
        "websocket": [
            {
                "uri": "wss://example.com/socket",
                "content-type": "audio/l16;rate=16000",
                "headers": {"customer_id": "ABC123"},
            }
        ],
        "messenger": [{"id": "12345abcd"}],
    },
    "_links": {"self": {"href": f"{USERS}/{USER_ID}"}},
}


@pytest.fixture
def users(fake_http: _FakeHttp, jwt_auth: AuthCollection) -> UsersClient:
    return UsersClient(fake_http, jwt_auth, API)


def test_user_decodes_channels_and_custom_data() -> None:
    user = User.from_dict(USER_BODY)

    assert user.custom_data == {"custom_key": "custom_value"}
    assert user.channels.pstn[0].number == "447700900000"
    assert user.channels.websocket[0].content_type is WebsocketContentType.L16_16K
    assert user.channels.messenger[0].id == "12345abcd"
    assert user.links.self_.href.endswith(USER_ID)


def test_channel_validation() -> None:
    assert Pstn(number="+44 7700 900000").number == "447700900000"
    with pytest.raises(ValidationError):
        Pstn(number="12")
    with pytest.raises(ValidationError):
        Websocket(uri="https://example.com")


def test_user_body_omits_unset_fields() -> None:
    user = User(
        name="alice",
        properties=UserProperties(custom_data={"tier": "gold"}),
        channels=Channels(sip=[Sip(uri="sip:alice@example.com", username="alice")]),
    )

    assert user.to_dict() == {
        "name": "alice",
        "properties": {"custom_data": {"tier": "gold"}},
        "channels": {"sip": [{"uri": "sip:alice@example.com", "username": "alice"}]},
    }


def test_create_user_without_arguments_sends_empty_object(users: UsersClient, fake_http: _FakeHttp) -> None:
    fake_http.respond(201, {"id": USER_ID, "name": "USR-generated"})

    created = users.create_user()

    call = fake_http.last
    assert call.method == "POST"
    assert call.url == USERS
    assert call.json_body == {}
    assert call.headers["Authorization"].startswith("Bearer ")
    assert created.id == USER_ID


def test_get_user(users: UsersClient, fake_http: _FakeHttp) -> None:
    fake_http.respond(200, USER_BODY)

    user = users.get_user(USER_ID)

    assert fake_http.last.url == f"{USERS}/{USER_ID}"
    assert user.display_name == "My User Name"


@pytest.mark.parametrize("user_id", ["", "USR-123", "CON-d3e5a0a4-4e6a-4ed7-a48b-4f0d7e6b5d9a", "USR-not-a-uuid-at-all-but-long-enough!!"])
def test_user_id_is_validated(users: UsersClient, fake_http: _FakeHttp, user_id: str) -> None:
    with pytest.raises(ValueError):
        users.get_user(user_id)
    assert fake_http.calls == []


def test_update_user_patches(users: UsersClient, fake_http: _FakeHttp) -> None:
    fake_http.respond(200, {**USER_BODY, "display_name": "Renamed"})

    updated = users.update_user(USER_ID, User(display_name="Renamed"))

    assert fake_http.last.method == "PATCH"
    assert fake_http.last.json_body == {"display_name": "Renamed"}
    assert updated.display_name == "Renamed"

    with pytest.raises(ValueError):
        users.update_user(USER_ID, None)


def test_delete_user(users: UsersClient, fake_http: _FakeHttp) -> None:
    fake_http.respond(204)

    assert users.delete_user(USER_ID) is None
    assert fake_http.last.method == "DELETE"


def test_list_users_unwraps_first_page(users: UsersClient, fake_http: _FakeHttp) -> None:
    fake_http.respond(
        200,
        {
            "page_size": 10,
            "_embedded": {"users": [{"id": USER_ID, "name": "my_user_name"}]},
            "_links": {
                "first": {"href": f"{USERS}?order=desc&page_size=10"},
                "self": {"href": f"{USERS}?order=desc&page_size=10&cursor=QAuYbTXFALruTxAIRAKiHvdCAqJQjTuYkDNhN9PYWcDajgUTgd9lQPo%3D"},
                "next": {"href": f"{USERS}?order=desc&page_size=10&cursor=Tw2iIH8ISR4SuJRJUrK9xC78rhfI10HHRKOZ20zBN9A8SDiczcOqBj8%3D"},
            },
        },
    )

    result = users.list_users()

    assert [u.id for u in result] == [USER_ID]
    assert fake_http.last.params is None


def test_list_users_page_query_and_cursor(users: UsersClient, fake_http: _FakeHttp) -> None:
    fake_http.respond(
        200,
        {
            "page_size": 2,
            "_embedded": {"users": []},
            "_links": {"next": {"href": f"{USERS}?page_size=2&cursor=abc%3D"}},
        },
    )

    page = users.list_users_page(ListUsersRequest(page_size=2, order=SortOrder.ASC, name="alice"))

    assert fake_http.last.params == {"page_size": "2", "order": "asc", "name": "alice"}
    assert page.next_cursor == "abc="
    assert page.embedded.users == []


def test_list_users_without_embedded_is_none(users: UsersClient, fake_http: _FakeHttp) -> None:
    fake_http.respond(200, {"page_size": 10})

    assert users.list_users() is None


def test_server_user_outside_caller_limits_still_decodes(users: UsersClient, fake_http: _FakeHttp) -> None:
    fake_http.respond(
        200,
        {
            "_embedded": {
                "users": [
                    {
                        "id": "USR-1",
                        "name": "",
                        "channels": {
                            "sms": [{"number": "12345"}],
                            "websocket": [{"uri": "https://example.com/socket"}],
                        },
                    }
                ]
            }
        },
    )

    user = users.list_users()[0]

    assert user.id == "USR-1"
    assert user.channels.sms[0].number == "12345"
    assert user.channels.websocket[0].uri == "https://example.com/socket"


def test_caller_built_user_is_still_checked() -> None:
    with pytest.raises(ValidationError):
        User(name="")
    with pytest.raises(ValidationError):
        Channels(sms=[{"number": "12345"}])


def test_not_found_raises_users_exception(users: UsersClient, fake_http: _FakeHttp) -> None:
    fake_http.respond(
        404,
        {
            "title": "Not found.",
            "type": "https://developer.vonage.com/api/conversation#user:error:not-found",
            "detail": "User does not exist, or you do not have access.",
            "instance": "00a5916655d650e920ccf0daf40ef4ee",
        },
    )

    with pytest.raises(UsersResponseException) as exc_info:
        users.get_user(USER_ID)

    assert exc_info.value.status_code == 404
    assert exc_info.value.title == "Not found."
