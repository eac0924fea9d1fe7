# tests/test_endpoint.py
from __future__ import annotations

import uuid
from typing import List, Optional

import pytest

from conftest import API_KEY, _FakeHttp
from vonage_client.common.endpoint import BODY_FORM, BODY_JSON, Endpoint
from vonage_client.common.exceptions import (
    MessageResponseException,
    ProactiveConnectResponseException,
    VonageApiResponseException,
    VonageResponseParseException,
    VonageUnacceptableAuthException,
)
from vonage_client.common.pagination import QueryFilter
from vonage_client.common.schemas import JsonableBaseObject
from vonage_client.messages.schemas import MessageResponse
from vonage_client.utils.auth import ApiKeyQueryParamsAuth, AuthCollection, BasicAuth, JwtAuth


class _Widget(JsonableBaseObject):
    name: Optional[str] = None
    size: Optional[int] = None


class _WidgetFilter(QueryFilter):
    colour: Optional[str] = None
    limit: Optional[int] = None


def _endpoint(http, auth, **kwargs) -> Endpoint:
    kwargs.setdefault("method", "GET")
    kwargs.setdefault("base_url", "https://api.example.com/")
    kwargs.setdefault("path", "/v1/widgets")
    kwargs.setdefault("auth_methods", (BasicAuth,))
    kwargs.setdefault("exception_type", VonageApiResponseException)
    return Endpoint(http=http, auth=auth, **kwargs)


# ---------------------------------------------------------------------------
# Request side
# ---------------------------------------------------------------------------


def test_path_placeholders_are_url_encoded(fake_http: _FakeHttp, key_secret_auth: AuthCollection) -> None:
    ep = _endpoint(fake_http, key_secret_auth, path="/v1/widgets/{widget_id}")
    request = ep.build_request(path={"widget_id": "a/b c#1"})

    assert request.url == "https://api.example.com/v1/widgets/a%2Fb%20c%231"


def test_json_body_sets_content_type_and_omits_none(fake_http: _FakeHttp, key_secret_auth: AuthCollection) -> None:
    ep = _endpoint(fake_http, key_secret_auth, method="post", body=BODY_JSON)
    request = ep.build_request(_Widget(name="w"))

    assert request.method == "POST"
    assert request.headers["Content-Type"] == "application/json"
    assert request.headers["Accept"] == "application/json"
    assert request.json_body == {"name": "w"}


def test_form_body_is_flattened_via_make_params(fake_http: _FakeHttp, key_secret_auth: AuthCollection) -> None:
    ep = _endpoint(fake_http, key_secret_auth, method="POST", body=BODY_FORM, auth_methods=(ApiKeyQueryParamsAuth,))
    request = ep.build_request(_WidgetFilter(colour="red", limit=3))

    assert request.data == {"colour": "red", "limit": "3"}
    assert request.params == {"api_key": API_KEY, "api_secret": "Secr3tValue"}
    assert "Content-Type" not in request.headers


def test_unset_query_fields_are_absent_not_empty(fake_http: _FakeHttp, key_secret_auth: AuthCollection) -> None:
    ep = _endpoint(fake_http, key_secret_auth)
    request = ep.build_request(query=_WidgetFilter(colour="blue"))

    assert request.params == {"colour": "blue"}
    assert "limit" not in request.params


def test_mapping_query_drops_none_values(fake_http: _FakeHttp, key_secret_auth: AuthCollection) -> None:
    ep = _endpoint(fake_http, key_secret_auth)
    request = ep.build_request(query={"a": "1", "b": None})

    assert request.params == {"a": "1"}


def test_unacceptable_auth_fails_before_any_request(fake_http: _FakeHttp, key_secret_auth: AuthCollection) -> None:
    ep = _endpoint(fake_http, key_secret_auth, auth_methods=(JwtAuth,))

    with pytest.raises(VonageUnacceptableAuthException):
        ep.execute()

    assert fake_http.calls == []


def test_endpoint_requires_auth_methods(fake_http: _FakeHttp, key_secret_auth: AuthCollection) -> None:
    with pytest.raises(ValueError):
        _endpoint(fake_http, key_secret_auth, auth_methods=())


# ---------------------------------------------------------------------------
# Response side
# ---------------------------------------------------------------------------


def test_202_message_uuid_is_parsed(fake_http: _FakeHttp, key_secret_auth: AuthCollection) -> None:
    message_uuid = str(uuid.uuid4())
    fake_http.respond(202, {"message_uuid": message_uuid})
    ep = _endpoint(fake_http, key_secret_auth, method="POST", response_type=MessageResponse)

    result = ep.execute()

    assert str(result.message_uuid) == message_uuid


def test_parsing_same_body_twice_gives_equal_results(fake_http: _FakeHttp, key_secret_auth: AuthCollection) -> None:
    body = {"name": "w", "size": 3, "colour": "red"}
    fake_http.respond(200, body).respond(200, body)
    ep = _endpoint(fake_http, key_secret_auth, response_type=_Widget)

    assert ep.execute() == ep.execute()


def test_unknown_properties_are_preserved(fake_http: _FakeHttp, key_secret_auth: AuthCollection) -> None:
    fake_http.respond(200, {"name": "w", "colour": "red", "nested": {"x": 1}})
    ep = _endpoint(fake_http, key_secret_auth, response_type=_Widget)

    widget = ep.execute()

    assert widget.name == "w"
    assert widget.unknown_properties == {"colour": "red", "nested": {"x": 1}}
    assert widget.to_dict() == {"name": "w", "colour": "red", "nested": {"x": 1}}


def test_list_response_type(fake_http: _FakeHttp, key_secret_auth: AuthCollection) -> None:
    fake_http.respond(200, [{"name": "a"}, {"name": "b"}])
    ep = _endpoint(fake_http, key_secret_auth, response_type=List[_Widget])

    assert [w.name for w in ep.execute()] == ["a", "b"]


def test_success_with_empty_body_is_no_result(fake_http: _FakeHttp, key_secret_auth: AuthCollection) -> None:
    fake_http.respond(204, b"")
    ep = _endpoint(fake_http, key_secret_auth, method="DELETE", response_type=_Widget)

    assert ep.execute() is None


def test_void_response_ignores_body(fake_http: _FakeHttp, key_secret_auth: AuthCollection) -> None:
    fake_http.respond(200, {"anything": True})
    ep = _endpoint(fake_http, key_secret_auth, method="POST")

    assert ep.execute() is None


def test_binary_response_returns_raw_bytes(fake_http: _FakeHttp, key_secret_auth: AuthCollection) -> None:
    fake_http.respond(200, b"a,b\n1,2\n")
    ep = _endpoint(fake_http, key_secret_auth, response_type=bytes, accept="text/csv")

    assert ep.execute() == b"a,b\n1,2\n"
    assert fake_http.last.headers["Accept"] == "text/csv"


def test_malformed_success_body_raises_parse_exception(fake_http: _FakeHttp, key_secret_auth: AuthCollection) -> None:
    fake_http.respond(200, "{malformed]")
    ep = _endpoint(fake_http, key_secret_auth, response_type=_Widget)

    with pytest.raises(VonageResponseParseException) as exc_info:
        ep.execute()

    assert exc_info.value.status_code == 200


def test_422_problem_detail_becomes_family_exception(fake_http: _FakeHttp, key_secret_auth: AuthCollection) -> None:
    body = {
        "type": "https://developer.vonage.com/api-errors/messages-olympus#1150",
        "title": "Invalid params",
        "detail": "The value of one or more parameters is invalid.",
        "instance": "bf0ca0bf927b3b52e3cb03217e1a1ddf",
        "invalid_parameters": [{"name": "to", "reason": "Invalid"}],
    }
    fake_http.respond(422, body, reason="Unprocessable Entity")
    ep = _endpoint(fake_http, key_secret_auth, method="POST", exception_type=MessageResponseException)

    with pytest.raises(MessageResponseException) as exc_info:
        ep.execute()

    exc = exc_info.value
    assert exc.status_code == 422
    assert exc.type == body["type"]
    assert exc.title == body["title"]
    assert exc.detail == body["detail"]
    assert exc.instance == body["instance"]
    assert exc.extra == {"invalid_parameters": [{"name": "to", "reason": "Invalid"}]}
    assert str(exc) == "422 (Invalid params): The value of one or more parameters is invalid."


def test_error_with_empty_body_keeps_status_code(fake_http: _FakeHttp, key_secret_auth: AuthCollection) -> None:
    fake_http.respond(503, b"", reason="Service Unavailable")
    ep = _endpoint(fake_http, key_secret_auth)

    with pytest.raises(VonageApiResponseException) as exc_info:
        ep.execute()

    assert exc_info.value.status_code == 503
    assert exc_info.value.title == "Service Unavailable"
    assert exc_info.value.detail is None
    assert str(exc_info.value) == "503 (Service Unavailable)"


def test_error_with_non_json_body_keeps_status_code(fake_http: _FakeHttp, key_secret_auth: AuthCollection) -> None:
    fake_http.respond(500, "<html>oops</html>", reason="Internal Server Error")
    ep = _endpoint(fake_http, key_secret_auth)

    with pytest.raises(VonageApiResponseException) as exc_info:
        ep.execute()

    assert exc_info.value.status_code == 500
    assert exc_info.value.extra == {}


def test_proactive_connect_errors_list_is_promoted() -> None:
    exc = ProactiveConnectResponseException.from_response(
        400,
        b'{"type":"t","title":"Bad Request","errors":["name is required"],"trace":"x"}',
    )

    assert exc.errors == ["name is required"]
    assert exc.extra == {"trace": "x"}


def test_exceptions_compare_by_value() -> None:
    body = b'{"title":"Not Found","detail":"missing"}'
    a = VonageApiResponseException.from_response(404, body)
    b = VonageApiResponseException.from_response(404, body)

    assert a == b
    assert a != VonageApiResponseException.from_response(410, body)
