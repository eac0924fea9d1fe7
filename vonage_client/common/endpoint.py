"""
vonage_client/common/endpoint.py

WHAT THIS FILE IS FOR
---------------------
One `Endpoint` per API operation. It turns a request object into an HTTP
request and an HTTP response into a typed result or a typed exception.

CALL FLOW
---------
family client (e.g. UsersClient.get_user)
  → Endpoint.execute(body, path=..., query=...)
      → AuthCollection.select(accepted auth classes)
      → build_request()   → RequestDescriptor
      → HttpClient.send() → requests.Response
      → parse_response()  → result | family exception

REQUEST RULES
-------------
- URL = base URL + path template; `{placeholders}` are URL-encoded values
- body kind:
    json       → JsonableBaseObject / dict / list, Content-Type: application/json
    form       → object with make_params(), form-encoded
    multipart  → {"file": (name, bytes, mime)} style parts
    none       → no body
- query: mapping or object with make_params(); None values are dropped
- Accept: application/json unless the response is binary

RESPONSE RULES
--------------
- 2xx + response_type bytes     → raw body bytes (possibly empty)
- 2xx + empty body              → None
- 2xx + response_type None      → None (body ignored)
- 2xx otherwise                 → validated into response_type
- 2xx with undecodable body     → VonageResponseParseException
- anything else                 → exception_type.from_response(...)

WHAT THIS FILE IS NOT FOR
-------------------------
- Retries (no operation is retried here)
- Argument validation (done by the DTOs and the family clients)
- Network errors (requests exceptions propagate unchanged)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence, Type
from urllib.parse import quote

import requests
import structlog
from pydantic import TypeAdapter, ValidationError

from vonage_client.common.exceptions import (
    VonageApiResponseException,
    VonageResponseParseException,
)
from vonage_client.common.schemas import SERVER_PAYLOAD, JsonableBaseObject
from vonage_client.utils.auth import AuthCollection, AuthMethod
from vonage_client.utils.http_client import HttpClient

logger = structlog.get_logger(__name__)

JSON_CONTENT = "application/json"

BODY_JSON = "json"
BODY_FORM = "form"
BODY_MULTIPART = "multipart"
BODY_NONE = "none"


@dataclass
class RequestDescriptor:
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, Any] = field(default_factory=dict)
    json_body: Any = None
    data: Any = None
    files: Optional[Dict[str, Any]] = None


def _as_params(source: Any) -> Dict[str, Any]:
    if source is None:
        return {}
    if hasattr(source, "make_params"):
        source = source.make_params()
    return {k: v for k, v in dict(source).items() if v is not None}


def _as_json(body: Any) -> Any:
    if isinstance(body, JsonableBaseObject):
        return body.to_dict()
    if isinstance(body, (list, tuple)):
        return [_as_json(item) for item in body]
    return body


class Endpoint:
    """
    Declarative description of one REST operation.

    Args:
        http / auth: shared transport and configured credentials
        method: HTTP verb
        base_url: scheme + host (+ fixed prefix), no trailing slash
        path: path template, e.g. "/v1/users/{user_id}"
        auth_methods: accepted auth classes, most preferred first
        exception_type: family exception for non-2xx answers
        response_type: pydantic-compatible type, bytes, or None for Void
        body: one of BODY_JSON / BODY_FORM / BODY_MULTIPART / BODY_NONE
        accept: Accept header for the response
    """

    def __init__(
        self,
        *,
        http: HttpClient,
        auth: AuthCollection,
        method: str,
        base_url: str,
        path: str,
        auth_methods: Sequence[Type[AuthMethod]],
        exception_type: Type[VonageApiResponseException],
        response_type: Any = None,
        body: str = BODY_NONE,
        accept: Optional[str] = JSON_CONTENT,
    ) -> None:
        if not auth_methods:
            raise ValueError("An endpoint must accept at least one auth method")
        self.http = http
        self.auth = auth
        self.method = method.upper()
        self.base_url = base_url.rstrip("/")
        self.path = path
        self.auth_methods = tuple(auth_methods)
        self.exception_type = exception_type
        self.response_type = response_type
        self.body = body
        self.accept = accept
        self._adapter = (
            TypeAdapter(response_type)
            if response_type is not None and response_type is not bytes
            else None
        )

    # ------------------------------------------------------------------
    # Request side
    # ------------------------------------------------------------------
    def url_for(self, path: Optional[Mapping[str, Any]] = None) -> str:
        values = {k: quote(str(v), safe="") for k, v in (path or {}).items()}
        return self.base_url + self.path.format(**values)

    def build_request(
        self,
        body: Any = None,
        *,
        path: Optional[Mapping[str, Any]] = None,
        query: Any = None,
    ) -> RequestDescriptor:
        request = RequestDescriptor(method=self.method, url=self.url_for(path))
        request.params = _as_params(query)
        if self.accept:
            request.headers["Accept"] = self.accept

        if self.body == BODY_JSON and body is not None:
            request.headers["Content-Type"] = JSON_CONTENT
            request.json_body = _as_json(body)
        elif self.body == BODY_FORM and body is not None:
            request.data = _as_params(body)
        elif self.body == BODY_MULTIPART and body is not None:
            request.files = dict(body)

        method = self.auth.select(self.auth_methods)
        method.apply(request.headers, request.params)
        logger.debug(
            "vonage_request_prepared",
            method=request.method,
            url=request.url,
            auth=method.name,
        )
        return request

    # ------------------------------------------------------------------
    # Response side
    # ------------------------------------------------------------------
    def parse_response(self, response: requests.Response) -> Any:
        status = response.status_code
        content = response.content or b""

        if not 200 <= status < 300:
            exc = self.exception_type.from_response(status, content, getattr(response, "reason", None))
            logger.warning(
                "vonage_response_error",
                status=status,
                title=exc.title,
                exception=type(exc).__name__,
            )
            raise exc

        if self.response_type is bytes:
            return content
        if self.response_type is None or not content.strip():
            return None

        try:
            return self._adapter.validate_json(content, context=SERVER_PAYLOAD)
        except ValidationError as exc:
            logger.error("vonage_response_parse_failed", status=status, errors=exc.error_count())
            raise VonageResponseParseException(
                f"Failed to parse {status} response into {getattr(self.response_type, '__name__', self.response_type)}",
                status_code=status,
            ) from exc

    # ------------------------------------------------------------------
    # Both
    # ------------------------------------------------------------------
    def execute(
        self,
        body: Any = None,
        *,
        path: Optional[Mapping[str, Any]] = None,
        query: Any = None,
    ) -> Any:
        request = self.build_request(body, path=path, query=query)
        response = self.http.send(
            request.method,
            request.url,
            params=request.params or None,
            headers=request.headers,
            json_body=request.json_body,
            data=request.data,
            files=request.files,
        )
        return self.parse_response(response)


class ResourceClient:
    """
    Base for the per-family clients.

    Subclasses set AUTH_METHODS and EXCEPTION_TYPE and create their
    endpoints once, in __init__, through `_endpoint`.
    """

    AUTH_METHODS: Sequence[Type[AuthMethod]] = ()
    EXCEPTION_TYPE: Type[VonageApiResponseException] = VonageApiResponseException

    def __init__(self, http: HttpClient, auth: AuthCollection, base_url: str) -> None:
        self.http = http
        self.auth = auth
        self.base_url = base_url.rstrip("/")

    def _endpoint(self, method: str, path: str, **kwargs: Any) -> Endpoint:
        kwargs.setdefault("base_url", self.base_url)
        kwargs.setdefault("auth_methods", self.AUTH_METHODS)
        kwargs.setdefault("exception_type", self.EXCEPTION_TYPE)
        return Endpoint(http=self.http, auth=self.auth, method=method, path=path, **kwargs)
