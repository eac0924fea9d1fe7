# tests/conftest.py
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from vonage_client.utils.auth import ApiKeyQueryParamsAuth, AuthCollection, BasicAuth, JwtAuth

API_KEY = "a1b2c3d4"
API_SECRET = "Secr3tValue"
APPLICATION_ID = "78d335fa-323d-0114-9c3d-d6f0d48968cf"


class _FakeResponse:
    """The subset of requests.Response that Endpoint.parse_response reads."""

    def __init__(self, status_code: int, body: Any = b"", reason: str = "OK"):
        self.status_code = status_code
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        self.content = body.encode("utf-8") if isinstance(body, str) else body
        self.reason = reason


@dataclass
class _Call:
    method: str
    url: str
    params: Optional[Dict[str, Any]]
    headers: Dict[str, str]
    json_body: Any
    data: Any
    files: Any


@dataclass
class _FakeHttp:
    """
    Stands in for HttpClient. Queue responses with `respond(...)`;
    every send() is recorded in `calls`.
    """

    responses: List[_FakeResponse] = field(default_factory=list)
    calls: List[_Call] = field(default_factory=list)

    def respond(self, status_code: int, body: Any = b"", reason: str = "OK") -> "_FakeHttp":
        self.responses.append(_FakeResponse(status_code, body, reason))
        return self

    def send(self, method, url, *, params=None, headers=None, json_body=None, data=None, files=None, timeout_seconds=None):
        self.calls.append(_Call(method, url, params, dict(headers or {}), json_body, data, files))
        if not self.responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        return self.responses.pop(0)

    @property
    def last(self) -> _Call:
        assert self.calls, "Expected at least one request"
        return self.calls[-1]

    def close(self) -> None:
        return None


@pytest.fixture(scope="session")
def private_key_pem() -> str:
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture
def fake_http() -> _FakeHttp:
    return _FakeHttp()


@pytest.fixture
def key_secret_auth() -> AuthCollection:
    return AuthCollection([BasicAuth(API_KEY, API_SECRET), ApiKeyQueryParamsAuth(API_KEY, API_SECRET)])


@pytest.fixture
def jwt_auth(private_key_pem: str) -> AuthCollection:
    return AuthCollection([JwtAuth(APPLICATION_ID, private_key_pem)])


@pytest.fixture
def all_auth(private_key_pem: str) -> AuthCollection:
    return AuthCollection.from_credentials(
        api_key=API_KEY,
        api_secret=API_SECRET,
        application_id=APPLICATION_ID,
        private_key=private_key_pem,
    )
