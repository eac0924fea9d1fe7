# tests/test_auth.py
from __future__ import annotations

import base64

import jwt
import pytest

from conftest import API_KEY, API_SECRET, APPLICATION_ID
from vonage_client.common.exceptions import VonageUnacceptableAuthException
from vonage_client.utils.auth import ApiKeyQueryParamsAuth, AuthCollection, BasicAuth, JwtAuth


def test_basic_auth_sets_authorization_header() -> None:
    headers: dict = {}
    params: dict = {}
    BasicAuth(API_KEY, API_SECRET).apply(headers, params)

    expected = base64.b64encode(f"{API_KEY}:{API_SECRET}".encode()).decode()
    assert headers == {"Authorization": f"Basic {expected}"}
    assert params == {}


def test_query_params_auth_adds_key_and_secret_to_params() -> None:
    headers: dict = {}
    params: dict = {"existing": "1"}
    ApiKeyQueryParamsAuth(API_KEY, API_SECRET).apply(headers, params)

    assert headers == {}
    assert params == {"existing": "1", "api_key": API_KEY, "api_secret": API_SECRET}


def test_jwt_claims_and_signature(private_key_pem: str) -> None:
    auth = JwtAuth(APPLICATION_ID, private_key_pem)
    token = auth.generate_jwt(sub="alice")

    claims = jwt.decode(token, options={"verify_signature": False})
    assert jwt.get_unverified_header(token)["alg"] == "RS256"
    assert claims["application_id"] == APPLICATION_ID
    assert claims["sub"] == "alice"
    assert claims["exp"] - claims["iat"] == JwtAuth.TOKEN_TTL_SECONDS
    assert claims["jti"]


def test_jwt_tokens_are_unique_per_request(private_key_pem: str) -> None:
    auth = JwtAuth(APPLICATION_ID, private_key_pem)
    h1: dict = {}
    h2: dict = {}
    auth.apply(h1, {})
    auth.apply(h2, {})

    assert h1["Authorization"].startswith("Bearer ")
    assert h1["Authorization"] != h2["Authorization"]


def test_jwt_requires_application_id_and_key(private_key_pem: str) -> None:
    with pytest.raises(ValueError):
        JwtAuth("", private_key_pem)
    with pytest.raises(ValueError):
        JwtAuth(APPLICATION_ID, "")


def test_from_credentials_only_registers_complete_pairs(private_key_pem: str) -> None:
    only_key = AuthCollection.from_credentials(api_key=API_KEY)
    assert only_key.names() == []

    full = AuthCollection.from_credentials(
        api_key=API_KEY, api_secret=API_SECRET, application_id=APPLICATION_ID, private_key=private_key_pem
    )
    assert JwtAuth in full
    assert BasicAuth in full
    assert ApiKeyQueryParamsAuth in full


def test_select_walks_accepted_methods_in_declared_order(all_auth: AuthCollection) -> None:
    assert isinstance(all_auth.select([JwtAuth, BasicAuth]), JwtAuth)
    assert isinstance(all_auth.select([BasicAuth, JwtAuth]), BasicAuth)


def test_select_falls_back_to_next_configured_method(key_secret_auth: AuthCollection) -> None:
    assert isinstance(key_secret_auth.select([JwtAuth, BasicAuth]), BasicAuth)


def test_select_raises_when_nothing_matches(key_secret_auth: AuthCollection) -> None:
    with pytest.raises(VonageUnacceptableAuthException) as exc_info:
        key_secret_auth.select([JwtAuth])

    assert "jwt" in str(exc_info.value)
