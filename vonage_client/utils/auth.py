"""
vonage_client/utils/auth.py

WHAT THIS FILE IS FOR
---------------------
Authentication methods understood by the Vonage APIs, and the rule for
choosing one per request.

- JwtAuth:               Authorization: Bearer <RS256 JWT>   (application id + private key)
- BasicAuth:             Authorization: Basic base64(key:secret)
- ApiKeyQueryParamsAuth: ?api_key=...&api_secret=...        (legacy endpoints)

Each endpoint declares the auth classes it accepts, in order of preference.
AuthCollection.select() returns the first of those that the client has
configured.

WHAT THIS FILE IS NOT FOR
-------------------------
- Loading credentials (see utils/settings.py)
- Sending requests
- Verifying inbound webhook signatures
"""

from __future__ import annotations

import base64
import time
import uuid
from typing import Any, Dict, Iterable, Optional, Sequence, Type

import jwt
import structlog

from vonage_client.common.exceptions import VonageUnacceptableAuthException

logger = structlog.get_logger(__name__)


class AuthMethod:
    """Base class; `apply` mutates the outgoing headers / query params in place."""

    name = "auth"

    def apply(self, headers: Dict[str, str], params: Dict[str, Any]) -> None:
        raise NotImplementedError


class JwtAuth(AuthMethod):
    """
    Application-scoped bearer token.

    A fresh token is signed for every request; tokens live for
    TOKEN_TTL_SECONDS and carry a random `jti`.
    """

    name = "jwt"
    ALGORITHM = "RS256"
    TOKEN_TTL_SECONDS = 900

    def __init__(self, application_id: str, private_key: str) -> None:
        if not application_id:
            raise ValueError("application_id is required for JWT auth")
        if not private_key:
            raise ValueError("private_key is required for JWT auth")
        self.application_id = application_id
        self._private_key = private_key

    def generate_jwt(self, **extra_claims: Any) -> str:
        now = int(time.time())
        payload: Dict[str, Any] = {
            "application_id": self.application_id,
            "iat": now,
            "jti": str(uuid.uuid4()),
            "exp": now + self.TOKEN_TTL_SECONDS,
        }
        payload.update(extra_claims)
        token = jwt.encode(payload, self._private_key, algorithm=self.ALGORITHM)
        logger.debug("jwt_generated", application_id=self.application_id, jti=payload["jti"])
        return token

    def apply(self, headers: Dict[str, str], params: Dict[str, Any]) -> None:
        headers["Authorization"] = f"Bearer {self.generate_jwt()}"


class _ApiKeySecretAuth(AuthMethod):
    def __init__(self, api_key: str, api_secret: str) -> None:
        if not api_key or not api_secret:
            raise ValueError("api_key and api_secret are both required")
        self.api_key = api_key
        self.api_secret = api_secret


class BasicAuth(_ApiKeySecretAuth):
    name = "basic"

    def apply(self, headers: Dict[str, str], params: Dict[str, Any]) -> None:
        raw = f"{self.api_key}:{self.api_secret}".encode("utf-8")
        headers["Authorization"] = "Basic " + base64.b64encode(raw).decode("ascii")


class ApiKeyQueryParamsAuth(_ApiKeySecretAuth):
    name = "api_key_query_params"

    def apply(self, headers: Dict[str, str], params: Dict[str, Any]) -> None:
        params["api_key"] = self.api_key
        params["api_secret"] = self.api_secret


class AuthCollection:
    """The auth methods configured on a client, keyed by class."""

    def __init__(self, methods: Iterable[AuthMethod] = ()) -> None:
        self._methods: Dict[Type[AuthMethod], AuthMethod] = {}
        for method in methods:
            self.add(method)

    @classmethod
    def from_credentials(
        cls,
        *,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        application_id: Optional[str] = None,
        private_key: Optional[str] = None,
    ) -> "AuthCollection":
        methods: list[AuthMethod] = []
        if application_id and private_key:
            methods.append(JwtAuth(application_id, private_key))
        if api_key and api_secret:
            methods.append(BasicAuth(api_key, api_secret))
            methods.append(ApiKeyQueryParamsAuth(api_key, api_secret))
        return cls(methods)

    def add(self, method: AuthMethod) -> None:
        self._methods[type(method)] = method

    def get(self, auth_type: Type[AuthMethod]) -> Optional[AuthMethod]:
        return self._methods.get(auth_type)

    def __contains__(self, auth_type: object) -> bool:
        return auth_type in self._methods

    def names(self) -> list[str]:
        return [m.name for m in self._methods.values()]

    def select(self, accepted: Sequence[Type[AuthMethod]]) -> AuthMethod:
        for auth_type in accepted:
            method = self._methods.get(auth_type)
            if method is not None:
                return method
        raise VonageUnacceptableAuthException(
            available=self.names(),
            accepted=[a.name for a in accepted],
        )
