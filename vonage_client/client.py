"""
vonage_client/client.py

WHAT THIS FILE IS FOR
---------------------
`VonageClient` is the entry point of the library. It wires together:

- Settings        (utils/settings.py, YAML + VONAGE_CLIENT_* env)
- HttpClient      (one shared requests.Session, one timeout)
- AuthCollection  (JWT / Basic / API-key query params, whichever are configured)

and exposes one façade per API family:

    client.messages            MessagesClient
    client.verify              VerifyClient
    client.subaccounts         SubaccountsClient   (needs api_key)
    client.proactive_connect   ProactiveConnectClient
    client.conversations       ConversationsClient
    client.users               UsersClient

Usage:
    client = VonageClient(application_id="...", private_key_path="private.key")
    client.messages.send_message(SmsTextRequest(from_="447900000009", to="12002009000", text="Hi"))

PRECEDENCE
----------
Explicit constructor arguments > Settings (env > YAML > defaults).

WHAT THIS FILE IS NOT FOR
-------------------------
- No request logic; each family façade owns its endpoints
- No background work; every call blocks on one HTTP round-trip
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import structlog

from vonage_client.conversations.client import ConversationsClient
from vonage_client.messages.client import MessagesClient
from vonage_client.proactive_connect.client import ProactiveConnectClient
from vonage_client.subaccounts.client import SubaccountsClient
from vonage_client.users.client import UsersClient
from vonage_client.utils.auth import AuthCollection, JwtAuth
from vonage_client.utils.http_client import HttpClient
from vonage_client.utils.settings import Settings, base_url, get_settings
from vonage_client.verify.client import VerifyClient

logger = structlog.get_logger(__name__)


class VonageClient:
    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        application_id: Optional[str] = None,
        private_key: Optional[str] = None,
        private_key_path: Union[str, Path, None] = None,
        settings: Optional[Settings] = None,
        http: Optional[HttpClient] = None,
    ) -> None:
        self.settings = settings or get_settings()
        s = self.settings

        self.api_key = api_key or s.api_key
        api_secret = api_secret or s.api_secret
        application_id = application_id or s.application_id
        if private_key is None and private_key_path is not None:
            private_key = Path(private_key_path).read_text(encoding="utf-8")
        if private_key is None:
            private_key = s.read_private_key()

        self.auth = AuthCollection.from_credentials(
            api_key=self.api_key,
            api_secret=api_secret,
            application_id=application_id,
            private_key=private_key,
        )
        self.http = http or HttpClient(timeout_seconds=s.http_timeout_seconds, user_agent=s.user_agent)

        api = base_url(s.api_base_url)
        self.messages = MessagesClient(self.http, self.auth, api, base_url(s.messages_sandbox_base_url))
        self.verify = VerifyClient(self.http, self.auth, api)
        self.proactive_connect = ProactiveConnectClient(self.http, self.auth, base_url(s.api_eu_base_url))
        self.conversations = ConversationsClient(self.http, self.auth, api)
        self.users = UsersClient(self.http, self.auth, api)
        self._api_base_url = api
        self._subaccounts: Optional[SubaccountsClient] = None

        logger.info(
            "vonage_client_initialised",
            auth_methods=self.auth.names(),
            api_base_url=api,
        )

    @property
    def subaccounts(self) -> SubaccountsClient:
        """Built on first use; its paths are rooted at the primary account's api_key."""
        if self._subaccounts is None:
            if not self.api_key:
                raise ValueError("api_key is required for the Subaccounts API")
            self._subaccounts = SubaccountsClient(self.http, self.auth, self._api_base_url, self.api_key)
        return self._subaccounts

    def generate_jwt(self, **claims) -> str:
        """Sign a token with the configured application credentials, e.g. for client SDK logins."""
        jwt_auth = self.auth.get(JwtAuth)
        if jwt_auth is None:
            raise ValueError("application_id and a private key are required to generate a JWT")
        return jwt_auth.generate_jwt(**claims)

    def close(self) -> None:
        self.http.close()
