"""
vonage_client/messages/client.py

WHAT THIS FILE IS FOR
---------------------
Façade for the Messages API.

    POST {api_base}/v1/messages            (production)
    POST {sandbox_base}/v1/messages        (sandbox, after use_sandbox(True))

Accepted auth: JWT (preferred), then Basic.
Success: 202 with {"message_uuid": "..."}.
Failure: MessageResponseException carrying the problem-detail fields.

WHAT THIS FILE IS NOT FOR
-------------------------
Validating message content; that happens when the request object is
constructed, before this client is ever called.
"""

from __future__ import annotations

import structlog

from vonage_client.common.endpoint import BODY_JSON, ResourceClient
from vonage_client.common.exceptions import MessageResponseException
from vonage_client.messages.schemas import MessageRequest, MessageResponse
from vonage_client.utils.auth import AuthCollection, BasicAuth, JwtAuth
from vonage_client.utils.http_client import HttpClient

logger = structlog.get_logger(__name__)


class MessagesClient(ResourceClient):
    AUTH_METHODS = (JwtAuth, BasicAuth)
    EXCEPTION_TYPE = MessageResponseException

    def __init__(self, http: HttpClient, auth: AuthCollection, base_url: str, sandbox_base_url: str) -> None:
        super().__init__(http, auth, base_url)
        self._send = self._endpoint("POST", "/v1/messages", body=BODY_JSON, response_type=MessageResponse)
        self._send_sandbox = self._endpoint(
            "POST",
            "/v1/messages",
            base_url=sandbox_base_url,
            body=BODY_JSON,
            response_type=MessageResponse,
        )
        self._use_sandbox = False

    @property
    def sandbox_enabled(self) -> bool:
        return self._use_sandbox

    def use_sandbox(self, enabled: bool = True) -> "MessagesClient":
        """Route subsequent sends to the Messages sandbox."""
        self._use_sandbox = enabled
        logger.info("messages_sandbox_toggled", enabled=enabled)
        return self

    def send_message(self, request: MessageRequest) -> MessageResponse:
        if request is None:
            raise ValueError("request is required")
        endpoint = self._send_sandbox if self._use_sandbox else self._send
        return endpoint.execute(request)
