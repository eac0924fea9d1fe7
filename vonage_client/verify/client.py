"""
vonage_client/verify/client.py

WHAT THIS FILE IS FOR
---------------------
Façade for the legacy Verify API.

    POST /verify/json          verify()
    POST /verify/psd2/json     psd2_verify()
    POST /verify/check/json    check()
    GET  /verify/search/json   search()
    POST /verify/control/json  cancel_verification() / advance_verification()

Accepted auth: API key + secret as query parameters.
Bodies: form-encoded.

ERROR HANDLING RULES
--------------------
- Bad arguments        → ValueError, before any request
- HTTP-level failures  → VerifyResponseException
- status != "0"        → returned in the result object (see is_successful)
"""

from __future__ import annotations

from typing import Optional, Union

import structlog

from vonage_client.common.endpoint import BODY_FORM, ResourceClient
from vonage_client.common.exceptions import VerifyResponseException
from vonage_client.utils.auth import ApiKeyQueryParamsAuth, AuthCollection
from vonage_client.utils.http_client import HttpClient
from vonage_client.verify.schemas import (
    CheckRequest,
    CheckResponse,
    ControlCommand,
    ControlRequest,
    ControlResponse,
    Psd2Request,
    SearchRequest,
    SearchVerifyResponse,
    VerifyRequest,
    VerifyResponse,
    Workflow,
)

logger = structlog.get_logger(__name__)


class VerifyClient(ResourceClient):
    AUTH_METHODS = (ApiKeyQueryParamsAuth,)
    EXCEPTION_TYPE = VerifyResponseException

    def __init__(self, http: HttpClient, auth: AuthCollection, base_url: str) -> None:
        super().__init__(http, auth, base_url)
        self._verify = self._endpoint("POST", "/verify/json", body=BODY_FORM, response_type=VerifyResponse)
        self._psd2 = self._endpoint("POST", "/verify/psd2/json", body=BODY_FORM, response_type=VerifyResponse)
        self._check = self._endpoint("POST", "/verify/check/json", body=BODY_FORM, response_type=CheckResponse)
        self._search = self._endpoint("GET", "/verify/search/json", response_type=SearchVerifyResponse)
        self._control = self._endpoint("POST", "/verify/control/json", body=BODY_FORM, response_type=ControlResponse)

    def _log_outcome(self, operation: str, result) -> None:
        if result is not None and not result.is_successful:
            logger.warning("verify_request_unsuccessful", operation=operation, status=result.status, error_text=result.error_text)

    def verify(
        self,
        request: Union[VerifyRequest, str],
        brand: Optional[str] = None,
        workflow: Optional[Workflow] = None,
    ) -> VerifyResponse:
        """Start a verification. Accepts a VerifyRequest or (number, brand[, workflow])."""
        if not isinstance(request, VerifyRequest):
            request = VerifyRequest(number=request, brand=brand, workflow_id=workflow)
        result = self._verify.execute(request)
        self._log_outcome("verify", result)
        return result

    def psd2_verify(
        self,
        request: Union[Psd2Request, str],
        amount: Optional[float] = None,
        payee: Optional[str] = None,
        workflow: Optional[Workflow] = None,
    ) -> VerifyResponse:
        if not isinstance(request, Psd2Request):
            request = Psd2Request(number=request, amount=amount, payee=payee, workflow_id=workflow)
        result = self._psd2.execute(request)
        self._log_outcome("psd2_verify", result)
        return result

    def check(self, request_id: str, code: str, ip_address: Optional[str] = None) -> CheckResponse:
        request = CheckRequest(request_id=request_id, code=code, ip_address=ip_address)
        result = self._check.execute(request)
        self._log_outcome("check", result)
        return result

    def search(self, *request_ids: str) -> SearchVerifyResponse:
        request = SearchRequest.for_ids(*request_ids)
        return self._search.execute(query=request)

    def cancel_verification(self, request_id: str) -> ControlResponse:
        return self._control.execute(ControlRequest(request_id=request_id, cmd=ControlCommand.CANCEL))

    def advance_verification(self, request_id: str) -> ControlResponse:
        return self._control.execute(ControlRequest(request_id=request_id, cmd=ControlCommand.TRIGGER_NEXT_EVENT))
