"""
vonage_client/subaccounts/client.py

WHAT THIS FILE IS FOR
---------------------
Façade for the Subaccounts API. Every path is rooted at the primary
account: {api_base_url}/accounts/{api_key}.

    GET   /subaccounts                  list_subaccounts()
    POST  /subaccounts                  create_subaccount()
    GET   /subaccounts/{subaccount}     get_subaccount()
    PATCH /subaccounts/{subaccount}     update_subaccount()
    GET   /credit-transfers             list_credit_transfers()
    POST  /credit-transfers             transfer_credit()
    GET   /balance-transfers            list_balance_transfers()
    POST  /balance-transfers            transfer_balance()
    POST  /transfer-number              transfer_number()

Accepted auth: HTTP Basic (API key + secret).
Transfers are checked for from / to / amount (or number and country)
before anything is sent, and are never retried by this layer.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional

from vonage_client.common.endpoint import BODY_JSON, ResourceClient
from vonage_client.common.exceptions import SubaccountsResponseException
from vonage_client.common.validation import require, validate_account_key
from vonage_client.subaccounts.schemas import (
    Account,
    CreateSubaccountRequest,
    ListBalanceTransfersResponse,
    ListCreditTransfersResponse,
    ListSubaccountsResponse,
    ListTransfersFilter,
    MoneyTransfer,
    NumberTransfer,
    UpdateSubaccountRequest,
)
from vonage_client.utils.auth import AuthCollection, BasicAuth
from vonage_client.utils.http_client import HttpClient


class SubaccountsClient(ResourceClient):
    AUTH_METHODS = (BasicAuth,)
    EXCEPTION_TYPE = SubaccountsResponseException

    def __init__(self, http: HttpClient, auth: AuthCollection, base_url: str, api_key: str) -> None:
        self.api_key = validate_account_key(api_key, "api_key")
        super().__init__(http, auth, f"{base_url.rstrip('/')}/accounts/{api_key}")

        self._list_subaccounts = self._endpoint("GET", "/subaccounts", response_type=ListSubaccountsResponse)
        self._create_subaccount = self._endpoint("POST", "/subaccounts", body=BODY_JSON, response_type=Account)
        self._get_subaccount = self._endpoint("GET", "/subaccounts/{subaccount}", response_type=Account)
        self._update_subaccount = self._endpoint(
            "PATCH", "/subaccounts/{subaccount}", body=BODY_JSON, response_type=Account
        )
        self._list_credit = self._endpoint("GET", "/credit-transfers", response_type=ListCreditTransfersResponse)
        self._transfer_credit = self._endpoint("POST", "/credit-transfers", body=BODY_JSON, response_type=MoneyTransfer)
        self._list_balance = self._endpoint("GET", "/balance-transfers", response_type=ListBalanceTransfersResponse)
        self._transfer_balance = self._endpoint(
            "POST", "/balance-transfers", body=BODY_JSON, response_type=MoneyTransfer
        )
        self._transfer_number = self._endpoint("POST", "/transfer-number", body=BODY_JSON, response_type=NumberTransfer)

    # ------------------------------------------------------------------
    # Subaccounts
    # ------------------------------------------------------------------
    def list_subaccounts(self) -> ListSubaccountsResponse:
        return self._list_subaccounts.execute()

    def create_subaccount(self, request: CreateSubaccountRequest) -> Account:
        return self._create_subaccount.execute(request)

    def get_subaccount(self, subaccount_api_key: str) -> Account:
        validate_account_key(subaccount_api_key, "subaccount_api_key")
        return self._get_subaccount.execute(path={"subaccount": subaccount_api_key})

    def update_subaccount(self, request: UpdateSubaccountRequest) -> Account:
        return self._update_subaccount.execute(request, path={"subaccount": request.subaccount_api_key})

    # ------------------------------------------------------------------
    # Transfers
    # ------------------------------------------------------------------
    def list_credit_transfers(
        self,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        subaccounts: Optional[Iterable[str]] = None,
    ) -> Optional[List[MoneyTransfer]]:
        page = self._list_credit.execute(query=_transfers_filter(start_date, end_date, subaccounts))
        return page.embedded.credit_transfers if page is not None and page.embedded else None

    def transfer_credit(self, transfer: MoneyTransfer) -> MoneyTransfer:
        return self._transfer_credit.execute(_outgoing(transfer))

    def list_balance_transfers(
        self,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        subaccounts: Optional[Iterable[str]] = None,
    ) -> Optional[List[MoneyTransfer]]:
        page = self._list_balance.execute(query=_transfers_filter(start_date, end_date, subaccounts))
        return page.embedded.balance_transfers if page is not None and page.embedded else None

    def transfer_balance(self, transfer: MoneyTransfer) -> MoneyTransfer:
        return self._transfer_balance.execute(_outgoing(transfer))

    def transfer_number(self, transfer: NumberTransfer) -> NumberTransfer:
        return self._transfer_number.execute(_outgoing(transfer))


def _transfers_filter(
    start_date: Optional[datetime],
    end_date: Optional[datetime],
    subaccounts: Optional[Iterable[str]],
) -> ListTransfersFilter:
    kwargs = {"end_date": end_date, "subaccount": list(subaccounts) if subaccounts else None}
    if start_date is not None:
        kwargs["start_date"] = start_date
    return ListTransfersFilter(**kwargs)


def _outgoing(transfer):
    return require(transfer, "transfer").check_outgoing()
