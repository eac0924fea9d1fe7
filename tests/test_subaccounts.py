# tests/test_subaccounts.py
from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

import pytest
from pydantic import ValidationError

from conftest import API_KEY, _FakeHttp
from vonage_client.common.exceptions import SubaccountsResponseException
from vonage_client.subaccounts.client import SubaccountsClient
from vonage_client.subaccounts.schemas import (
    CreateSubaccountRequest,
    ListTransfersFilter,
    MoneyTransfer,
    NumberTransfer,
    UpdateSubaccountRequest,
)
from vonage_client.utils.auth import AuthCollection

API = "https://api.nexmo.com"
ROOT = f"{API}/accounts/{API_KEY}"
SUB_KEY = "bbe6222f"
TRANSFER_ID = "297016c8-2ee8-4cc2-8b5e-ef76e3ec14c1"

SUBACCOUNT = {
    "api_key": SUB_KEY,
    "name": "Subaccount department A",
    "primary_account_api_key": API_KEY,
    "use_primary_account_balance": True,
    "created_at": "2018-03-02T16:34:49.000Z",
    "suspended": False,
    "balance": 100.25,
    "credit_limit": -100.25,
}

TRANSFER = {
    "id": TRANSFER_ID,
    "amount": 123.45,
    "from": API_KEY,
    "to": SUB_KEY,
    "reference": "This gets added to the audit log",
    "created_at": "2019-03-02T16:34:49Z",
    "masterAccountId": API_KEY,
}


@pytest.fixture
def subaccounts(fake_http: _FakeHttp, key_secret_auth: AuthCollection) -> SubaccountsClient:
    return SubaccountsClient(fake_http, key_secret_auth, API, API_KEY)


# ---------------------------------------------------------------------------
# Request objects
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("secret", ["Sh0rt", "alllowercase1", "ALLUPPERCASE1", "NoDigitsHere", "A1b" + "x" * 23])
def test_create_subaccount_secret_rules(secret: str) -> None:
    with pytest.raises(ValidationError):
        CreateSubaccountRequest(name="Dept A", secret=secret)


def test_create_subaccount_name_rules() -> None:
    assert CreateSubaccountRequest(name="Dept A", secret="Secr3tValue").to_dict() == {
        "name": "Dept A",
        "secret": "Secr3tValue",
    }
    with pytest.raises(ValidationError):
        CreateSubaccountRequest(name="   ")
    with pytest.raises(ValidationError):
        CreateSubaccountRequest(name="x" * 81)


def test_update_request_keeps_key_out_of_body() -> None:
    request = UpdateSubaccountRequest(subaccount_api_key=SUB_KEY, suspended=True)

    assert request.to_dict() == {"suspended": True}
    with pytest.raises(ValidationError):
        UpdateSubaccountRequest(subaccount_api_key="short")


def test_money_transfer_build_checks_arguments() -> None:
    transfer = MoneyTransfer.build(API_KEY, SUB_KEY, 10.0, reference="topup")
    assert transfer.to_dict() == {"from": API_KEY, "to": SUB_KEY, "amount": 10.0, "reference": "topup"}

    with pytest.raises(ValueError):
        MoneyTransfer.build(API_KEY, SUB_KEY, 0)
    with pytest.raises(ValueError):
        MoneyTransfer.build("toolongkey", SUB_KEY, 1)


def test_number_transfer_build() -> None:
    transfer = NumberTransfer.build(API_KEY, SUB_KEY, "23507703696", "GB")
    assert transfer.to_dict() == {"from": API_KEY, "to": SUB_KEY, "number": "23507703696", "country": "GB"}

    with pytest.raises(ValueError):
        NumberTransfer.build(API_KEY, SUB_KEY, "", "GB")


def test_transfers_filter_defaults_to_epoch_and_dedupes_subaccounts() -> None:
    params = ListTransfersFilter(subaccount=[SUB_KEY, SUB_KEY]).make_params()

    assert params == {"start_date": "1970-01-01T00:00:00Z", "subaccount": [SUB_KEY]}


def test_transfers_filter_rejects_inverted_range() -> None:
    with pytest.raises(ValidationError):
        ListTransfersFilter(
            start_date=datetime(2024, 2, 1, tzinfo=timezone.utc),
            end_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


def test_client_requires_eight_character_api_key(fake_http: _FakeHttp, key_secret_auth: AuthCollection) -> None:
    with pytest.raises(ValueError):
        SubaccountsClient(fake_http, key_secret_auth, API, "abc")


def test_list_subaccounts(subaccounts: SubaccountsClient, fake_http: _FakeHttp) -> None:
    fake_http.respond(
        200,
        {
            "_embedded": {
                "primary_account": {**SUBACCOUNT, "api_key": API_KEY, "primary_account_api_key": None},
                "subaccounts": [SUBACCOUNT],
            }
        },
    )

    response = subaccounts.list_subaccounts()

    assert fake_http.last.url == f"{ROOT}/subaccounts"
    assert fake_http.last.headers["Authorization"].startswith("Basic ")
    assert response.primary_account.api_key == API_KEY
    assert response.subaccounts[0].api_key == SUB_KEY
    assert response.subaccounts[0].credit_limit == -100.25
    assert response.subaccounts[0].created_at == datetime(2018, 3, 2, 16, 34, 49, tzinfo=timezone.utc)


def test_create_subaccount_returns_secret(subaccounts: SubaccountsClient, fake_http: _FakeHttp) -> None:
    fake_http.respond(200, {**SUBACCOUNT, "secret": "Secr3tValue"})

    account = subaccounts.create_subaccount(CreateSubaccountRequest(name="Dept A", secret="Secr3tValue"))

    assert account.secret == "Secr3tValue"
    assert fake_http.last.method == "POST"
    assert fake_http.last.json_body == {"name": "Dept A", "secret": "Secr3tValue"}


def test_get_and_update_subaccount(subaccounts: SubaccountsClient, fake_http: _FakeHttp) -> None:
    fake_http.respond(200, SUBACCOUNT).respond(200, {**SUBACCOUNT, "suspended": True})

    assert subaccounts.get_subaccount(SUB_KEY).name == "Subaccount department A"
    assert fake_http.last.url == f"{ROOT}/subaccounts/{SUB_KEY}"

    updated = subaccounts.update_subaccount(UpdateSubaccountRequest(subaccount_api_key=SUB_KEY, suspended=True))
    assert updated.suspended is True
    assert fake_http.last.method == "PATCH"
    assert fake_http.last.json_body == {"suspended": True}


def test_get_subaccount_validates_key(subaccounts: SubaccountsClient, fake_http: _FakeHttp) -> None:
    with pytest.raises(ValueError):
        subaccounts.get_subaccount("nope")
    assert fake_http.calls == []


def test_list_credit_transfers(subaccounts: SubaccountsClient, fake_http: _FakeHttp) -> None:
    fake_http.respond(200, {"_embedded": {"credit_transfers": [TRANSFER]}})

    transfers = subaccounts.list_credit_transfers(
        start_date=datetime(2024, 1, 1, tzinfo=timezone.utc), subaccounts=[SUB_KEY]
    )

    call = fake_http.last
    assert call.url == f"{ROOT}/credit-transfers"
    assert call.params == {"start_date": "2024-01-01T00:00:00Z", "subaccount": [SUB_KEY]}
    assert transfers[0].id == UUID(TRANSFER_ID)
    assert transfers[0].primary_account_id == API_KEY
    assert transfers[0].from_ == API_KEY


def test_list_balance_transfers_absent_vs_empty(subaccounts: SubaccountsClient, fake_http: _FakeHttp) -> None:
    fake_http.respond(200, {}).respond(200, {"_embedded": {"balance_transfers": []}})

    assert subaccounts.list_balance_transfers() is None
    assert fake_http.last.params == {"start_date": "1970-01-01T00:00:00Z"}
    assert subaccounts.list_balance_transfers() == []


def test_transfer_credit_and_balance(subaccounts: SubaccountsClient, fake_http: _FakeHttp) -> None:
    fake_http.respond(200, TRANSFER).respond(200, TRANSFER)
    transfer = MoneyTransfer.build(API_KEY, SUB_KEY, 123.45)

    result = subaccounts.transfer_credit(transfer)
    assert fake_http.last.url == f"{ROOT}/credit-transfers"
    assert fake_http.last.json_body == {"from": API_KEY, "to": SUB_KEY, "amount": 123.45}
    assert result.reference == "This gets added to the audit log"

    subaccounts.transfer_balance(transfer)
    assert fake_http.last.url == f"{ROOT}/balance-transfers"


def test_transfer_number(subaccounts: SubaccountsClient, fake_http: _FakeHttp) -> None:
    body = {"number": "23507703696", "country": "GB", "from": API_KEY, "to": SUB_KEY}
    fake_http.respond(200, body)

    result = subaccounts.transfer_number(NumberTransfer.build(API_KEY, SUB_KEY, "23507703696", "GB"))

    assert fake_http.last.url == f"{ROOT}/transfer-number"
    assert result.number == "23507703696"


@pytest.mark.parametrize(
    "transfer",
    [
        MoneyTransfer(from_=API_KEY, to=SUB_KEY, amount=-5),
        MoneyTransfer(from_=API_KEY, to=SUB_KEY, amount=0),
        MoneyTransfer(from_=API_KEY, to=SUB_KEY),
        MoneyTransfer(to=SUB_KEY, amount=10),
        MoneyTransfer(from_=API_KEY, amount=10),
        None,
    ],
)
def test_invalid_money_transfer_is_rejected_before_sending(
    subaccounts: SubaccountsClient, fake_http: _FakeHttp, transfer: MoneyTransfer
) -> None:
    with pytest.raises(ValueError):
        subaccounts.transfer_credit(transfer)
    with pytest.raises(ValueError):
        subaccounts.transfer_balance(transfer)

    assert fake_http.calls == []


def test_incomplete_number_transfer_is_rejected_before_sending(
    subaccounts: SubaccountsClient, fake_http: _FakeHttp
) -> None:
    with pytest.raises(ValueError):
        subaccounts.transfer_number(NumberTransfer(from_=API_KEY, to=SUB_KEY, number="23507703696"))
    with pytest.raises(ValueError):
        subaccounts.transfer_number(NumberTransfer(from_=API_KEY, country="GB", number="23507703696"))

    assert fake_http.calls == []


def test_error_response_raises_subaccounts_exception(subaccounts: SubaccountsClient, fake_http: _FakeHttp) -> None:
    fake_http.respond(
        403,
        {
            "type": "https://developer.nexmo.com/api-errors#unauthorized",
            "title": "Authorisation error",
            "detail": "Account 7c9738e6 is not provisioned to access Subaccount Provisioning API",
            "instance": "158b8f199c45014ab7b08bfe9cc1c12c",
        },
    )

    with pytest.raises(SubaccountsResponseException) as exc_info:
        subaccounts.list_subaccounts()

    assert exc_info.value.status_code == 403
    assert exc_info.value.instance == "158b8f199c45014ab7b08bfe9cc1c12c"
