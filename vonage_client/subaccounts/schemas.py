# -------------------------------------------------------------------
# vonage_client/subaccounts/schemas.py
#
# WHAT THIS FILE IS FOR
# --------------------
# DTOs for the Subaccounts API (/accounts/{api_key}/...).
#
# Account keys (primary or sub) are always exactly 8 characters; every
# request that names one checks this before anything is sent.
#
# Transfers are used in both directions: the caller builds one with
# from / to / amount / reference, and the server echoes it back with
# id, created_at and the primary account id filled in.
# -------------------------------------------------------------------

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from pydantic import Field, ValidationInfo, field_validator

from vonage_client.common.pagination import DateRangeMixin, QueryFilter
from vonage_client.common.schemas import FrozenRequest, JsonableBaseObject, from_server
from vonage_client.common.validation import validate_account_key

EPOCH_START = datetime.fromisoformat("1970-01-01T00:00:00+00:00")


def _check_secret(secret: Optional[str]) -> Optional[str]:
    if secret is None:
        return secret
    if not 8 <= len(secret) <= 25:
        raise ValueError("Secret must be between 8 and 25 characters long.")
    if not any(c.isdigit() for c in secret):
        raise ValueError("Secret must contain at least one digit.")
    if not any(c.islower() for c in secret) or not any(c.isupper() for c in secret):
        raise ValueError("Secret must contain both lower and upper case letters.")
    return secret


class Account(JsonableBaseObject):
    api_key: Optional[str] = None
    name: Optional[str] = None
    primary_account_api_key: Optional[str] = None
    use_primary_account_balance: Optional[bool] = None
    created_at: Optional[datetime] = None
    suspended: Optional[bool] = None
    balance: Optional[float] = None
    credit_limit: Optional[float] = None
    secret: Optional[str] = None


class CreateSubaccountRequest(FrozenRequest):
    name: str = Field(min_length=1, max_length=80)
    secret: Optional[str] = None
    use_primary_account_balance: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name is required.")
        return v

    @field_validator("secret")
    @classmethod
    def _secret_rules(cls, v: Optional[str]) -> Optional[str]:
        return _check_secret(v)


class UpdateSubaccountRequest(FrozenRequest):
    """The subaccount key goes in the path and is not serialized."""

    subaccount_api_key: str = Field(exclude=True)
    name: Optional[str] = Field(None, min_length=1, max_length=80)
    use_primary_account_balance: Optional[bool] = None
    suspended: Optional[bool] = None

    @field_validator("subaccount_api_key")
    @classmethod
    def _key(cls, v: str) -> str:
        return validate_account_key(v, "subaccount_api_key")


class _Transfer(JsonableBaseObject):
    from_: Optional[str] = Field(None, alias="from")
    to: Optional[str] = None

    @field_validator("from_", "to")
    @classmethod
    def _account_keys(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        if v is None or from_server(info):
            return v
        return validate_account_key(v, info.field_name.rstrip("_"))


class MoneyTransfer(_Transfer):
    amount: Optional[float] = None
    reference: Optional[str] = Field(None, max_length=1024)
    id: Optional[UUID] = None
    created_at: Optional[datetime] = None
    primary_account_id: Optional[str] = Field(None, alias="masterAccountId")

    @classmethod
    def build(cls, from_: str, to: str, amount: float, reference: Optional[str] = None) -> "MoneyTransfer":
        """Construct a transfer to send; all of from / to / amount are required."""
        return cls(from_=from_, to=to, amount=amount, reference=reference).check_outgoing()

    def check_outgoing(self) -> "MoneyTransfer":
        validate_account_key(self.from_, "from")
        validate_account_key(self.to, "to")
        if self.amount is None or self.amount <= 0:
            raise ValueError("Amount must be greater than zero.")
        return self


class NumberTransfer(_Transfer):
    number: Optional[str] = None
    country: Optional[str] = Field(None, min_length=2, max_length=2)

    @classmethod
    def build(cls, from_: str, to: str, number: str, country: str) -> "NumberTransfer":
        return cls(from_=from_, to=to, number=number, country=country).check_outgoing()

    def check_outgoing(self) -> "NumberTransfer":
        validate_account_key(self.from_, "from")
        validate_account_key(self.to, "to")
        if not self.number or not self.country:
            raise ValueError("Number and country are required.")
        return self


class ListTransfersFilter(DateRangeMixin, QueryFilter):
    start_date: datetime = EPOCH_START
    end_date: Optional[datetime] = None
    subaccount: Optional[List[str]] = None

    @field_validator("subaccount", mode="before")
    @classmethod
    def _dedupe(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = [v]
        if v is None:
            return v
        unique = list(dict.fromkeys(v))
        for key in unique:
            validate_account_key(key, "subaccount")
        return unique or None


# ---------------------------------------------------------------------------
# HAL-ish list envelopes (no paging fields, only _embedded)
# ---------------------------------------------------------------------------


class _SubaccountsEmbedded(JsonableBaseObject):
    primary_account: Optional[Account] = None
    subaccounts: Optional[List[Account]] = None


class ListSubaccountsResponse(JsonableBaseObject):
    embedded: Optional[_SubaccountsEmbedded] = Field(None, alias="_embedded")

    @property
    def primary_account(self) -> Optional[Account]:
        return self.embedded.primary_account if self.embedded else None

    @property
    def subaccounts(self) -> Optional[List[Account]]:
        return self.embedded.subaccounts if self.embedded else None


class _CreditTransfersEmbedded(JsonableBaseObject):
    credit_transfers: Optional[List[MoneyTransfer]] = None


class ListCreditTransfersResponse(JsonableBaseObject):
    embedded: Optional[_CreditTransfersEmbedded] = Field(None, alias="_embedded")


class _BalanceTransfersEmbedded(JsonableBaseObject):
    balance_transfers: Optional[List[MoneyTransfer]] = None


class ListBalanceTransfersResponse(JsonableBaseObject):
    embedded: Optional[_BalanceTransfersEmbedded] = Field(None, alias="_embedded")
