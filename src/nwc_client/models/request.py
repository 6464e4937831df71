"""
Request payloads — one parameter schema per Wallet Connect method.
"""

from __future__ import annotations

import json
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from nwc_client.models.envelope import EventKind


class _Params(BaseModel):
    model_config = ConfigDict(strict=True, frozen=True, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class EmptyParams(_Params):
    """get_balance, get_info, get_nwc_uri"""


class PayInvoiceParams(_Params):
    invoice: str
    amount: Optional[int] = None  # msats, for zero-amount invoices


class MakeInvoiceParams(_Params):
    amount: int  # msats
    description: Optional[str] = None
    description_hash: Optional[str] = None
    expiry: Optional[int] = None  # seconds from creation


class LookupInvoiceParams(_Params):
    payment_hash: Optional[str] = None
    invoice: Optional[str] = None

    @model_validator(mode="after")
    def _needs_hash_or_invoice(self) -> LookupInvoiceParams:
        if self.payment_hash is None and self.invoice is None:
            raise ValueError("Either payment_hash or invoice must be provided")
        return self


class ListTransactionsParams(_Params):
    from_: Optional[int] = Field(default=None, alias="from")
    until: Optional[int] = None
    limit: Optional[int] = None
    offset: Optional[int] = None
    unpaid: Optional[bool] = None
    type: Optional[Literal["incoming", "outgoing"]] = None


class MakeSubscriptionInvoiceParams(_Params):
    groupid: str
    month: int


class LookupSubscriptionInvoiceParams(_Params):
    payment_hash: str


class WalletRequest(BaseModel):
    """Plaintext `{method, params}` body carried encrypted in a request event."""

    model_config = ConfigDict(frozen=True)

    method: str
    params: dict[str, Any] = Field(default_factory=dict)
    kind: EventKind = Field(default=EventKind.REQUEST, exclude=True)

    def to_json(self) -> str:
        return json.dumps({"method": self.method, "params": self.params})
