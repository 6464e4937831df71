"""
Request builder — one coroutine per Wallet Connect method.

Each call returns a signed request Envelope. Publishing it and remembering its
id for correlation is the caller's job.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import ValidationError

from nwc_client.errors import InvalidArgumentError
from nwc_client.keychain import Keychain
from nwc_client.models.envelope import Envelope, EventKind
from nwc_client.models.request import (
    EmptyParams,
    ListTransactionsParams,
    LookupInvoiceParams,
    LookupSubscriptionInvoiceParams,
    MakeInvoiceParams,
    MakeSubscriptionInvoiceParams,
    PayInvoiceParams,
    WalletRequest,
    _Params,
)
from nwc_client.transport.envelope import build_envelope


def _params(model: type[_Params], **fields: Any) -> dict[str, Any]:
    try:
        return model(**fields).to_wire()
    except ValidationError as e:
        first = e.errors()[0]
        loc = ".".join(str(p) for p in first["loc"])
        prefix = f"{loc}: " if loc else ""
        raise InvalidArgumentError(f"{prefix}{first['msg']}", details={"errors": e.errors(include_url=False)}) from e


class RequestBuilder:
    def __init__(self, keychain: Keychain):
        self._keychain = keychain

    async def request(
        self,
        method: str,
        params: dict[str, Any],
        receiver: str,
        privkey: str,
        *,
        kind: EventKind = EventKind.REQUEST,
    ) -> Envelope:
        """Build a request for any method, including ones not modelled here."""
        try:
            kind = EventKind(kind)
        except ValueError:
            raise InvalidArgumentError(f"Unknown event kind {kind}")
        if not kind.is_request:
            raise InvalidArgumentError(f"{kind.name} is not a request kind")
        request = WalletRequest(method=method, params=params, kind=kind)
        return await build_envelope(self._keychain, request, receiver, privkey)

    async def pay_invoice(self, invoice: str, receiver: str, privkey: str, *, amount: Optional[int] = None) -> Envelope:
        params = _params(PayInvoiceParams, invoice=invoice, amount=amount)
        return await self.request("pay_invoice", params, receiver, privkey)

    async def make_invoice(
        self,
        *,
        amount: int,
        receiver: str,
        privkey: str,
        description: Optional[str] = None,
        description_hash: Optional[str] = None,
        expiry: Optional[int] = None,
    ) -> Envelope:
        """`amount` in msats; `expiry` in seconds from creation."""
        params = _params(
            MakeInvoiceParams,
            amount=amount,
            description=description,
            description_hash=description_hash,
            expiry=expiry,
        )
        return await self.request("make_invoice", params, receiver, privkey)

    async def lookup_invoice(
        self,
        *,
        receiver: str,
        privkey: str,
        payment_hash: Optional[str] = None,
        invoice: Optional[str] = None,
    ) -> Envelope:
        """At least one of `payment_hash` or `invoice` is required."""
        if payment_hash is None and invoice is None:
            raise InvalidArgumentError("Either payment_hash or invoice must be provided")
        params = _params(LookupInvoiceParams, payment_hash=payment_hash, invoice=invoice)
        return await self.request("lookup_invoice", params, receiver, privkey)

    async def list_transactions(
        self,
        *,
        receiver: str,
        privkey: str,
        from_: Optional[int] = None,
        until: Optional[int] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        unpaid: Optional[bool] = None,
        type: Optional[Literal["incoming", "outgoing"]] = None,
    ) -> Envelope:
        """`from_`/`until` are inclusive unix timestamps; `type` None means both."""
        params = _params(
            ListTransactionsParams,
            from_=from_,
            until=until,
            limit=limit,
            offset=offset,
            unpaid=unpaid,
            type=type,
        )
        return await self.request("list_transactions", params, receiver, privkey)

    async def get_balance(self, receiver: str, privkey: str) -> Envelope:
        return await self.request("get_balance", _params(EmptyParams), receiver, privkey)

    async def get_info(self, receiver: str, privkey: str) -> Envelope:
        return await self.request("get_info", _params(EmptyParams), receiver, privkey)

    async def make_subscription_invoice(self, groupid: str, month: int, receiver: str, privkey: str) -> Envelope:
        params = _params(MakeSubscriptionInvoiceParams, groupid=groupid, month=month)
        return await self.request(
            "make_subscription_invoice", params, receiver, privkey, kind=EventKind.SUBSCRIPTION_REQUEST,
        )

    async def lookup_subscription_invoice(self, payment_hash: str, receiver: str, privkey: str) -> Envelope:
        params = _params(LookupSubscriptionInvoiceParams, payment_hash=payment_hash)
        return await self.request(
            "lookup_subscription_invoice", params, receiver, privkey, kind=EventKind.SUBSCRIPTION_REQUEST,
        )

    async def get_nwc_uri(self, receiver: str, privkey: str) -> Envelope:
        return await self.request("get_nwc_uri", _params(EmptyParams), receiver, privkey)
