"""
Response model — the decoded outcome of one Wallet Connect call.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, model_validator

from nwc_client.errors import WalletError
from nwc_client.models.transaction import Transaction


class Response(BaseModel):
    """Success carries `result`; failure carries `error_code` / `error_message`.

    `request_id` is the id of the request event this reply answers (its "e" tag).
    Matching it against outstanding requests is up to the caller.
    """

    model_config = ConfigDict(frozen=True)

    request_id: str
    is_success: bool
    result: Optional[dict[str, Any]] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    @model_validator(mode="after")
    def _one_outcome(self) -> Response:
        if self.is_success:
            if self.result is None:
                raise ValueError("a successful response needs a result")
            if self.error_code is not None or self.error_message is not None:
                raise ValueError("a successful response cannot carry an error")
        elif self.result is not None:
            raise ValueError("a failed response cannot carry a result")
        return self

    @classmethod
    def success(cls, request_id: str, result: dict[str, Any]) -> Response:
        return cls(request_id=request_id, is_success=True, result=result)

    @classmethod
    def error(cls, request_id: str, code: Optional[str], message: Optional[str]) -> Response:
        return cls(request_id=request_id, is_success=False, error_code=code, error_message=message)

    def _get(self, key: str, expected: type) -> Any:
        if self.result is None:
            return None
        value = self.result.get(key)
        # bool is an int subclass; never hand one out as a balance
        if isinstance(value, bool) and expected is not bool:
            return None
        return value if isinstance(value, expected) else None

    @property
    def result_type(self) -> Optional[str]:
        return self._get("result_type", str)

    @property
    def preimage(self) -> Optional[str]:
        return self._get("preimage", str)

    @property
    def invoice(self) -> Optional[str]:
        return self._get("invoice", str)

    @property
    def balance(self) -> Optional[int]:
        """Balance in msats."""
        return self._get("balance", int)

    @property
    def info(self) -> Optional[dict[str, Any]]:
        return self._get("info", dict)

    @property
    def transactions(self) -> Optional[list[Any]]:
        return self._get("transactions", list)

    @property
    def nwc_uri(self) -> Optional[str]:
        return self._get("nwc_uri", str)

    @property
    def typed_transactions(self) -> Optional[list[Transaction]]:
        """list_transactions reply as Transaction records."""
        transactions = self.transactions
        if transactions is None:
            return None
        return [Transaction.from_dict(t) for t in transactions]

    @property
    def typed_transaction(self) -> Optional[Transaction]:
        """lookup_invoice reply: the whole result is one transaction."""
        if self.result is None:
            return None
        return Transaction.from_dict(self.result)

    def raise_for_error(self) -> Response:
        if not self.is_success:
            raise WalletError(self.error_code, self.error_message, request_id=self.request_id)
        return self


class PayInvoiceResult(BaseModel):
    """Flat view of a pay_invoice reply."""

    request_id: str
    result: bool
    preimage: Optional[str] = None
    code: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def from_response(cls, response: Response) -> PayInvoiceResult:
        return cls(
            request_id=response.request_id,
            result=response.is_success,
            preimage=response.preimage,
            code=response.error_code,
            message=response.error_message,
        )
