"""
Transaction model — one ledger entry in list_transactions / lookup_invoice replies.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from nwc_client.errors import SchemaError

TransactionType = Literal["incoming", "outgoing"]
TransactionState = Literal["pending", "settled", "expired", "failed"]


class Transaction(BaseModel):
    """Invoice ("incoming") or payment ("outgoing"). Amounts are in msats."""

    model_config = ConfigDict(strict=True, frozen=True, extra="ignore")

    type: TransactionType
    state: TransactionState
    invoice: Optional[str] = None
    description: Optional[str] = None
    description_hash: Optional[str] = None
    preimage: Optional[str] = None
    payment_hash: str
    amount: int
    fees_paid: Optional[int] = None
    created_at: int
    expires_at: Optional[int] = None
    settled_at: Optional[int] = None
    metadata: Optional[dict[str, Any]] = None

    @model_validator(mode="after")
    def _preimage_only_when_settled(self) -> Transaction:
        if self.preimage is not None and self.state != "settled":
            raise SchemaError(f"preimage present on a {self.state} transaction", field="preimage")
        return self

    @classmethod
    def from_dict(cls, data: Any) -> Transaction:
        """Validate a wire mapping. Raises SchemaError naming the first bad field."""
        if not isinstance(data, dict):
            raise SchemaError(f"transaction must be an object, got {type(data).__name__}")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(p) for p in first["loc"]) or None
            if field:
                raise SchemaError(f"invalid transaction field {field!r}: {first['msg']}", field=field) from e
            raise SchemaError(f"invalid transaction: {first['msg']}") from e

    def to_dict(self) -> dict[str, Any]:
        """Wire mapping; absent optionals are omitted, never nulled."""
        data = self.model_dump(exclude_none=True)
        if self.metadata is not None:
            data["metadata"] = dict(self.metadata)
        return data

    @property
    def is_incoming(self) -> bool:
        return self.type == "incoming"

    @property
    def is_outgoing(self) -> bool:
        return self.type == "outgoing"

    @property
    def is_pending(self) -> bool:
        return self.state == "pending"

    @property
    def is_settled(self) -> bool:
        return self.state == "settled"

    @property
    def is_expired(self) -> bool:
        return self.state == "expired"

    @property
    def is_failed(self) -> bool:
        return self.state == "failed"

    @property
    def is_paid(self) -> bool:
        return self.is_settled

    @property
    def is_unpaid(self) -> bool:
        return not self.is_paid
