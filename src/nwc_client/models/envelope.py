"""
Signed event envelope and the Wallet Connect event kinds.
"""

from __future__ import annotations

import time
from enum import IntEnum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from nwc_client.errors import SchemaError


class EventKind(IntEnum):
    INFO = 13194
    REQUEST = 23194
    RESPONSE = 23195
    SUBSCRIPTION_REQUEST = 23196
    SUBSCRIPTION_RESPONSE = 23197

    @property
    def is_request(self) -> bool:
        return self in (EventKind.REQUEST, EventKind.SUBSCRIPTION_REQUEST)

    @property
    def is_response(self) -> bool:
        return self in (EventKind.RESPONSE, EventKind.SUBSCRIPTION_RESPONSE)

    @property
    def is_subscription(self) -> bool:
        return self in (EventKind.SUBSCRIPTION_REQUEST, EventKind.SUBSCRIPTION_RESPONSE)

    @property
    def response_kind(self) -> EventKind:
        """Reply kind a wallet answers this request kind with."""
        if self == EventKind.REQUEST:
            return EventKind.RESPONSE
        if self == EventKind.SUBSCRIPTION_REQUEST:
            return EventKind.SUBSCRIPTION_RESPONSE
        raise ValueError(f"{self.name} is not a request kind")


RESPONSE_KINDS = frozenset({EventKind.RESPONSE, EventKind.SUBSCRIPTION_RESPONSE})


class Envelope(BaseModel):
    """A signed relay event. `id` and `sig` stay empty until a keychain signs it."""

    model_config = ConfigDict(frozen=True)

    id: str = ""
    pubkey: str
    kind: int
    tags: list[list[str]] = Field(default_factory=list)
    content: str = ""
    created_at: int = Field(default_factory=lambda: int(time.time()))
    sig: str = ""

    @property
    def signed(self) -> bool:
        return bool(self.id and self.sig)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()

    @classmethod
    def from_dict(cls, raw: Any) -> Envelope:
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            raise SchemaError(f"invalid event: {e.errors()[0]['msg']}") from e


def build_tags(receiver: str, request_id: Optional[str] = None) -> list[list[str]]:
    tags = [["p", receiver]]
    if request_id is not None:
        tags.append(["e", request_id])
    return tags
