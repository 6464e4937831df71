"""
Wallet Connect connection URI.

    nostr+walletconnect://<wallet pubkey>?relay=wss://...&relay=...&secret=<hex>&lud16=...

The first relay is the one the wallet listens on; `secret` is the client's
private key for this connection.
"""

from __future__ import annotations

import re
import urllib.parse
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from nwc_client.errors import InvalidArgumentError

URI_SCHEME = "nostr+walletconnect://"
_HEX_KEY = re.compile(r"^[0-9a-f]{64}$")


class ConnectionURI(BaseModel):
    model_config = ConfigDict(frozen=True)

    wallet_pubkey: str
    relays: list[str] = Field(min_length=1)
    secret: str
    lud16: Optional[str] = None

    @classmethod
    def parse(cls, uri: str) -> ConnectionURI:
        uri = uri.strip()
        if not uri.startswith(URI_SCHEME):
            raise InvalidArgumentError(f"Not a wallet connect URI (expected {URI_SCHEME}...)")
        pubkey, _, query = uri[len(URI_SCHEME):].partition("?")
        pubkey = pubkey.rstrip("/").lower()
        if not _HEX_KEY.match(pubkey):
            raise InvalidArgumentError("Wallet pubkey must be 64 hex characters")

        params = urllib.parse.parse_qs(query)
        relays = params.get("relay", [])
        if not relays:
            raise InvalidArgumentError("Connection URI has no relay")
        secrets = params.get("secret", [])
        if len(secrets) != 1 or not _HEX_KEY.match(secrets[0].lower()):
            raise InvalidArgumentError("Connection URI needs exactly one 64-hex-character secret")
        lud16 = params.get("lud16", [None])[0]

        return cls(wallet_pubkey=pubkey, relays=relays, secret=secrets[0].lower(), lud16=lud16)

    def __str__(self) -> str:
        query_params = [f"relay={urllib.parse.quote(relay)}" for relay in self.relays]
        if self.lud16:
            query_params.append(f"lud16={urllib.parse.quote(self.lud16)}")
        # secret goes last
        query_params.append(f"secret={self.secret}")
        return f"{URI_SCHEME}{self.wallet_pubkey}?{'&'.join(query_params)}"

    @property
    def relay(self) -> str:
        return self.relays[0]
