"""Shared fixtures: an in-memory keychain and a fake wallet that answers requests."""

import base64
import hashlib
import json
from typing import Any, Optional

import pytest

from nwc_client.errors import CryptoError
from nwc_client.models.envelope import Envelope, EventKind, build_tags

CALLER_PRIV = "11" * 32
WALLET_PRIV = "22" * 32
STRANGER_PRIV = "33" * 32


def event_id(envelope: Envelope) -> str:
    """NIP-01 id: sha256 of the compact JSON array [0, pubkey, created_at, kind, tags, content]."""
    data = [0, envelope.pubkey, envelope.created_at, envelope.kind, envelope.tags, envelope.content]
    return hashlib.sha256(json.dumps(data, separators=(",", ":"), ensure_ascii=False).encode()).hexdigest()


class FakeKeychain:
    """Reversible stand-in for NIP-04: both sides of a key pair can open the box."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def get_public_key(self, privkey: str) -> str:
        return hashlib.sha256(bytes.fromhex(privkey)).hexdigest()

    def _check_owner(self, my_pubkey: str, privkey: str) -> None:
        if self.get_public_key(privkey) != my_pubkey:
            raise CryptoError("Private key does not match the given public key")

    async def encrypt(self, plaintext: str, their_pubkey: str, my_pubkey: str, privkey: str) -> str:
        self.calls.append("encrypt")
        self._check_owner(my_pubkey, privkey)
        box = {"pair": sorted([their_pubkey, my_pubkey]), "text": plaintext}
        return base64.b64encode(json.dumps(box).encode()).decode() + "?iv=fake"

    async def decrypt(self, ciphertext: str, their_pubkey: str, my_pubkey: str, privkey: str) -> str:
        self.calls.append("decrypt")
        self._check_owner(my_pubkey, privkey)
        try:
            box = json.loads(base64.b64decode(ciphertext.split("?iv=")[0]))
        except ValueError as e:
            raise CryptoError(f"Malformed ciphertext: {e}") from e
        if box["pair"] != sorted([their_pubkey, my_pubkey]):
            raise CryptoError("Shared secret mismatch")
        return box["text"]

    async def sign(self, envelope: Envelope, privkey: str) -> Envelope:
        self.calls.append("sign")
        return envelope.model_copy(update={"id": event_id(envelope), "sig": "sig-" + privkey[:8]})


@pytest.fixture
def keychain() -> FakeKeychain:
    return FakeKeychain()


@pytest.fixture
def caller_pub(keychain) -> str:
    return keychain.get_public_key(CALLER_PRIV)


@pytest.fixture
def wallet_pub(keychain) -> str:
    return keychain.get_public_key(WALLET_PRIV)


@pytest.fixture
def open_request(keychain, wallet_pub):
    """Decrypt a request event the way the wallet would."""

    async def _open(event: Envelope) -> dict[str, Any]:
        plaintext = await keychain.decrypt(event.content, event.pubkey, wallet_pub, WALLET_PRIV)
        return json.loads(plaintext)

    return _open


@pytest.fixture
def make_reply(keychain, caller_pub, wallet_pub):
    """Build a wallet reply event carrying `payload`."""

    async def _reply(
        payload: Any,
        request_id: Optional[str] = "req-123",
        *,
        to: Optional[str] = None,
        kind: int = EventKind.RESPONSE,
        tags: Optional[list[list[str]]] = None,
    ) -> Envelope:
        to = to or caller_pub
        text = payload if isinstance(payload, str) else json.dumps(payload)
        content = await keychain.encrypt(text, to, wallet_pub, WALLET_PRIV)
        event = Envelope(
            pubkey=wallet_pub,
            kind=int(kind),
            tags=tags if tags is not None else build_tags(to, request_id),
            content=content,
            created_at=1700000000,
        )
        return await keychain.sign(event, WALLET_PRIV)

    return _reply
