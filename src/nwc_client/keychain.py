"""
Keychain — the signing and content-encryption capability the protocol layer consumes.

Builders and decoders never touch key material directly; they call an injected
Keychain. `NostrKeychain` is the secp256k1 / NIP-04 implementation; tests pass
their own double.
"""

import logging
from typing import Protocol, runtime_checkable

from nwc_client.errors import CryptoError
from nwc_client.models.envelope import Envelope

logger = logging.getLogger(__name__)


@runtime_checkable
class Keychain(Protocol):
    def get_public_key(self, privkey: str) -> str:
        """Hex public key for a hex private key."""
        ...

    async def encrypt(self, plaintext: str, their_pubkey: str, my_pubkey: str, privkey: str) -> str:
        ...

    async def decrypt(self, ciphertext: str, their_pubkey: str, my_pubkey: str, privkey: str) -> str:
        ...

    async def sign(self, envelope: Envelope, privkey: str) -> Envelope:
        """Return a copy of `envelope` with `id` and `sig` filled in."""
        ...


class NostrKeychain:
    """NIP-04 encryption and BIP-340 event signing via electrum-aionostr."""

    def __init__(self) -> None:
        try:
            from electrum_aionostr.event import Event
            from electrum_aionostr.key import PrivateKey
        except ImportError as e:
            raise ImportError(f"NostrKeychain requires extras: pip install nwc-client[nostr] ({e})") from e
        self._private_key_cls = PrivateKey
        self._event_cls = Event

    def _key(self, privkey: str):
        try:
            return self._private_key_cls(raw_secret=bytes.fromhex(privkey))
        except Exception as e:
            raise CryptoError(f"Invalid private key: {e}") from e

    def get_public_key(self, privkey: str) -> str:
        return self._key(privkey).public_key.hex()

    def _check_owner(self, my_pubkey: str, privkey: str) -> None:
        if self.get_public_key(privkey) != my_pubkey:
            raise CryptoError("Private key does not match the given public key")

    async def encrypt(self, plaintext: str, their_pubkey: str, my_pubkey: str, privkey: str) -> str:
        self._check_owner(my_pubkey, privkey)
        try:
            return self._key(privkey).encrypt_message(plaintext, their_pubkey)
        except Exception as e:
            raise CryptoError(f"Encryption failed: {e}") from e

    async def decrypt(self, ciphertext: str, their_pubkey: str, my_pubkey: str, privkey: str) -> str:
        self._check_owner(my_pubkey, privkey)
        try:
            return self._key(privkey).decrypt_message(ciphertext, their_pubkey)
        except Exception as e:
            logger.debug("Decryption from %s failed", their_pubkey, exc_info=True)
            raise CryptoError(f"Decryption failed: {e}") from e

    async def sign(self, envelope: Envelope, privkey: str) -> Envelope:
        key = self._key(privkey)
        if key.public_key.hex() != envelope.pubkey:
            raise CryptoError("Envelope author does not match the signing key")
        try:
            event = self._event_cls(
                pubkey=envelope.pubkey,
                kind=envelope.kind,
                tags=envelope.tags,
                content=envelope.content,
                created_at=envelope.created_at,
            ).sign(privkey)
        except Exception as e:
            raise CryptoError(f"Signing failed: {e}") from e
        return envelope.model_copy(update={"id": event.id, "sig": event.sig})
