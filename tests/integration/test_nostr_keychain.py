"""
Integration tests for NostrKeychain — real secp256k1 keys, NIP-04 and event signing.

Requires the `nostr` extra (electrum-aionostr).

Run: NWC_INTEGRATION=1 pytest tests/integration/ -v
"""

import json
import os

import pytest

from nwc_client import CryptoError, RequestBuilder, ResponseDecoder
from nwc_client.models.envelope import Envelope, EventKind

SKIP = not os.environ.get("NWC_INTEGRATION")

pytestmark = pytest.mark.skipif(SKIP, reason="NWC_INTEGRATION not set")

CALLER_PRIV = "7f" * 32
WALLET_PRIV = "3c" * 32


@pytest.fixture
def keychain():
    pytest.importorskip("electrum_aionostr")
    from nwc_client import NostrKeychain
    return NostrKeychain()


class TestNostrKeychain:
    def test_public_key_is_x_only_hex(self, keychain):
        pub = keychain.get_public_key(CALLER_PRIV)
        assert len(pub) == 64
        int(pub, 16)

    @pytest.mark.asyncio
    async def test_nip04_round_trip(self, keychain):
        caller = keychain.get_public_key(CALLER_PRIV)
        wallet = keychain.get_public_key(WALLET_PRIV)
        ciphertext = await keychain.encrypt("hello", wallet, caller, CALLER_PRIV)
        assert "?iv=" in ciphertext
        assert await keychain.decrypt(ciphertext, caller, wallet, WALLET_PRIV) == "hello"

    @pytest.mark.asyncio
    async def test_mismatched_key_is_crypto_error(self, keychain):
        wallet = keychain.get_public_key(WALLET_PRIV)
        with pytest.raises(CryptoError):
            await keychain.encrypt("hello", wallet, wallet, CALLER_PRIV)

    @pytest.mark.asyncio
    async def test_request_and_reply(self, keychain):
        caller = keychain.get_public_key(CALLER_PRIV)
        wallet = keychain.get_public_key(WALLET_PRIV)

        request = await RequestBuilder(keychain).pay_invoice("lnbc1...", wallet, CALLER_PRIV)
        from electrum_aionostr.event import Event
        library_event = Event(**request.to_dict())
        assert library_event.id == request.id
        assert library_event.verify()
        plaintext = await keychain.decrypt(request.content, caller, wallet, WALLET_PRIV)
        assert json.loads(plaintext) == {"method": "pay_invoice", "params": {"invoice": "lnbc1..."}}

        content = await keychain.encrypt(json.dumps({"result": {"preimage": "ff"}}), caller, wallet, WALLET_PRIV)
        reply = await keychain.sign(Envelope(
            pubkey=wallet, kind=EventKind.RESPONSE, tags=[["p", caller], ["e", request.id]], content=content,
        ), WALLET_PRIV)
        response = await ResponseDecoder(keychain).decode(reply, wallet, caller, CALLER_PRIV)
        assert response.request_id == request.id
        assert response.preimage == "ff"
