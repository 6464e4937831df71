"""AsyncWalletConnect / WalletConnect wiring over a fake keychain."""

import asyncio

import pytest

from nwc_client import AsyncWalletConnect, ConnectionURI, InvalidArgumentError, WalletConnect

from conftest import CALLER_PRIV


@pytest.fixture
def uri(wallet_pub) -> str:
    return f"nostr+walletconnect://{wallet_pub}?relay=wss://relay.example&secret={CALLER_PRIV}"


@pytest.fixture
def client(uri, keychain):
    c = AsyncWalletConnect(uri, keychain=keychain, timeout=1.0)
    yield c
    c.close()


def test_client_derives_identity(client, caller_pub, wallet_pub):
    assert client.pubkey == caller_pub
    assert client.wallet_pubkey == wallet_pub
    assert isinstance(client.uri, ConnectionURI)


def test_bad_uri(keychain):
    with pytest.raises(InvalidArgumentError):
        AsyncWalletConnect("https://example.com", keychain=keychain)


@pytest.mark.asyncio
async def test_pay_invoice_round_trip(client, open_request, make_reply, wallet_pub):
    request = await client.pay_invoice("lnbc1...")
    assert request.tags == [["p", wallet_pub]]
    assert await open_request(request) == {"method": "pay_invoice", "params": {"invoice": "lnbc1..."}}
    assert client.dispatcher.pending == [request.id]

    await client.handle_event(await make_reply({"result": {"preimage": "pp"}}, request.id))
    response = await client.wait_for(request)
    assert response.preimage == "pp"


@pytest.mark.asyncio
async def test_list_transactions_typed(client, make_reply):
    request = await client.list_transactions(limit=2, type="incoming")
    tx = {"type": "incoming", "state": "pending", "payment_hash": "ab", "amount": 5, "created_at": 1}
    await client.handle_event(await make_reply({"result": {"transactions": [tx]}}, request.id))
    response = await client.wait_for(request)
    assert [t.amount for t in response.typed_transactions] == [5]


@pytest.mark.asyncio
async def test_subscription_request_kind(client, open_request):
    request = await client.make_subscription_invoice("g1", 6)
    assert request.kind == 23196
    assert (await open_request(request))["params"] == {"groupid": "g1", "month": 6}


@pytest.mark.asyncio
async def test_error_reply(client, make_reply):
    request = await client.make_invoice(1000, description="x")
    await client.handle_event(await make_reply({"error": {"code": "QUOTA_EXCEEDED", "message": "m"}}, request.id))
    response = await client.wait_for(request)
    assert not response.is_success and response.error_code == "QUOTA_EXCEEDED"


@pytest.mark.asyncio
async def test_decode_does_not_touch_dispatcher(client, make_reply):
    response = await client.decode(await make_reply({"result": {"balance": 1}}, "elsewhere"))
    assert response.balance == 1
    assert client.dispatcher.pending == []


def test_sync_client(uri, keychain, make_reply):
    client = WalletConnect(uri, keychain=keychain, timeout=1.0)
    try:
        request = client.get_balance()
        reply = asyncio.run(make_reply({"result": {"balance": 123}}, request.id))
        assert client.handle_event(reply).balance == 123
        assert client.wait_for(request).balance == 123
    finally:
        client.close()
