"""
AsyncWalletConnect / WalletConnect — clients bound to one wallet connection.
"""

import asyncio
from typing import Any, Optional, Union

from nwc_client.builder import RequestBuilder
from nwc_client.decoder import ResponseDecoder
from nwc_client.dispatcher import DEFAULT_TIMEOUT_S, ResponseDispatcher
from nwc_client.keychain import Keychain, NostrKeychain
from nwc_client.models.envelope import Envelope
from nwc_client.models.response import Response
from nwc_client.uri import ConnectionURI


class AsyncWalletConnect:
    """Async Wallet Connect client (primary).

    Builds and registers requests, and resolves them from the events you feed
    in with `handle_event()`. Publishing to and subscribing on the relay is up
    to you: subscribe to kinds 23195/23197 tagged with `pubkey`.
    """

    def __init__(
        self,
        uri: Union[str, ConnectionURI],
        keychain: Optional[Keychain] = None,
        timeout: float = DEFAULT_TIMEOUT_S,
    ):
        self.uri = uri if isinstance(uri, ConnectionURI) else ConnectionURI.parse(uri)
        self._keychain = keychain or NostrKeychain()
        self.requests = RequestBuilder(self._keychain)
        self.decoder = ResponseDecoder(self._keychain)
        self.pubkey = self._keychain.get_public_key(self.uri.secret)
        self._dispatcher: Optional[ResponseDispatcher] = None
        self._timeout = timeout

    @property
    def wallet_pubkey(self) -> str:
        return self.uri.wallet_pubkey

    @property
    def dispatcher(self) -> ResponseDispatcher:
        # created lazily so it binds to the loop that actually awaits replies
        if self._dispatcher is None:
            self._dispatcher = ResponseDispatcher(
                self.decoder,
                sender=self.uri.wallet_pubkey,
                receiver=self.pubkey,
                privkey=self.uri.secret,
                timeout=self._timeout,
            )
        return self._dispatcher

    def _track(self, event: Envelope) -> Envelope:
        self.dispatcher.expect(event)
        return event

    async def pay_invoice(self, invoice: str, *, amount: Optional[int] = None) -> Envelope:
        return self._track(await self.requests.pay_invoice(
            invoice, self.wallet_pubkey, self.uri.secret, amount=amount,
        ))

    async def make_invoice(
        self,
        amount: int,
        *,
        description: Optional[str] = None,
        description_hash: Optional[str] = None,
        expiry: Optional[int] = None,
    ) -> Envelope:
        return self._track(await self.requests.make_invoice(
            amount=amount,
            receiver=self.wallet_pubkey,
            privkey=self.uri.secret,
            description=description,
            description_hash=description_hash,
            expiry=expiry,
        ))

    async def lookup_invoice(self, *, payment_hash: Optional[str] = None, invoice: Optional[str] = None) -> Envelope:
        return self._track(await self.requests.lookup_invoice(
            receiver=self.wallet_pubkey, privkey=self.uri.secret,
            payment_hash=payment_hash, invoice=invoice,
        ))

    async def list_transactions(self, **kwargs: Any) -> Envelope:
        """Keyword filters as RequestBuilder.list_transactions (from_, until, limit, ...)."""
        return self._track(await self.requests.list_transactions(
            receiver=self.wallet_pubkey, privkey=self.uri.secret, **kwargs,
        ))

    async def get_balance(self) -> Envelope:
        return self._track(await self.requests.get_balance(self.wallet_pubkey, self.uri.secret))

    async def get_info(self) -> Envelope:
        return self._track(await self.requests.get_info(self.wallet_pubkey, self.uri.secret))

    async def make_subscription_invoice(self, groupid: str, month: int) -> Envelope:
        return self._track(await self.requests.make_subscription_invoice(
            groupid, month, self.wallet_pubkey, self.uri.secret,
        ))

    async def lookup_subscription_invoice(self, payment_hash: str) -> Envelope:
        return self._track(await self.requests.lookup_subscription_invoice(
            payment_hash, self.wallet_pubkey, self.uri.secret,
        ))

    async def get_nwc_uri(self) -> Envelope:
        return self._track(await self.requests.get_nwc_uri(self.wallet_pubkey, self.uri.secret))

    async def decode(self, event: Envelope) -> Optional[Response]:
        """Decode a reply without touching the dispatcher."""
        return await self.decoder.decode(event, self.wallet_pubkey, self.pubkey, self.uri.secret)

    async def handle_event(self, event: Envelope) -> Optional[Response]:
        """Feed an event from the relay subscription."""
        return await self.dispatcher.feed(event)

    async def wait_for(self, request_event: Envelope, timeout: Optional[float] = None) -> Response:
        return await self.dispatcher.wait(request_event.id, timeout=timeout)

    def close(self) -> None:
        if self._dispatcher is not None:
            self._dispatcher.cancel_all()


class WalletConnect:
    """Sync wrapper around AsyncWalletConnect. Runs the event loop internally."""

    def __init__(self, uri: Union[str, ConnectionURI], **kwargs: Any):
        self._async = AsyncWalletConnect(uri, **kwargs)
        self._loop = asyncio.new_event_loop()

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def uri(self) -> ConnectionURI:
        return self._async.uri

    @property
    def pubkey(self) -> str:
        return self._async.pubkey

    def pay_invoice(self, invoice: str, **kwargs: Any) -> Envelope:
        return self._run(self._async.pay_invoice(invoice, **kwargs))

    def make_invoice(self, amount: int, **kwargs: Any) -> Envelope:
        return self._run(self._async.make_invoice(amount, **kwargs))

    def lookup_invoice(self, **kwargs: Any) -> Envelope:
        return self._run(self._async.lookup_invoice(**kwargs))

    def list_transactions(self, **kwargs: Any) -> Envelope:
        return self._run(self._async.list_transactions(**kwargs))

    def get_balance(self) -> Envelope:
        return self._run(self._async.get_balance())

    def get_info(self) -> Envelope:
        return self._run(self._async.get_info())

    def make_subscription_invoice(self, groupid: str, month: int) -> Envelope:
        return self._run(self._async.make_subscription_invoice(groupid, month))

    def lookup_subscription_invoice(self, payment_hash: str) -> Envelope:
        return self._run(self._async.lookup_subscription_invoice(payment_hash))

    def get_nwc_uri(self) -> Envelope:
        return self._run(self._async.get_nwc_uri())

    def decode(self, event: Envelope) -> Optional[Response]:
        return self._run(self._async.decode(event))

    def handle_event(self, event: Envelope) -> Optional[Response]:
        return self._run(self._async.handle_event(event))

    def wait_for(self, request_event: Envelope, timeout: Optional[float] = None) -> Response:
        return self._run(self._async.wait_for(request_event, timeout=timeout))

    def close(self) -> None:
        self._async.close()
        self._loop.close()
