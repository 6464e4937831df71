"""
Response dispatcher — match inbound replies to outstanding requests.

The builder and decoder are stateless; this keeps the table of request ids we
are still waiting on and hands each decoded Response to the right waiter.
Bound to the running event loop.

An answered request leaves the pending table at once. If no one is waiting on
it yet, its reply is parked in a bounded table until `wait` claims it.
"""

import asyncio
import logging
from collections import OrderedDict
from typing import Optional

from nwc_client.decoder import ResponseDecoder
from nwc_client.errors import RequestTimeoutError
from nwc_client.models.envelope import Envelope
from nwc_client.models.response import Response

DEFAULT_TIMEOUT_S = 60.0
# replies nobody has waited on yet; oldest are forgotten first
DEFAULT_MAX_UNCLAIMED = 256

logger = logging.getLogger(__name__)


class ResponseDispatcher:
    def __init__(
        self,
        decoder: ResponseDecoder,
        sender: str,
        receiver: str,
        privkey: str,
        timeout: float = DEFAULT_TIMEOUT_S,
        max_unclaimed: int = DEFAULT_MAX_UNCLAIMED,
    ):
        self._decoder = decoder
        self._sender = sender
        self._receiver = receiver
        self._privkey = privkey
        self._timeout = timeout
        self._pending: dict[str, asyncio.Future[Response]] = {}
        self._unclaimed: OrderedDict[str, asyncio.Future[Response]] = OrderedDict()
        self._max_unclaimed = max_unclaimed
        self._waiting: set[str] = set()

    @property
    def pending(self) -> list[str]:
        """Request ids still waiting on a reply."""
        return list(self._pending)

    def expect(self, request_event: Envelope) -> "asyncio.Future[Response]":
        """Register a published request. Returns the future its reply resolves."""
        if not request_event.id:
            raise ValueError("request event must be signed before it can be awaited")
        future = self._pending.get(request_event.id) or self._unclaimed.get(request_event.id)
        if future is None:
            future = asyncio.get_running_loop().create_future()
            self._pending[request_event.id] = future
            logger.debug("Expecting reply to %s", request_event.id)
        return future

    async def feed(self, event: Envelope) -> Optional[Response]:
        """Decode an inbound event and resolve its waiter, if any."""
        response = await self._decoder.decode(event, self._sender, self._receiver, self._privkey)
        if response is None:
            return None
        request_id = response.request_id
        future = self._pending.pop(request_id, None)
        if future is None:
            if request_id in self._unclaimed:
                logger.warning("Duplicate reply to %s ignored", request_id)
            else:
                logger.debug("Reply to unknown request %s", request_id)
            return response
        future.set_result(response)
        if request_id not in self._waiting:
            self._park(request_id, future)
        return response

    def _park(self, request_id: str, future: "asyncio.Future[Response]") -> None:
        self._unclaimed[request_id] = future
        while len(self._unclaimed) > self._max_unclaimed:
            dropped, _ = self._unclaimed.popitem(last=False)
            logger.debug("Forgetting unclaimed reply to %s", dropped)

    async def wait(self, request_id: str, timeout: Optional[float] = None) -> Response:
        """Await the reply to `request_id` and stop tracking it."""
        future = self._pending.get(request_id) or self._unclaimed.pop(request_id, None)
        if future is None:
            raise KeyError(f"Not waiting on request {request_id}")
        timeout = self._timeout if timeout is None else timeout
        self._waiting.add(request_id)
        try:
            return await asyncio.wait_for(asyncio.shield(future), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning("No reply to %s after %ss", request_id, timeout)
            self._pending.pop(request_id, None)
            future.cancel()
            raise RequestTimeoutError(request_id, timeout)
        finally:
            self._waiting.discard(request_id)

    def cancel_all(self) -> None:
        for future in self._pending.values():
            future.cancel()
        self._pending.clear()
        self._unclaimed.clear()
