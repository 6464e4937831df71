"""
Envelope construction and parsing — encrypted request events out, reply events in.
"""

import json
import logging
import time
from typing import Any, Optional

from nwc_client.errors import CryptoError, NWCError, SchemaError
from nwc_client.keychain import Keychain
from nwc_client.models.envelope import RESPONSE_KINDS, Envelope, build_tags
from nwc_client.models.request import WalletRequest
from nwc_client.models.response import Response

logger = logging.getLogger(__name__)


async def build_envelope(
    keychain: Keychain,
    request: WalletRequest,
    receiver: str,
    privkey: str,
    created_at: Optional[int] = None,
) -> Envelope:
    """Encrypt `request` to `receiver` and sign it as the owner of `privkey`."""
    sender = keychain.get_public_key(privkey)
    content = await _crypto(keychain.encrypt(request.to_json(), receiver, sender, privkey), "Encryption")
    unsigned = Envelope(
        pubkey=sender,
        kind=int(request.kind),
        tags=build_tags(receiver),
        content=content,
        created_at=created_at if created_at is not None else int(time.time()),
    )
    return await _crypto(keychain.sign(unsigned, privkey), "Signing")


async def parse_envelope(
    keychain: Keychain,
    event: Envelope,
    sender: str,
    receiver: str,
    privkey: str,
) -> Optional[Response]:
    """Decode a reply event. Returns None if it is not a reply addressed to `receiver`."""
    if event.kind not in RESPONSE_KINDS:
        return None

    p: Optional[str] = None
    request_id: Optional[str] = None
    for tag in event.tags:
        if len(tag) < 2:
            continue
        # last occurrence wins
        if tag[0] == "p":
            p = tag[1]
        elif tag[0] == "e":
            request_id = tag[1]
    if request_id is None or p != receiver:
        logger.debug("Ignoring event %s: e=%s p=%s", event.id, request_id, p)
        return None

    plaintext = await _crypto(keychain.decrypt(event.content, sender, receiver, privkey), "Decryption")
    payload = _loads(plaintext)

    error = payload.get("error")
    if error is not None:
        if not isinstance(error, dict):
            raise SchemaError("reply 'error' must be an object", field="error")
        return Response.error(request_id, _opt_str(error.get("code")), _opt_str(error.get("message")))

    result = payload.get("result")
    if result is not None:
        if not isinstance(result, dict):
            raise SchemaError("reply 'result' must be an object", field="result")
        return Response.success(request_id, result)

    logger.debug("Reply %s to %s has neither result nor error", event.id, request_id)
    return None


async def _crypto(awaitable: Any, what: str) -> Any:
    try:
        return await awaitable
    except NWCError:
        raise
    except Exception as e:
        raise CryptoError(f"{what} failed: {e}") from e


def _loads(plaintext: str) -> dict[str, Any]:
    try:
        payload = json.loads(plaintext)
    except (TypeError, ValueError) as e:
        raise SchemaError(f"reply content is not JSON: {e}") from e
    if not isinstance(payload, dict):
        raise SchemaError("reply content must be a JSON object")
    return payload


def _opt_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)
