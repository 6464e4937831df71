"""
Response decoder — turn inbound reply events into Response outcomes.
"""

from typing import Optional

from nwc_client.keychain import Keychain
from nwc_client.models.envelope import Envelope
from nwc_client.models.response import Response
from nwc_client.transport.envelope import parse_envelope


class ResponseDecoder:
    def __init__(self, keychain: Keychain):
        self._keychain = keychain

    async def decode(self, event: Envelope, sender: str, receiver: str, privkey: str) -> Optional[Response]:
        """Decode one event from the relay.

        `sender` is the wallet service that authored the reply, `receiver` is our
        own pubkey (the reply's "p" tag must name it) and `privkey` is our key.

        Returns None for events that are not a reply addressed to us: wrong kind,
        no "e" tag, a "p" tag naming someone else, or a payload with neither
        `result` nor `error`. Raises CryptoError if the content cannot be
        decrypted and SchemaError if it is not a JSON object.
        """
        return await parse_envelope(self._keychain, event, sender, receiver, privkey)
