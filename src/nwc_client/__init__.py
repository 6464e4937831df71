"""
nwc-client — Wallet Connect (NIP-47) request/response client for Python.

Builds encrypted wallet requests as signed relay events and decodes the
wallet's replies into typed outcomes.
"""

from nwc_client.client import AsyncWalletConnect, WalletConnect
from nwc_client.builder import RequestBuilder
from nwc_client.decoder import ResponseDecoder
from nwc_client.dispatcher import ResponseDispatcher
from nwc_client.keychain import Keychain, NostrKeychain
from nwc_client.uri import ConnectionURI
from nwc_client.errors import (
    NWCError,
    InvalidArgumentError,
    CryptoError,
    SchemaError,
    WalletError,
    RequestTimeoutError,
)
from nwc_client.models.envelope import Envelope, EventKind
from nwc_client.models.response import Response, PayInvoiceResult
from nwc_client.models.transaction import Transaction

__version__ = "0.1.0"
__all__ = [
    "AsyncWalletConnect",
    "WalletConnect",
    "RequestBuilder",
    "ResponseDecoder",
    "ResponseDispatcher",
    "Keychain",
    "NostrKeychain",
    "ConnectionURI",
    "NWCError",
    "InvalidArgumentError",
    "CryptoError",
    "SchemaError",
    "WalletError",
    "RequestTimeoutError",
    "Envelope",
    "EventKind",
    "Response",
    "PayInvoiceResult",
    "Transaction",
]
