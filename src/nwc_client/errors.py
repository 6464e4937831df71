"""
Wallet Connect error types.
"""

from typing import Any, Optional


class NWCError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details


class InvalidArgumentError(NWCError, ValueError):
    """Caller-supplied parameters violate a method's precondition."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("invalid_argument", message, details)


class CryptoError(NWCError):
    """Encryption, decryption or signing failed (key mismatch, bad ciphertext)."""

    def __init__(self, message: str):
        super().__init__("crypto_failure", message)


class SchemaError(NWCError):
    """A payload is malformed or lacks a required field."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__("schema_error", message, {"field": field} if field else None)
        self.field = field


class WalletError(NWCError):
    """Error reported by the wallet service in a reply."""

    def __init__(self, code: Optional[str], message: Optional[str], request_id: Optional[str] = None):
        super().__init__(code or "OTHER", message or "", {"request_id": request_id} if request_id else None)
        self.request_id = request_id


class RequestTimeoutError(NWCError, TimeoutError):
    def __init__(self, request_id: str, timeout: float):
        super().__init__("timeout", f"No reply to {request_id} after {timeout}s", {"request_id": request_id})
        self.request_id = request_id
