"""
EFRIS error types.

Protocol and transport problems are raised. Business failures reported by the
server through returnStateInfo are returned as ``Failure`` values instead.
"""

from typing import Any, Optional


class EFRISError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class TransportFailed(EFRISError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__("transport_failed", message, {"status_code": status_code} if status_code else None)
        self.status_code = status_code


class MalformedEnvelope(EFRISError):
    def __init__(self, message: str, raw: Optional[bytes] = None):
        super().__init__("malformed_envelope", message)
        self.raw = raw


class KeyExchangeFailed(EFRISError):
    """The T104 handshake did not produce a usable session key."""

    def __init__(self, message: str, code: str = "key_exchange_failed"):
        super().__init__(code, message)


class DecodeFailed(EFRISError):
    """Plaintext content could not be decoded. ``raw`` keeps the content as received."""

    def __init__(self, message: str, raw: Any = None):
        super().__init__("decode_failed", message, {"raw": raw})
        self.raw = raw
