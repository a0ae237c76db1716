"""
efris-client: URA EFRIS web service client for Python.

Signs, encrypts and posts request envelopes, bootstraps the AES session key
over the T104 key exchange, and interprets the server's response envelopes.
"""

from efris.client import EFRIS, AsyncEFRIS
from efris.config import ClientConfig, PRODUCTION_URL, SANDBOX_URL
from efris.decoding import JSON, STRING, as_model
from efris.errors import EFRISError, TransportFailed, MalformedEnvelope, KeyExchangeFailed, DecodeFailed
from efris.interfaces import InterfaceCode
from efris.models.result import Success, Failure, Result

__version__ = "0.1.0"
__all__ = [
    "EFRIS",
    "AsyncEFRIS",
    "ClientConfig",
    "PRODUCTION_URL",
    "SANDBOX_URL",
    "JSON",
    "STRING",
    "as_model",
    "EFRISError",
    "TransportFailed",
    "MalformedEnvelope",
    "KeyExchangeFailed",
    "DecodeFailed",
    "InterfaceCode",
    "Success",
    "Failure",
    "Result",
]
