"""
Session key bootstrap: the T104 key exchange.

The server answers T104 with an unencrypted data block whose JSON content holds
``passowrdDes``: the AES session key, base64-encoded, RSA-encrypted to the
taxpayer's public key, and base64-encoded again.
"""

import base64
import binascii
import json
import logging
from typing import Awaitable, Callable, Optional

from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from efris.crypto import rsa_decrypt
from efris.errors import KeyExchangeFailed
from efris.interfaces import BOOTSTRAP_INTERFACE_CODE, SUCCESS_RETURN_CODE
from efris.models.envelope import DataBlock, Envelope

logger = logging.getLogger("efris.session_key")

PASSWORD_FIELD = "passowrdDes"
AES_KEY_SIZES = (16, 24, 32)

Exchange = Callable[[str, DataBlock], Awaitable[Envelope]]


def extract_session_key(content: str, private_key: RSAPrivateKey) -> bytes:
    """Recover raw AES key bytes from the content of a successful T104 response."""
    try:
        payload = json.loads(base64.b64decode(content))
        blob = base64.b64decode(payload[PASSWORD_FIELD])
        key = base64.b64decode(rsa_decrypt(blob, private_key), validate=True)
    except (KeyError, TypeError, ValueError, binascii.Error) as e:
        raise KeyExchangeFailed(f"Could not recover session key: {e!r}")
    if len(key) not in AES_KEY_SIZES:
        raise KeyExchangeFailed(f"Recovered session key has invalid length {len(key)}")
    return key


class SessionKeyManager:
    """
    Obtains session keys on demand.

    Every call to obtain_key() runs a fresh exchange unless ``cache`` is set,
    in which case the last key is reused until invalidate() is called.
    """

    def __init__(self, exchange: Exchange, private_key: RSAPrivateKey, cache: bool = False):
        self._exchange = exchange
        self._private_key = private_key
        self._cache = cache
        self._key: Optional[bytes] = None

    async def obtain_key(self) -> bytes:
        if self._cache and self._key is not None:
            return self._key

        logger.debug("Requesting session key (%s)", BOOTSTRAP_INTERFACE_CODE)
        envelope = await self._exchange(BOOTSTRAP_INTERFACE_CODE, DataBlock(content=""))
        state = envelope.return_state_info
        if state is not None and state.return_code != SUCCESS_RETURN_CODE:
            raise KeyExchangeFailed(state.return_message or "Key exchange rejected", code=state.return_code)

        key = extract_session_key(envelope.data.content, self._private_key)
        if self._cache:
            self._key = key
        return key

    def invalidate(self) -> None:
        self._key = None
