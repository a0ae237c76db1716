"""
Response interpretation.

Branches on the channel mode and interface code of a decoded response envelope:

1. Session-key encrypted content is decrypted (fetching a key if none was
   supplied) and decoded with the caller's decoder.
2. The T104 reply yields the raw session key bytes.
3. Any other plain reply is decoded as untyped JSON.
"""

import logging
from typing import Any, Awaitable, Callable, Optional

from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from efris.crypto import ChannelMode, decode_plain, decrypt
from efris.decoding import JSON, Decoder
from efris.interfaces import BOOTSTRAP_INTERFACE_CODE, SUCCESS_RETURN_CODE
from efris.models.envelope import Envelope
from efris.models.result import Failure, Result, build_result
from efris.session_key import extract_session_key

logger = logging.getLogger("efris.interpreter")

KeyProvider = Callable[[], Awaitable[bytes]]


class ResponseInterpreter:
    def __init__(self, key_provider: KeyProvider, private_key: RSAPrivateKey):
        self._key_provider = key_provider
        self._private_key = private_key

    async def interpret(self, envelope: Envelope, decoder: Decoder, key: Optional[bytes] = None) -> Result:
        state = envelope.return_state_info
        block = envelope.data
        mode = ChannelMode.classify(block.data_description)

        if mode is ChannelMode.SESSION_KEY_ENCRYPTED:
            if key is None:
                key = await self._key_provider()
            decrypt(block, key)
            return build_result(state, self._decode_typed(block.content, decoder))

        if mode is ChannelMode.UNKNOWN:
            logger.warning(
                "Unrecognised encryptCode %r on %s response, treating content as plain",
                block.data_description.encrypt_code, envelope.global_info.interface_code,
            )

        if envelope.global_info.interface_code == BOOTSTRAP_INTERFACE_CODE:
            if state is not None and state.return_code != SUCCESS_RETURN_CODE:
                return Failure(code=state.return_code, message=state.return_message, data="", return_state=state)
            return build_result(state, extract_session_key(block.content, self._private_key))

        if not block.content:
            return build_result(state, "")
        return build_result(state, JSON.decode(decode_plain(block.content)))

    @staticmethod
    def _decode_typed(content: str, decoder: Decoder) -> Any:
        if content == "":
            return ""
        return decoder.decode(content)
