"""
EFRIS / AsyncEFRIS: main SDK clients.
"""

import asyncio
import logging
from typing import Any, Callable, Optional

import httpx
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from efris.config import ClientConfig
from efris.crypto import encode_plain, encrypt as encrypt_block, sign
from efris.decoding import JSON, Decoder
from efris.goods import GoodsAPI
from efris.interfaces import InterfaceCode
from efris.interpreter import ResponseInterpreter
from efris.invoices import InvoicesAPI
from efris.models.envelope import DataBlock, Envelope
from efris.models.result import Result
from efris.session_key import SessionKeyManager
from efris.transport.envelope import build_envelope, decode_envelope, encode_envelope, serialize_content
from efris.transport.http import HttpClient

logger = logging.getLogger("efris.client")


class AsyncEFRIS:
    """Async EFRIS client (primary)."""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        private_key: Optional[RSAPrivateKey] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        cache_session_key: bool = False,
        **settings: Any,
    ):
        if config is None:
            config = ClientConfig(**settings)
        elif settings:
            config = config.model_copy(update=settings)
        self.config = config
        self._private_key = private_key if private_key is not None else config.load_private_key()

        self.http = HttpClient(url=config.url, timeout=config.timeout, transport=transport)
        self.keys = SessionKeyManager(self._exchange, self._private_key, cache=cache_session_key)
        self._interpreter = ResponseInterpreter(self.keys.obtain_key, self._private_key)
        self.invoices = InvoicesAPI(self.send)
        self.goods = GoodsAPI(self.send)

    async def send(
        self,
        interface_code: str,
        content: Any = None,
        decoder: Decoder = JSON,
        *,
        encrypt: bool = True,
        session_key: Optional[bytes] = None,
    ) -> Result:
        """
        Sign, optionally encrypt, and send ``content`` to ``interface_code``.

        Returns a Success, or a Failure when the server's return state is not "00".
        Transport and protocol errors are raised.
        """
        block = DataBlock(content=serialize_content(content) if content is not None else "")
        sign(block, self._private_key)
        if encrypt:
            if session_key is None:
                session_key = await self.keys.obtain_key()
            encrypt_block(block, session_key)
        else:
            encode_plain(block)

        envelope = await self._exchange(interface_code, block)
        return await self._interpreter.interpret(envelope, decoder, session_key)

    async def obtain_key(self) -> bytes:
        """Run the key exchange and return the session key."""
        return await self.keys.obtain_key()

    async def taxpayer_info(self, tin: str, decoder: Decoder = JSON) -> Result:
        """Look up a taxpayer by TIN."""
        return await self.send(InterfaceCode.TAXPAYER_INFO, {"tin": tin}, decoder)

    async def close(self) -> None:
        await self.http.close()

    async def __aenter__(self) -> "AsyncEFRIS":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def _exchange(self, interface_code: str, block: DataBlock) -> Envelope:
        envelope = build_envelope(self.config, interface_code, block)
        logger.debug("Sending %s (codeType=%s, encryptCode=%s)", interface_code,
                     block.data_description.code_type, block.data_description.encrypt_code)
        raw = await self.http.post(encode_envelope(envelope))
        return decode_envelope(raw)


class _SyncAPI:
    """Blocking view of an async endpoint group (InvoicesAPI, GoodsAPI)."""

    def __init__(self, api: Any, run: Callable[[Any], Any]):
        self._api = api
        self._run = run

    def __getattr__(self, name: str) -> Callable[..., Result]:
        method = getattr(self._api, name)

        def call(*args: Any, **kwargs: Any) -> Result:
            return self._run(method(*args, **kwargs))
        return call


class EFRIS:
    """Sync wrapper around AsyncEFRIS. Runs the event loop internally."""

    def __init__(self, config: Optional[ClientConfig] = None, **kwargs: Any):
        self._async = AsyncEFRIS(config, **kwargs)
        self._loop = asyncio.new_event_loop()
        self.invoices = _SyncAPI(self._async.invoices, self._run)
        self.goods = _SyncAPI(self._async.goods, self._run)

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def config(self) -> ClientConfig:
        return self._async.config

    def send(self, interface_code: str, content: Any = None, decoder: Decoder = JSON, **kwargs: Any) -> Result:
        return self._run(self._async.send(interface_code, content, decoder, **kwargs))

    def obtain_key(self) -> bytes:
        return self._run(self._async.obtain_key())

    def taxpayer_info(self, tin: str, decoder: Decoder = JSON) -> Result:
        return self._run(self._async.taxpayer_info(tin, decoder))

    def close(self) -> None:
        self._run(self._async.close())
        self._loop.close()
