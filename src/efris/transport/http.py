"""
HTTP transport: one POST endpoint, envelope bytes in, envelope bytes out.
"""

import logging
from typing import Optional

import httpx

from efris.config import PRODUCTION_URL
from efris.errors import TransportFailed

logger = logging.getLogger("efris.transport.http")


class HttpClient:
    def __init__(
        self,
        url: str = PRODUCTION_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._url = url
        self._client = httpx.AsyncClient(
            headers={"User-Agent": "efris-client/0.1.0", "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @property
    def url(self) -> str:
        return self._url

    async def post(self, body: bytes) -> bytes:
        """Send an encoded envelope. Connection errors, non-2xx statuses and empty bodies raise TransportFailed."""
        logger.debug("POST %s (%d bytes)", self._url, len(body))
        try:
            resp = await self._client.post(
                self._url, content=body, headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            raise TransportFailed(f"Request to {self._url} failed: {e}")
        if not resp.is_success:
            raise TransportFailed(f"HTTP {resp.status_code}: {resp.text[:200]}", status_code=resp.status_code)
        if not resp.content:
            raise TransportFailed("Empty response body", status_code=resp.status_code)
        logger.debug("Received %d bytes (HTTP %d)", len(resp.content), resp.status_code)
        return resp.content

    async def close(self) -> None:
        await self._client.aclose()
