"""
REST transport collaborator.

Sends a SignedRequest and returns a TransportResponse. No retries, no rate
limiting: both belong to the caller's policy, not to this layer.
"""

import asyncio
from typing import Optional, Protocol

import aiohttp
import msgspec

from config.structs import NetworkConfig
from infrastructure.exceptions.exchange import ExchangeRestError
from infrastructure.logging import HFTLoggerInterface, get_logger
from infrastructure.networking.http.structs import SignedRequest, TransportResponse


class RestTransport(Protocol):
    """Anything that can perform one HTTP exchange for a signed request."""

    async def send(self, request: SignedRequest) -> TransportResponse:
        ...

    async def close(self) -> None:
        ...


class AiohttpRestTransport:
    """Single-shot aiohttp transport with a lazily created shared session."""

    def __init__(self, network: Optional[NetworkConfig] = None,
                 logger: Optional[HFTLoggerInterface] = None,
                 user_agent: str = "nominex-rest/1.0"):
        self.network = network or NetworkConfig()
        self.logger = logger or get_logger('rest.transport')
        self.user_agent = user_agent
        self._session: Optional[aiohttp.ClientSession] = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(
                total=self.network.request_timeout,
                connect=self.network.connect_timeout,
            )
            self._session = aiohttp.ClientSession(
                timeout=timeout,
                headers={
                    'User-Agent': self.user_agent,
                    'Accept': 'application/json',
                }
            )
        return self._session

    async def send(self, request: SignedRequest) -> TransportResponse:
        session = await self._ensure_session()
        try:
            async with session.request(
                request.method.value,
                request.url,
                data=request.body,
                headers=request.headers
            ) as response:
                text = await response.text()
                status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.logger.error("Transport failure",
                              method=request.method.value,
                              url=request.url,
                              error_type=type(e).__name__,
                              error_message=str(e))
            raise ExchangeRestError(0, f"Transport failure: {e}") from e

        return TransportResponse(status_code=status, body=self._decode(text), text=text)

    @staticmethod
    def _decode(text: str):
        """Parse JSON body; unparseable or empty bodies decode to None."""
        if not text:
            return None
        try:
            return msgspec.json.decode(text)
        except msgspec.DecodeError:
            return None

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None
