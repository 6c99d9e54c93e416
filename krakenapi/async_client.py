import asyncio
from typing import Any, Callable, Dict, Mapping, Optional

import aiohttp

from .config import ExchangeConfig
from .encoding import RequestCategory
from .endpoints import KrakenEndpoints
from .errors import KrakenError, NetworkingError, UnknownError
from .logging_setup import logger
from .network import KrakenNetwork, KrakenResult, SignedRequest
from .nonce import NonceSource
from .secrets import KrakenCredentials

ResultCallback = Callable[[KrakenResult], None]


class AsyncKrakenClient(KrakenNetwork, KrakenEndpoints):
    """Async Kraken REST client using aiohttp.

    Features:
    - Non-blocking async/await; suspension happens only on the HTTP round trip.
    - Same request preparation and signing as KrakenClient.
    - One attempt per call, no retries.
    - Callback form (`schedule_public` / `schedule_private`) wraps the awaited
      call in a task and delivers one KrakenResult.

    A caller-owned `aiohttp.ClientSession` may be passed in; otherwise each
    call opens and closes its own session.

    Usage:
        kraken = AsyncKrakenClient(load_credentials())
        balances = await kraken.account_balance()
    """

    def __init__(
        self,
        credentials: Optional[KrakenCredentials] = None,
        *,
        config: Optional[ExchangeConfig] = None,
        nonce_source: Optional[NonceSource] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        super().__init__(credentials, config=config, nonce_source=nonce_source)
        self.session = session

    async def _send(self, session: aiohttp.ClientSession, request: SignedRequest) -> bytes:
        timeout = aiohttp.ClientTimeout(total=self.timeout) if self.timeout else None
        kwargs = {"data": request.body, "headers": request.headers}
        if timeout is not None:
            kwargs["timeout"] = timeout
        async with session.request(request.http_method, request.url, **kwargs) as resp:
            self._log_status(request, resp.status)
            return await resp.read()

    async def _transport(self, request: SignedRequest) -> bytes:
        logger.debug(f"Kraken request: {request.http_method} {request.url.split('?', 1)[0]}")
        try:
            if self.session is not None:
                return await self._send(self.session, request)
            async with aiohttp.ClientSession() as session:
                return await self._send(session, request)
        except asyncio.TimeoutError as e:
            raise NetworkingError(f"Request timeout: {e}")
        except aiohttp.ClientError as e:
            raise NetworkingError(f"Request failed: {e}")

    async def _execute(
        self,
        category: RequestCategory,
        method: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> KrakenResult:
        """Run one call end to end. Never raises; the error is in the result."""
        try:
            request = self.prepare(category, method, params)
            raw = await self._transport(request)
            return KrakenResult(value=self._classify(request, raw))
        except KrakenError as e:
            return KrakenResult(error=e)
        except Exception as e:
            logger.exception(f"Unexpected failure calling {method}")
            return KrakenResult(error=UnknownError.wrap(e))

    async def _call(self, category: RequestCategory, method: str, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return (await self._execute(category, method, params)).unwrap()

    async def call_public(self, method: str, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return await self._call(RequestCategory.PUBLIC, method, params)

    async def call_private(self, method: str, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return await self._call(RequestCategory.PRIVATE, method, params)

    def _schedule(
        self,
        category: RequestCategory,
        method: str,
        params: Optional[Mapping[str, Any]],
        callback: Optional[ResultCallback],
    ) -> "asyncio.Task[KrakenResult]":
        task = asyncio.get_running_loop().create_task(self._execute(category, method, params))
        if callback is not None:
            task.add_done_callback(lambda t: callback(self._task_outcome(t, method)))
        return task

    @staticmethod
    def _task_outcome(task: "asyncio.Task[KrakenResult]", method: str) -> KrakenResult:
        # _execute never raises, so cancellation is the only way to finish without a result.
        if task.cancelled():
            return KrakenResult(error=UnknownError(f"Call to {method} was cancelled"))
        return task.result()

    def schedule_public(
        self,
        method: str,
        params: Optional[Mapping[str, Any]] = None,
        callback: Optional[ResultCallback] = None,
    ) -> "asyncio.Task[KrakenResult]":
        """Start a public call on the running loop; must be called from a coroutine."""
        return self._schedule(RequestCategory.PUBLIC, method, params, callback)

    def schedule_private(
        self,
        method: str,
        params: Optional[Mapping[str, Any]] = None,
        callback: Optional[ResultCallback] = None,
    ) -> "asyncio.Task[KrakenResult]":
        return self._schedule(RequestCategory.PRIVATE, method, params, callback)
