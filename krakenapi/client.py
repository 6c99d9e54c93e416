import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Dict, Mapping, Optional

import requests

from .config import ExchangeConfig
from .encoding import RequestCategory
from .endpoints import KrakenEndpoints
from .errors import KrakenError, NetworkingError, UnknownError
from .logging_setup import logger
from .network import KrakenNetwork, KrakenResult, SignedRequest
from .nonce import NonceSource
from .secrets import KrakenCredentials

ResultCallback = Callable[[KrakenResult], None]


class KrakenClient(KrakenNetwork, KrakenEndpoints):
    """Blocking Kraken REST client built on requests.

    Features:
    - Public calls as GET with the canonical query string.
    - Private calls as signed form POSTs (API-Key / API-Sign headers).
    - One attempt per call: no retries, no backoff, no session reuse.
    - Callback form (`submit_public` / `submit_private`) runs the same
      pipeline on a worker thread and delivers one KrakenResult.

    Usage:
        with KrakenClient(load_credentials()) as kraken:
            balances = kraken.account_balance()
    """

    def __init__(
        self,
        credentials: Optional[KrakenCredentials] = None,
        *,
        config: Optional[ExchangeConfig] = None,
        nonce_source: Optional[NonceSource] = None,
        max_workers: int = 4,
    ):
        super().__init__(credentials, config=config, nonce_source=nonce_source)
        self.max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None
        self._executor_lock = threading.Lock()

    @classmethod
    def from_credentials(cls, credentials: KrakenCredentials, **kwargs) -> "KrakenClient":
        return cls(credentials, **kwargs)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        with self._executor_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="kraken")
            return self._executor

    def _transport(self, request: SignedRequest) -> bytes:
        logger.debug(f"Kraken request: {request.http_method} {request.url.split('?', 1)[0]}")
        try:
            resp = requests.request(
                request.http_method,
                request.url,
                data=request.body,
                headers=request.headers,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise NetworkingError(f"Request failed: {e}")
        self._log_status(request, resp.status_code)
        return resp.content

    def _execute(
        self,
        category: RequestCategory,
        method: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> KrakenResult:
        """Run one call end to end. Never raises; the error is in the result."""
        try:
            request = self.prepare(category, method, params)
            raw = self._transport(request)
            return KrakenResult(value=self._classify(request, raw))
        except KrakenError as e:
            return KrakenResult(error=e)
        except Exception as e:
            logger.exception(f"Unexpected failure calling {method}")
            return KrakenResult(error=UnknownError.wrap(e))

    def _call(self, category: RequestCategory, method: str, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return self._execute(category, method, params).unwrap()

    def call_public(self, method: str, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Call a public endpoint. Returns `result` or raises a KrakenError."""
        return self._call(RequestCategory.PUBLIC, method, params)

    def call_private(self, method: str, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Call a private endpoint. Returns `result` or raises a KrakenError."""
        return self._call(RequestCategory.PRIVATE, method, params)

    def _submit(
        self,
        category: RequestCategory,
        method: str,
        params: Optional[Mapping[str, Any]],
        callback: Optional[ResultCallback],
    ) -> "Future[KrakenResult]":
        future = self._get_executor().submit(self._execute, category, method, params)
        if callback is not None:
            future.add_done_callback(lambda f: callback(f.result()))
        return future

    def submit_public(
        self,
        method: str,
        params: Optional[Mapping[str, Any]] = None,
        callback: Optional[ResultCallback] = None,
    ) -> "Future[KrakenResult]":
        return self._submit(RequestCategory.PUBLIC, method, params, callback)

    def submit_private(
        self,
        method: str,
        params: Optional[Mapping[str, Any]] = None,
        callback: Optional[ResultCallback] = None,
    ) -> "Future[KrakenResult]":
        return self._submit(RequestCategory.PRIVATE, method, params, callback)
