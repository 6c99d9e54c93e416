"""
Kraken REST API client.

A client for the Kraken spot REST API featuring:
- Public (GET) and private (signed POST) calls against /0/{public|private}/{Method}
- API-Sign derivation: HMAC-SHA512 over path + SHA256(nonce + body)
- Strictly increasing, thread-safe nonces per client
- Response envelopes classified into a result mapping or one typed error
- Blocking client (requests) and async client (aiohttp), each with a
  callback form
- Typed wrappers and option enums for every endpoint
- Structured logging via loguru
- Configuration-driven (YAML)

Core Modules:
    nonce: Nonce issuance
    encoding: Canonical parameter encoding and URL composition
    signer: API-Sign derivation
    network: Request preparation and response classification
    client: Blocking client
    async_client: Async client
    endpoints: Endpoint wrappers
    types: Option enums
    errors: Error taxonomy
    config: Configuration loading
    secrets: Credential management

Example:
    >>> from krakenapi import KrakenClient, load_credentials
    >>>
    >>> kraken = KrakenClient(load_credentials())
    >>> kraken.server_time()
    >>> kraken.account_balance()
"""

__version__ = "0.1.0"

from .async_client import AsyncKrakenClient
from .client import KrakenClient
from .config import KrakenConfig
from .encoding import RequestCategory
from .errors import (
    APIError,
    ConfigurationError,
    KrakenError,
    NetworkingError,
    UnknownError,
    ValidationError,
)
from .network import KrakenResult, SignedRequest
from .nonce import NonceSource
from .secrets import KrakenCredentials, load_credentials

__all__ = [
    "AsyncKrakenClient",
    "KrakenClient",
    "KrakenConfig",
    "KrakenCredentials",
    "KrakenResult",
    "SignedRequest",
    "RequestCategory",
    "NonceSource",
    "load_credentials",
    "KrakenError",
    "APIError",
    "NetworkingError",
    "ConfigurationError",
    "ValidationError",
    "UnknownError",
]
