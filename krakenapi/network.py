"""Request preparation and response classification shared by both clients.

The transport-independent half of a call lives here: building the
SignedRequest (nonce, canonical body, URL, API-Sign) and turning the raw
response body into a result mapping or a classified error. The blocking
and awaitable clients only add the HTTP round trip in between.
"""
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlsplit

from .config import ExchangeConfig
from .encoding import RequestCategory, build_url, encode_params, validate_base_url
from .errors import APIError, ConfigurationError, KrakenError, NetworkingError
from .logging_setup import logger
from .nonce import NonceSource
from .secrets import KrakenCredentials
from .signer import decode_private_key, sign

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass(frozen=True)
class SignedRequest:
    """A fully prepared HTTP request. Built once per call and never reused."""
    url: str
    http_method: str
    body: Optional[bytes] = None
    headers: Dict[str, str] = field(default_factory=dict, repr=False)  # carries API-Key / API-Sign


@dataclass(frozen=True)
class KrakenResult:
    """Outcome of one call: exactly one of `value` or `error` is set."""
    value: Optional[Dict[str, Any]] = None
    error: Optional[KrakenError] = None

    def __post_init__(self):
        if (self.value is None) == (self.error is None):
            raise ValueError("KrakenResult needs exactly one of value or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Dict[str, Any]:
        if self.error is not None:
            raise self.error
        return self.value


def classify_response(raw: bytes) -> Dict[str, Any]:
    """Resolve a Kraken response envelope to its `result` or raise.

    A non-empty `error` array always wins over `result`, even when both
    are present.
    """
    try:
        envelope = json.loads(raw)
    except (ValueError, TypeError) as e:
        raise NetworkingError(f"malformed JSON: {e}")

    if not isinstance(envelope, dict):
        raise NetworkingError("Wrong JSON structure")

    errors = envelope.get("error")
    if errors:
        if isinstance(errors, str):
            errors = [errors]
        messages = [str(e) for e in errors]
        raise APIError(messages[0], errors=messages)

    result = envelope.get("result")
    if not isinstance(result, dict):
        raise APIError("No result found")
    return result


class KrakenNetwork:
    """Owns credentials, nonce state and endpoint settings for one client."""

    def __init__(
        self,
        credentials: Optional[KrakenCredentials] = None,
        *,
        config: Optional[ExchangeConfig] = None,
        nonce_source: Optional[NonceSource] = None,
    ):
        self._config = config or ExchangeConfig()
        # Fail at construction rather than on the first call.
        self.base_url = validate_base_url(self._config.base_url)
        self.api_version = str(self._config.api_version)
        self.timeout = self._config.timeout
        self.user_agent = self._config.user_agent
        self._credentials = credentials
        self.nonce_source = nonce_source or NonceSource()
        if credentials is not None:
            decode_private_key(credentials.private_key)

    @property
    def has_credentials(self) -> bool:
        return self._credentials is not None

    def prepare(
        self,
        category: RequestCategory,
        method: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> SignedRequest:
        category = RequestCategory(category)
        params = dict(params or {})
        headers = {"User-Agent": self.user_agent}

        if category == RequestCategory.PUBLIC:
            url = build_url(self.base_url, self.api_version, category, method, encode_params(params))
            return SignedRequest(url=url, http_method="GET", headers=headers)

        if self._credentials is None:
            raise ConfigurationError(f"Private method {method} requires API credentials")

        nonce = self.nonce_source.next()
        params.pop("nonce", None)
        encoded = encode_params({"nonce": str(nonce), **params})
        url = build_url(self.base_url, self.api_version, category, method)
        signature = sign(urlsplit(url).path, nonce, encoded, self._credentials.private_key)
        headers.update({
            "API-Key": self._credentials.api_key,
            "API-Sign": signature,
            "Content-Type": FORM_CONTENT_TYPE,
        })
        return SignedRequest(
            url=url,
            http_method="POST",
            body=encoded.encode("utf-8"),
            headers=headers,
        )

    @staticmethod
    def _log_status(request: SignedRequest, status: int) -> None:
        if not (200 <= status < 300):
            logger.warning(f"Kraken returned HTTP {status} for {request.http_method} {urlsplit(request.url).path}")

    @staticmethod
    def _classify(request: SignedRequest, raw: bytes) -> Dict[str, Any]:
        try:
            return classify_response(raw)
        except APIError as e:
            logger.info(f"Kraken API error on {urlsplit(request.url).path}: {e.reason}")
            raise
