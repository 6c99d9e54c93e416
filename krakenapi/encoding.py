"""Canonical parameter encoding and endpoint URL composition."""
from enum import Enum
from typing import Mapping
from urllib.parse import urlencode, urlsplit

from .errors import ConfigurationError


class RequestCategory(str, Enum):
    """Endpoint family; also the second path segment of the URL."""
    PUBLIC = "public"
    PRIVATE = "private"


_FORBIDDEN_METHOD_CHARS = set("/?#") | set(" \t\r\n")


def encode_params(params: Mapping[str, str]) -> str:
    """Form-encode parameters in their iteration order.

    The result is used verbatim both as the POST body and as signing input,
    so it must not be recomputed between the two.
    """
    return urlencode([(str(k), str(v)) for k, v in params.items()])


def validate_base_url(base_url: str) -> str:
    parts = urlsplit(base_url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigurationError(f"Invalid base URL: {base_url!r}")
    return base_url.rstrip("/")


def build_url(
    base_url: str,
    version: str,
    category: RequestCategory,
    method: str,
    encoded_params: str = "",
) -> str:
    """Compose `{base}/{version}/{category}/{method}`.

    Public calls carry the encoded parameters as the query string; private
    calls never put parameters in the URL.
    """
    base = validate_base_url(base_url)
    if not method or any(c in _FORBIDDEN_METHOD_CHARS for c in method):
        raise ConfigurationError(f"Invalid API method name: {method!r}")
    if not str(version) or "/" in str(version):
        raise ConfigurationError(f"Invalid API version: {version!r}")

    url = f"{base}/{version}/{RequestCategory(category).value}/{method}"
    if category == RequestCategory.PUBLIC and encoded_params:
        url = f"{url}?{encoded_params}"
    return url
