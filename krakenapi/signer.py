"""Kraken API-Sign derivation.

    API-Sign = base64(HMAC-SHA512(base64decode(private_key),
                                  path + SHA256(nonce + encoded_params)))

`encoded_params` is the exact POST body, which itself contains the
`nonce=` field, so the nonce appears twice in the digest input.
"""
import base64
import binascii
import hashlib
import hmac

from .errors import ConfigurationError


def decode_private_key(private_key: str) -> bytes:
    try:
        return base64.b64decode(private_key, validate=True)
    except (binascii.Error, ValueError, TypeError):
        raise ConfigurationError("Private key must be base64-encoded for signing")


def sign(path: str, nonce: int, encoded_params: str, private_key: str) -> str:
    key = decode_private_key(private_key)
    try:
        digest = hashlib.sha256((str(nonce) + encoded_params).encode("utf-8")).digest()
        message = path.encode("utf-8") + digest
    except UnicodeEncodeError as e:
        raise ConfigurationError(f"Error encoding signature input: {e}")
    signature = hmac.new(key, message, hashlib.sha512)
    return base64.b64encode(signature.digest()).decode()
