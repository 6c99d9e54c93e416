"""Credential lookup for private calls.

Sources, first complete one wins:
1. Environment variables: KRAKEN_API_KEY, KRAKEN_PRIVATE_KEY
2. JSON file `{"api_key": ..., "private_key": ...}` at the given path,
   KRAKEN_CONFIG_PATH, or ~/.kraken_config.json
"""
import json
import os
from pathlib import Path
from typing import NamedTuple, Optional, Tuple

from .signer import decode_private_key

ENV_API_KEY = "KRAKEN_API_KEY"
ENV_PRIVATE_KEY = "KRAKEN_PRIVATE_KEY"
ENV_CONFIG_PATH = "KRAKEN_CONFIG_PATH"
DEFAULT_CONFIG_FILE = ".kraken_config.json"


class KrakenCredentials(NamedTuple):
    api_key: str
    private_key: str  # base64, as shown on the Kraken API key page

    def __repr__(self) -> str:
        return "KrakenCredentials(api_key='***', private_key='***')"


def _read_key_file(path: Path) -> Tuple[Optional[str], Optional[str]]:
    try:
        with path.open("r") as f:
            cfg = json.load(f)
    except (OSError, ValueError) as e:
        raise ValueError(f"Failed to load Kraken keys from {path}: {e}")
    if not isinstance(cfg, dict):
        raise ValueError(f"Kraken key file {path} must hold a JSON object")
    return cfg.get("api_key"), cfg.get("private_key")


def load_credentials(config_path: Optional[str] = None) -> KrakenCredentials:
    """Look up the API key pair and check the private key decodes.

    Raises:
        ValueError: no complete key pair was found, or the key file is unreadable
        ConfigurationError: the private key is not valid base64
    """
    api_key = os.getenv(ENV_API_KEY)
    private_key = os.getenv(ENV_PRIVATE_KEY)

    if not (api_key and private_key):
        path = Path(config_path or os.getenv(ENV_CONFIG_PATH) or Path.home() / DEFAULT_CONFIG_FILE)
        if path.exists():
            file_key, file_secret = _read_key_file(path)
            api_key = file_key or api_key
            private_key = file_secret or private_key
        if not (api_key and private_key):
            raise ValueError(
                f"Missing Kraken credentials: set {ENV_API_KEY} and {ENV_PRIVATE_KEY}, "
                f"or provide a key file at {path} ({ENV_CONFIG_PATH} overrides the location)"
            )

    decode_private_key(private_key)
    return KrakenCredentials(api_key=api_key, private_key=private_key)
