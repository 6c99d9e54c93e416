import pytest

from krakenapi.client import KrakenClient
from krakenapi.config import ExchangeConfig, KrakenConfig, LoggingConfig
from krakenapi.errors import ConfigurationError


def test_defaults_point_at_kraken():
    config = KrakenConfig()
    assert config.exchange.base_url == "https://api.kraken.com"
    assert config.exchange.api_version == "0"
    assert config.exchange.timeout is None
    assert config.logging.log_level == "INFO"


def test_from_yaml_interpolates_env(tmp_path, monkeypatch):
    monkeypatch.setenv("KRAKEN_LOG_DIR", str(tmp_path / "logs"))
    config_file = tmp_path / "kraken.yaml"
    config_file.write_text(
        "exchange:\n"
        "  base_url: https://api.example.test\n"
        "  api_version: 0\n"
        "  timeout: 15\n"
        "logging:\n"
        "  log_file: ${KRAKEN_LOG_DIR}/kraken.log\n"
        "  log_level: DEBUG\n"
    )

    config = KrakenConfig.from_yaml(str(config_file))

    assert config.exchange.base_url == "https://api.example.test"
    assert config.exchange.api_version == "0"
    assert config.exchange.timeout == 15
    assert config.logging.log_file == f"{tmp_path}/logs/kraken.log"
    assert config.logging.log_level == "DEBUG"


def test_from_yaml_missing_file():
    with pytest.raises(FileNotFoundError):
        KrakenConfig.from_yaml("/nonexistent/kraken.yaml")


def test_yaml_round_trip(tmp_path):
    original = KrakenConfig(
        exchange=ExchangeConfig(timeout=3.5),
        logging=LoggingConfig(log_file="out/kraken.log", enable_console=False),
    )
    path = tmp_path / "saved.yaml"

    original.to_yaml(str(path))

    assert KrakenConfig.from_yaml(str(path)) == original


def test_client_rejects_unusable_base_url():
    with pytest.raises(ConfigurationError, match="base URL"):
        KrakenClient(config=ExchangeConfig(base_url="api.kraken.com"))
