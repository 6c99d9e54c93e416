"""Configuration loader for the Kraken client.

Supports YAML format with environment variable interpolation.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from . import __version__


@dataclass
class ExchangeConfig:
    """Kraken endpoint settings."""
    base_url: str = "https://api.kraken.com"
    api_version: str = "0"
    timeout: Optional[float] = None  # None leaves the HTTP library default in place
    user_agent: str = f"krakenapi/{__version__}"


@dataclass
class LoggingConfig:
    log_file: str = "kraken.log"
    log_level: str = "INFO"
    enable_console: bool = True


@dataclass
class KrakenConfig:
    """Complete client configuration."""
    exchange: ExchangeConfig = field(default_factory=ExchangeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, config_path: str) -> "KrakenConfig":
        """Load configuration from YAML file with env var interpolation.

        Args:
            config_path: Path to YAML config file

        Returns:
            KrakenConfig instance

        Example YAML:
            exchange:
              base_url: https://api.kraken.com
              timeout: 15
            logging:
              log_file: "${LOG_DIR}/kraken.log"
              log_level: DEBUG
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with config_file.open("r") as f:
            raw = f.read()

        # Interpolate environment variables: ${VAR_NAME}
        for key, value in os.environ.items():
            raw = raw.replace(f"${{{key}}}", value)

        data = yaml.safe_load(raw) or {}

        exchange = ExchangeConfig(**data.get("exchange", {}))
        exchange.api_version = str(exchange.api_version)
        logging_cfg = LoggingConfig(**data.get("logging", {}))

        return cls(exchange=exchange, logging=logging_cfg)

    def to_yaml(self, output_path: str) -> None:
        """Save configuration to YAML file."""
        data = {
            "exchange": {
                "base_url": self.exchange.base_url,
                "api_version": self.exchange.api_version,
                "timeout": self.exchange.timeout,
                "user_agent": self.exchange.user_agent,
            },
            "logging": {
                "log_file": self.logging.log_file,
                "log_level": self.logging.log_level,
                "enable_console": self.logging.enable_console,
            },
        }

        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with output_file.open("w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
