"""End-to-end demo of the Kraken client.

Shows:
1. Loading configuration and credentials
2. Public market data calls
3. Private account calls (blocking and async)
4. Order validation without submitting (validate=true)
5. Structured logging
"""
import asyncio
import sys
from pathlib import Path

# Add parent directory to path so we can import krakenapi
sys.path.insert(0, str(Path(__file__).parent.parent))

from krakenapi import AsyncKrakenClient, KrakenClient, KrakenConfig, KrakenError, load_credentials
from krakenapi.logging_setup import logger, setup_logging_from_config
from krakenapi.types import OrderDirection, OrderType


async def async_balance(config: KrakenConfig, creds) -> None:
    kraken = AsyncKrakenClient(creds, config=config.exchange)
    balance, status = await asyncio.gather(kraken.account_balance(), kraken.system_status())
    logger.info(f"Async balance: {balance} (system {status.get('status')})")


def main():
    config_file = Path(__file__).parent / "kraken.yaml"
    config = KrakenConfig.from_yaml(str(config_file)) if config_file.exists() else KrakenConfig()
    setup_logging_from_config(config.logging)
    logger.info("=== Kraken Client Demo ===")

    with KrakenClient(config=config.exchange) as public:
        logger.info(f"Server time: {public.server_time()}")
        ticker = public.ticker("XBTUSD")
        logger.info(f"XBTUSD ticker keys: {list(ticker)}")

    try:
        creds = load_credentials()
    except ValueError as e:
        logger.error(f"Failed to load credentials: {e}")
        logger.info("Set environment variables: KRAKEN_API_KEY, KRAKEN_PRIVATE_KEY")
        return

    with KrakenClient(creds, config=config.exchange) as kraken:
        try:
            logger.info(f"Balance: {kraken.account_balance()}")
            check = kraken.add_order(
                OrderType.LIMIT,
                OrderDirection.BUY,
                "XBTUSD",
                volume="0.0001",
                price="1000",
                validate=True,
            )
            logger.info(f"Order validated: {check.get('descr')}")
        except KrakenError as e:
            logger.error(f"{type(e).__name__}: {e}")

    asyncio.run(async_balance(config, creds))


if __name__ == "__main__":
    main()
