"""
Exchange Factory
================

Builds the adapter for the exchange named in the settings.

Usage:
    from exchange_config.settings import get_settings
    from exchange_core.exchange import create_exchange

    exchange = create_exchange(get_settings())
    print(exchange.btc_price())
"""

import logging
from typing import Dict, Type

from exchange_core.identity import Exchange
from exchange_core.utils.exceptions import ConfigurationError
from .base_exchange import BaseExchange
from .binance_exchange import BinanceExchange
from .bittrex_exchange import BittrexExchange
from .kucoin_exchange import KucoinExchange

logger = logging.getLogger(__name__)

EXCHANGE_REGISTRY: Dict[Exchange, Type[BaseExchange]] = {
    Exchange.BINANCE: BinanceExchange,
    Exchange.BITTREX: BittrexExchange,
    Exchange.KUCOIN: KucoinExchange,
}


def create_exchange(settings=None) -> BaseExchange:
    """
    Create the exchange adapter selected by the settings.

    Args:
        settings: Settings object (loaded with ``get_settings()`` when None)

    Returns:
        BaseExchange: Adapter bound to the configured exchange

    Raises:
        ConfigurationError: If no supported exchange is configured
        NetworkError: If the exchange client cannot be created
    """
    if settings is None:
        from exchange_config.settings import get_settings
        settings = get_settings()

    identity = settings.exchange.exchange
    exchange_class = EXCHANGE_REGISTRY.get(identity)
    if exchange_class is None:
        raise ConfigurationError(f"No adapter for exchange '{identity}'",
                                 config_key="EXCHANGE", config_value=settings.exchange.name)

    api_key, secret_key = settings.exchange.get_decrypted_keys()
    logger.info(f"🏗️ Creating {exchange_class.__name__}")

    if exchange_class is BinanceExchange:
        return BinanceExchange.connect(api_key, secret_key, testnet=settings.exchange.testnet)
    return exchange_class(api_key, secret_key)
