"""
Exchange Integration Module
===========================

One capability contract over several exchanges.

Key Components:
- BaseExchange: Abstract interface for all exchange implementations
- BinanceExchange: Binance implementation
- BittrexExchange, KucoinExchange: Declared exchanges without a client yet
- ExchangeProfile: Exchange-scoped base currencies and symbols
- create_exchange: Adapter selection from settings

Usage:
    from exchange_core.exchange import create_exchange, btc_pair
    from exchange_config.settings import get_settings

    exchange = create_exchange(get_settings())
    pairs = exchange.all_pairs()
    print(btc_pair(exchange, pairs))
"""

from .base_exchange import BaseExchange, btc_pair, usd_pair, find_pair
from .binance_exchange import BinanceExchange
from .bittrex_exchange import BittrexExchange
from .kucoin_exchange import KucoinExchange
from .profile import ExchangeProfile, BINANCE_PROFILE, BITTREX_PROFILE, KUCOIN_PROFILE
from .pair_parser import split_symbol_and_base, format_pair
from .factory import create_exchange

__all__ = [
    'BaseExchange',
    'BinanceExchange',
    'BittrexExchange',
    'KucoinExchange',
    'ExchangeProfile',
    'BINANCE_PROFILE',
    'BITTREX_PROFILE',
    'KUCOIN_PROFILE',
    'btc_pair',
    'usd_pair',
    'find_pair',
    'split_symbol_and_base',
    'format_pair',
    'create_exchange'
]
