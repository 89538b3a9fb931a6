"""
Market Streaming Module
=======================

Real-time trade feed subscriptions running outside the request/response flow.
"""

from .events import (
    AggregatedTradeEvent,
    DepthUpdateEvent,
    PartialOrderBookEvent,
    MarketEvent,
    normalize_market_event
)
from .listener import BinanceTradeListener, StreamHandler, LoggingStreamHandler

__all__ = [
    'AggregatedTradeEvent',
    'DepthUpdateEvent',
    'PartialOrderBookEvent',
    'MarketEvent',
    'normalize_market_event',
    'BinanceTradeListener',
    'StreamHandler',
    'LoggingStreamHandler'
]
