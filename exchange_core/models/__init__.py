"""
Domain Models
=============

Plain, immutable value types produced by every exchange adapter.
"""

from .pair import Pair
from .account import TradeType, Asset, Order, Trade
from .market_data import Candlestick

__all__ = [
    'Pair',
    'TradeType',
    'Asset',
    'Order',
    'Trade',
    'Candlestick'
]
