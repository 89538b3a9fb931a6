"""
Placeholder Exchange
====================

Base for exchanges that are declared but not connected to a client yet.
Exchange description and pair formatting work from the profile; every
operation that needs the exchange raises ``UnsupportedOperationError`` so
callers can skip the exchange instead of failing.
"""

import logging
from typing import List, Optional

from exchange_core.models import Pair, Asset, Order, Trade, Candlestick
from .base_exchange import BaseExchange


class PlaceholderExchange(BaseExchange):
    """Exchange adapter with no client-backed operations."""

    def __init__(self, api_key: Optional[str] = None, secret_key: Optional[str] = None):
        self.logger = logging.getLogger(__name__)
        self.api_key = api_key
        self.secret_key = secret_key
        self.logger.warning(f"⚠️ {self.display()} adapter has no client; "
                            f"market and account operations are unsupported")

    def pair(self, pair: str) -> Pair:
        raise self._unsupported("pair")

    def all_pairs(self) -> List[Pair]:
        raise self._unsupported("all_pairs")

    def chart_data(self, symbol: str, interval: str) -> List[Candlestick]:
        raise self._unsupported("chart_data")

    def balances(self) -> List[Asset]:
        raise self._unsupported("balances")

    def limit_buy(self, symbol: str, amount: float, price: float) -> None:
        raise self._unsupported("limit_buy")

    def limit_sell(self, symbol: str, amount: float, price: float) -> None:
        raise self._unsupported("limit_sell")

    def stop_loss(self, symbol: str, amount: float, stop_price: float,
                  limit_price: float) -> None:
        raise self._unsupported("stop_loss")

    def open_orders(self) -> List[Order]:
        raise self._unsupported("open_orders")

    def past_orders(self) -> List[Order]:
        raise self._unsupported("past_orders")

    def trades_for(self, symbol: str) -> List[Order]:
        raise self._unsupported("trades_for")

    def trade_history(self, symbol: str) -> List[Trade]:
        raise self._unsupported("trade_history")

    def trades_for_pair(self, pair: Pair) -> List[Trade]:
        raise self._unsupported("trades_for_pair")
