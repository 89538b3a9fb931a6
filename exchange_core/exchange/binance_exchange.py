"""
Binance Exchange Implementation
===============================

Concrete implementation of the BaseExchange interface for Binance spot.
Wraps two python-binance clients: an authenticated account client for
balances, orders and trade history, and a public market client for prices
and candlesticks.

Binance writes pairs as symbol and base concatenated (``BTCUSDT``) and sends
every numeric field as a string. A field that does not parse fails the
whole operation with ``GenericExchangeError``; there is no partial result.
"""

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Any, Callable, Dict, List

from binance.client import Client
from binance.exceptions import BinanceAPIException, BinanceRequestException
from requests.exceptions import RequestException

from exchange_core.models import Pair, Asset, Order, Trade, TradeType, Candlestick
from exchange_core.utils.exceptions import (
    BasePairNotFoundError, GenericExchangeError, NetworkError, create_exception_from_api_error
)
from exchange_core.utils.time_utils import local_datetime_from_millis, utc_datetime_from_millis
from .base_exchange import BaseExchange
from .profile import BINANCE_PROFILE, ExchangeProfile


class BinanceExchange(BaseExchange):
    """
    Binance spot exchange implementation.

    Example:
        >>> exchange = BinanceExchange.connect(api_key, secret_key)
        >>> exchange.btc_price()
        Pair(symbol='BTC', base='USDT', price=64012.5)
    """

    capabilities = {
        "market_data": True,
        "balances": True,
        "limit_orders": True,
        "stop_loss": False,
        "open_orders": True,
        "past_orders": False,
        "trade_history": True,
        "chart_data": True,
    }

    def __init__(self, account: Client, market: Client,
                 profile: ExchangeProfile = BINANCE_PROFILE):
        """
        Initialize Binance exchange with its clients.

        Args:
            account (Client): Authenticated client used for account endpoints
            market (Client): Client used for public market data
            profile (ExchangeProfile): Exchange-scoped bases and symbols
        """
        self.logger = logging.getLogger(__name__)
        self.account = account
        self.market = market
        self.profile = profile

    @classmethod
    def connect(cls, api_key: str, secret_key: str, testnet: bool = False,
                profile: ExchangeProfile = BINANCE_PROFILE) -> "BinanceExchange":
        """
        Create the account and market clients and wrap them.

        Raises:
            NetworkError: If the clients cannot reach Binance
        """
        logger = logging.getLogger(__name__)
        logger.info(f"🔌 Connecting to Binance (testnet: {testnet})...")
        try:
            account = Client(api_key, secret_key, testnet=testnet)
            market = Client(None, None, testnet=testnet)
        except BinanceAPIException as e:
            raise create_exception_from_api_error(
                {'code': e.code, 'msg': f"Binance API error while connecting: {e.message}"},
                exchange="binance", status_code=e.status_code
            ) from e
        except (BinanceRequestException, RequestException) as e:
            raise NetworkError(f"Failed to connect to Binance: {e}",
                               exchange="binance") from e

        logger.info("✅ Binance clients created")
        return cls(account, market, profile)

    # Market Data Methods

    def pair(self, pair: str) -> Pair:
        symbol, base = self.profile.split(pair)
        ticker = self._request("get price", self.market.get_symbol_ticker, symbol=pair)
        price = self._to_float(self._field(ticker, 'price'), 'price')
        return Pair(symbol=symbol, base=base, price=price)

    def all_pairs(self) -> List[Pair]:
        tickers = self._request("get all prices", self.market.get_all_tickers)

        pairs = []
        for ticker in tickers:
            raw_symbol = self._field(ticker, 'symbol')
            price = self._to_float(self._field(ticker, 'price'), 'price')
            try:
                pairs.append(self.string_to_pair(raw_symbol, price))
            except BasePairNotFoundError:
                self.logger.debug(f"Skipping {raw_symbol}: no known base currency")
        return pairs

    def chart_data(self, symbol: str, interval: str) -> List[Candlestick]:
        klines = self._request("get klines", self.market.get_klines,
                               symbol=symbol, interval=interval)

        # [open time, open, high, low, close, volume, close time,
        #  quote volume, number of trades, ...]
        return [
            Candlestick(
                open_time=utc_datetime_from_millis(self._to_int(self._field(kline, 0), 'open_time')),
                open_price=self._to_float(self._field(kline, 1), 'open'),
                high_price=self._to_float(self._field(kline, 2), 'high'),
                low_price=self._to_float(self._field(kline, 3), 'low'),
                close_price=self._to_float(self._field(kline, 4), 'close'),
                volume=self._to_float(self._field(kline, 5), 'volume'),
                number_of_trades=self._to_int(self._field(kline, 8), 'number_of_trades')
            )
            for kline in klines
        ]

    # Account Information Methods

    def balances(self) -> List[Asset]:
        account_info = self._request("get account", self.account.get_account)

        assets = []
        for balance in self._field(account_info, 'balances'):
            free = self._to_float(self._field(balance, 'free'), 'free')
            locked = self._to_float(self._field(balance, 'locked'), 'locked')
            amount = free + locked
            if amount > 0:  # Only include non-zero balances
                assets.append(self._build_asset(self._field(balance, 'asset'), amount, locked))
        return assets

    # Order Management Methods

    def limit_buy(self, symbol: str, amount: float, price: float) -> None:
        result = self._request("limit buy", self.account.order_limit_buy,
                               symbol=symbol, quantity=self._format_number(amount),
                               price=self._format_number(price))
        self.logger.info(f"✅ Binance limit buy {amount} {symbol} @ {price}: {result}")

    def limit_sell(self, symbol: str, amount: float, price: float) -> None:
        result = self._request("limit sell", self.account.order_limit_sell,
                               symbol=symbol, quantity=self._format_number(amount),
                               price=self._format_number(price))
        self.logger.info(f"✅ Binance limit sell {amount} {symbol} @ {price}: {result}")

    def stop_loss(self, symbol: str, amount: float, stop_price: float,
                  limit_price: float) -> None:
        raise self._unsupported("stop_loss")

    def open_orders(self) -> List[Order]:
        orders_data = self._request("get open orders", self.account.get_open_orders)
        return [self._convert_binance_order(order_data) for order_data in orders_data]

    def past_orders(self) -> List[Order]:
        raise self._unsupported("past_orders")

    # Trade History Methods

    def trades_for(self, symbol: str) -> List[Order]:
        self.logger.info(f"BINANCE: trades_for({symbol})")
        return [
            Order(
                id=str(self._field(trade, 'id')),
                symbol=symbol,
                order_type=TradeType.from_is_buy(self._field(trade, 'isBuyer')),
                qty=self._to_float(self._field(trade, 'qty'), 'qty'),
                price=self._to_float(self._field(trade, 'price'), 'price')
            )
            for trade in self._my_trades(symbol)
        ]

    def trade_history(self, symbol: str) -> List[Trade]:
        self.logger.info(f"BINANCE: trade_history({symbol})")
        pair = self.string_to_pair(symbol, 0.0)
        return [self._convert_binance_trade(trade, pair) for trade in self._my_trades(symbol)]

    def trades_for_pair(self, pair: Pair) -> List[Trade]:
        symbol = self.pair_format(pair)
        self.logger.info(f"BINANCE: trades_for_pair({symbol})")
        return [self._convert_binance_trade(trade, pair) for trade in self._my_trades(symbol)]

    # Private Helper Methods

    def _request(self, operation: str, call: Callable, **params) -> Any:
        """Run one client call, converting client failures into NetworkError."""
        self.logger.debug(f"BINANCE: {operation} {params or ''}")
        try:
            return call(**params)
        except BinanceAPIException as e:
            raise create_exception_from_api_error(
                {'code': e.code, 'msg': f"Binance API error during {operation}: {e.message}"},
                exchange=str(self.exchange), status_code=e.status_code
            ) from e
        except (BinanceRequestException, RequestException) as e:
            raise NetworkError(f"Binance request failed during {operation}: {e}",
                               exchange=str(self.exchange)) from e

    def _my_trades(self, symbol: str) -> List[Dict]:
        return self._request("get trade history", self.account.get_my_trades, symbol=symbol)

    @staticmethod
    def _format_number(value: float) -> str:
        """Plain decimal notation; Binance rejects exponents such as ``1e-05``."""
        return format(Decimal(str(value)), 'f')

    def _build_asset(self, symbol: str, amount: float, locked: float) -> Asset:
        try:
            return Asset(symbol=symbol, amount=amount, locked=locked, exchange=self.exchange)
        except ValueError as e:
            raise GenericExchangeError(f"Inconsistent balance for {symbol}: {e}",
                                       exchange=str(self.exchange), field_name='locked',
                                       field_value=locked) from e

    def _convert_binance_order(self, order_data: Dict) -> Order:
        """Convert Binance order data to an Order."""
        try:
            side = TradeType.from_side(self._field(order_data, 'side'))
        except ValueError as e:
            raise GenericExchangeError(str(e), exchange=str(self.exchange), field_name='side',
                                       field_value=order_data.get('side')) from e

        return Order(
            id=str(self._field(order_data, 'orderId')),
            symbol=self._field(order_data, 'symbol'),
            order_type=side,
            qty=self._to_float(self._field(order_data, 'origQty'), 'origQty'),
            price=self._to_float(self._field(order_data, 'price'), 'price')
        )

    def _convert_binance_trade(self, trade: Dict, pair: Pair) -> Trade:
        """Convert a Binance account trade to a Trade priced at its fill price."""
        price = self._to_float(self._field(trade, 'price'), 'price')
        return Trade(
            id=str(self._field(trade, 'id')),
            time=local_datetime_from_millis(self._to_int(self._field(trade, 'time'), 'time')),
            pair=replace(pair, price=price),
            trade_type=TradeType.from_is_buy(self._field(trade, 'isBuyer')),
            qty=self._to_float(self._field(trade, 'qty'), 'qty'),
            price=price
        )
