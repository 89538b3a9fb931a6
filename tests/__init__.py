"""
Tests Module
============

Test suite for the exchange hub.

Test Organization:
- unit/: Unit tests for individual components
- conftest.py: Shared pytest fixtures

The helpers below stand in for python-binance clients so no test ever
reaches the network.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List
from unittest.mock import MagicMock

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

VALID_API_KEY = "a" * 64
VALID_SECRET_KEY = "b" * 64

KLINE_START_MS = 1640995200000  # 2022-01-01 00:00:00 UTC
FIVE_MINUTES_MS = 300000


class MockBinanceClient:
    """Canned python-binance ``Client`` responses."""

    def __init__(self):
        self.account_info_response = {
            'accountType': 'SPOT',
            'balances': [
                {'asset': 'USDT', 'free': '10000.00000000', 'locked': '0.00000000'},
                {'asset': 'BTC', 'free': '1.50000000', 'locked': '0.50000000'},
                {'asset': 'ETH', 'free': '0.00000000', 'locked': '0.00000000'}
            ],
            'canTrade': True
        }

        self.tickers_response = [
            {'symbol': 'BTCUSDT', 'price': '50000.00000000'},
            {'symbol': 'ETHBTC', 'price': '0.07500000'},
            {'symbol': 'ETHBUSD', 'price': '3700.00000000'}
        ]

        self.open_orders_response = [
            {
                'symbol': 'ETHBTC',
                'orderId': 12345,
                'clientOrderId': 'test_order_1',
                'price': '0.07000000',
                'origQty': '2.00000000',
                'executedQty': '0.00000000',
                'status': 'NEW',
                'timeInForce': 'GTC',
                'type': 'LIMIT',
                'side': 'BUY'
            }
        ]

        self.my_trades_response = [
            {
                'symbol': 'ETHBTC',
                'id': 28457,
                'orderId': 100234,
                'price': '0.07100000',
                'qty': '1.25000000',
                'commission': '0.00000100',
                'commissionAsset': 'BNB',
                'time': 1499865549590,
                'isBuyer': True,
                'isMaker': False
            },
            {
                'symbol': 'ETHBTC',
                'id': 28458,
                'orderId': 100240,
                'price': '0.07300000',
                'qty': '0.75000000',
                'commission': '0.00000100',
                'commissionAsset': 'BNB',
                'time': 1499865649590,
                'isBuyer': False,
                'isMaker': True
            }
        ]

        self.klines_response = SampleDataBuilder.klines(3)

    def as_mock(self) -> MagicMock:
        """A ``MagicMock`` client whose endpoints return the canned responses."""
        client = MagicMock()
        client.get_account.return_value = self.account_info_response
        client.get_all_tickers.return_value = self.tickers_response
        client.get_symbol_ticker.return_value = {'symbol': 'BTCUSDT', 'price': '50000.00000000'}
        client.get_open_orders.return_value = self.open_orders_response
        client.get_my_trades.return_value = self.my_trades_response
        client.get_klines.return_value = self.klines_response
        client.order_limit_buy.return_value = {'orderId': 1, 'status': 'NEW'}
        client.order_limit_sell.return_value = {'orderId': 2, 'status': 'NEW'}
        return client


class SampleDataBuilder:
    """Builder for raw exchange payloads."""

    @staticmethod
    def klines(count: int, start_ms: int = KLINE_START_MS,
               step_ms: int = FIVE_MINUTES_MS) -> List[List[Any]]:
        """Binance kline rows with deterministic prices."""
        klines = []
        price = 50000.0
        for i in range(count):
            open_time = start_ms + i * step_ms
            klines.append([
                open_time,                  # Open time
                f"{price:.8f}",             # Open
                f"{price + 50:.8f}",        # High
                f"{price - 50:.8f}",        # Low
                f"{price + 10:.8f}",        # Close
                f"{12.5 + i:.8f}",          # Volume
                open_time + step_ms - 1,    # Close time
                "625000.00000000",          # Quote asset volume
                100 + i,                    # Number of trades
                "6.00000000",               # Taker buy base asset volume
                "300000.00000000",          # Taker buy quote asset volume
                "0"                         # Ignore
            ])
            price += 10
        return klines

    @staticmethod
    def agg_trade(symbol: str = "BTCUSDT", price: str = "50000.10",
                  qty: str = "0.010") -> Dict[str, Any]:
        """Raw ``<symbol>@aggTrade`` payload."""
        return {
            'e': 'aggTrade',
            'E': 1672515782136,
            's': symbol,
            'a': 12345,
            'p': price,
            'q': qty,
            'f': 100,
            'l': 105,
            'T': 1672515782136,
            'm': True,
            'M': True
        }


__all__ = [
    'MockBinanceClient',
    'VALID_API_KEY',
    'VALID_SECRET_KEY',
    'SampleDataBuilder',
    'KLINE_START_MS',
    'FIVE_MINUTES_MS'
]
