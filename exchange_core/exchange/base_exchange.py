"""
Base Exchange Interface
======================

Abstract base class defining the capability contract every exchange adapter
implements. Callers program against ``BaseExchange`` and never need to know
which exchange backs it.

All operations are synchronous: each call performs its network round-trips
through the adapter's external client and returns once they complete or
fail. Failures are raised as ``ExchangeError`` subclasses:

- ``NetworkError`` when the external client call fails
- ``BasePairNotFoundError`` when a pair string cannot be split
- ``UnsupportedOperationError`` when the exchange does not offer the operation
- ``GenericExchangeError`` when a response cannot be normalized
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from exchange_core.identity import Exchange
from exchange_core.models import Pair, Asset, Order, Trade, Candlestick
from exchange_core.utils.exceptions import UnsupportedOperationError, GenericExchangeError
from .profile import ExchangeProfile


class BaseExchange(ABC):
    """
    Abstract base class for all exchange integrations.

    Key Responsibilities:
    - Market data retrieval (prices, pairs, candlesticks)
    - Account information access (balances)
    - Order placement and order/trade history
    - Converting between native pair strings and ``Pair`` values

    Class Attributes:
        profile: Exchange-scoped static data (bases, symbols, pair layout)
        capabilities: Which optional operations the exchange supports. An
            operation marked False raises ``UnsupportedOperationError``.
    """

    profile: ExchangeProfile

    capabilities: Dict[str, bool] = {
        "market_data": False,
        "balances": False,
        "limit_orders": False,
        "stop_loss": False,
        "open_orders": False,
        "past_orders": False,
        "trade_history": False,
        "chart_data": False,
    }

    @property
    def exchange(self) -> Exchange:
        """Identity every value produced by this adapter is tagged with."""
        return self.profile.exchange

    def supports(self, capability: str) -> bool:
        return self.capabilities.get(capability, False)

    # Exchange Description

    def display(self) -> str:
        """Human-readable exchange name."""
        return self.profile.display_name

    def btc_symbol(self) -> str:
        return self.profile.btc_symbol

    def usd_symbol(self) -> str:
        return self.profile.usd_symbol

    def base_pairs(self) -> List[str]:
        """Recognized base currencies in the order the pair parser checks them."""
        return list(self.profile.base_pairs)

    # Pair Formatting

    def pair_format(self, pair: Pair) -> str:
        """Serialize a pair into the exchange's native pair string."""
        return self.symbol_and_base_to_pair_format(pair.symbol, pair.base)

    def symbol_and_base_to_pair_format(self, symbol: str, base: str) -> str:
        return self.profile.format(symbol, base)

    def string_to_pair(self, pair: str, price: float) -> Pair:
        """
        Parse a native pair string and attach a price.

        Raises:
            BasePairNotFoundError: If no known base currency matches
        """
        symbol, base = self.profile.split(pair)
        return Pair(symbol=symbol, base=base, price=price)

    # Market Data Methods

    def btc_price(self) -> Pair:
        """Current price of BTC in the exchange's USD-pegged stablecoin."""
        return self.pair(self.symbol_and_base_to_pair_format(self.btc_symbol(), self.usd_symbol()))

    @abstractmethod
    def pair(self, pair: str) -> Pair:
        """
        Get the current price of a native pair string.

        Args:
            pair (str): Native pair string (e.g., 'BTCUSDT')

        Returns:
            Pair: Parsed pair with its current price

        Raises:
            BasePairNotFoundError: If no known base currency matches
            NetworkError: If the API call fails
        """
        pass

    @abstractmethod
    def all_pairs(self) -> List[Pair]:
        """
        Get the current price of every tradable pair.

        Pairs whose symbol cannot be split into symbol and base are left out
        of the result; they are not reported as failures.
        """
        pass

    @abstractmethod
    def chart_data(self, symbol: str, interval: str) -> List[Candlestick]:
        """
        Get candlestick data for a symbol, oldest first.

        Args:
            symbol (str): Native pair string
            interval (str): Candle interval (1m, 5m, 1h, 1d, ...)
        """
        pass

    # Account Information Methods

    @abstractmethod
    def balances(self) -> List[Asset]:
        """
        Get account balances.

        Returns:
            List[Asset]: Assets with a positive total amount only
        """
        pass

    # Order Management Methods

    @abstractmethod
    def limit_buy(self, symbol: str, amount: float, price: float) -> None:
        """Place a limit buy order."""
        pass

    @abstractmethod
    def limit_sell(self, symbol: str, amount: float, price: float) -> None:
        """Place a limit sell order."""
        pass

    @abstractmethod
    def stop_loss(self, symbol: str, amount: float, stop_price: float,
                  limit_price: float) -> None:
        """
        Place a stop-loss limit order.

        Raises:
            UnsupportedOperationError: If the exchange does not support it
        """
        pass

    @abstractmethod
    def open_orders(self) -> List[Order]:
        """Get currently resting orders across all symbols."""
        pass

    @abstractmethod
    def past_orders(self) -> List[Order]:
        """
        Get filled and cancelled orders.

        Raises:
            UnsupportedOperationError: If the exchange does not support it
        """
        pass

    # Trade History Methods

    @abstractmethod
    def trades_for(self, symbol: str) -> List[Order]:
        """Get the trade history for a native pair string, shaped as orders."""
        pass

    @abstractmethod
    def trade_history(self, symbol: str) -> List[Trade]:
        """Get the trade history for a native pair string as pair-resolved trades."""
        pass

    @abstractmethod
    def trades_for_pair(self, pair: Pair) -> List[Trade]:
        """Get the trade history for a pair."""
        pass

    # Helpers

    def _unsupported(self, operation: str) -> UnsupportedOperationError:
        return UnsupportedOperationError(operation, exchange=str(self.exchange))

    def _field(self, data, key):
        """
        Read one field of an exchange response.

        Raises:
            GenericExchangeError: If the field is missing
        """
        try:
            return data[key]
        except (KeyError, IndexError, TypeError):
            raise GenericExchangeError(
                f"Missing field '{key}' in exchange response",
                exchange=str(self.exchange), field_name=str(key)
            ) from None

    def _to_float(self, value, field_name: str) -> float:
        """
        Convert a numeric field of an exchange response.

        Raises:
            GenericExchangeError: If the value is not numeric
        """
        try:
            return float(value)
        except (TypeError, ValueError):
            raise GenericExchangeError(
                f"Invalid numeric value for '{field_name}': {value!r}",
                exchange=str(self.exchange), field_name=field_name, field_value=value
            ) from None

    def _to_int(self, value, field_name: str) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            raise GenericExchangeError(
                f"Invalid integer value for '{field_name}': {value!r}",
                exchange=str(self.exchange), field_name=field_name, field_value=value
            ) from None

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.exchange}>"


def find_pair(symbol: str, base: str, pairs: Iterable[Pair]) -> Optional[Pair]:
    """
    Find the pair for ``symbol``/``base``, falling back to ``base``/``symbol``.

    Returns:
        Optional[Pair]: The matching pair or None
    """
    pairs = list(pairs)
    for pair in pairs:
        if pair.symbol == symbol and pair.base == base:
            return pair
    for pair in pairs:
        if pair.symbol == base and pair.base == symbol:
            return pair
    return None


def btc_pair(exchange: BaseExchange, pairs: Iterable[Pair]) -> Optional[Pair]:
    """The BTC/USD pair of ``exchange`` among ``pairs``, in either order."""
    return find_pair(exchange.btc_symbol(), exchange.usd_symbol(), pairs)


def usd_pair(exchange: BaseExchange, pairs: Iterable[Pair]) -> Optional[Pair]:
    """The USD/BTC pair of ``exchange`` among ``pairs``, in either order."""
    return find_pair(exchange.usd_symbol(), exchange.btc_symbol(), pairs)
