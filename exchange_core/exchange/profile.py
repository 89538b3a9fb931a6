"""
Exchange Profiles
=================

Immutable, exchange-scoped configuration data: display name, base currencies
checked by the pair parser, canonical BTC and USD-pegged symbols and the
pair string layout. Each adapter is bound to one profile, so several
exchange configurations can coexist in one process.
"""

from dataclasses import dataclass
from typing import Tuple

from exchange_core.identity import Exchange
from .pair_parser import check_base_order, format_pair, split_symbol_and_base


KNOWN_STABLECOIN_SYMBOLS: Tuple[str, ...] = ("USDT", "USD", "TUSD")
KNOWN_BTC_SYMBOLS: Tuple[str, ...] = ("XBT", "BTC")


@dataclass(frozen=True)
class ExchangeProfile:
    """Static description of one exchange."""
    exchange: Exchange
    display_name: str
    base_pairs: Tuple[str, ...]
    btc_symbol: str = "BTC"
    usd_symbol: str = "USDT"
    separator: str = ""
    base_first: bool = False
    stablecoin_symbols: Tuple[str, ...] = KNOWN_STABLECOIN_SYMBOLS
    btc_symbols: Tuple[str, ...] = KNOWN_BTC_SYMBOLS

    def __post_init__(self):
        """Validate base currency ordering."""
        if not self.base_pairs:
            raise ValueError(f"{self.display_name} needs at least one base currency")
        check_base_order(self.base_pairs, self.separator, self.base_first)

    def split(self, pair: str) -> Tuple[str, str]:
        """Split a native pair string into (symbol, base)."""
        return split_symbol_and_base(pair, self.base_pairs, self.separator,
                                     self.base_first, exchange=str(self.exchange))

    def format(self, symbol: str, base: str) -> str:
        """Join symbol and base into the native pair string."""
        return format_pair(symbol, base, self.separator, self.base_first)

    def is_stablecoin(self, symbol: str) -> bool:
        return symbol in self.stablecoin_symbols

    def is_btc(self, symbol: str) -> bool:
        return symbol in self.btc_symbols


BINANCE_PROFILE = ExchangeProfile(
    exchange=Exchange.BINANCE,
    display_name="Binance",
    base_pairs=("USDT", "BTC"),
    btc_symbol="BTC",
    usd_symbol="USDT",
)

BITTREX_PROFILE = ExchangeProfile(
    exchange=Exchange.BITTREX,
    display_name="Bittrex",
    base_pairs=("USDT", "BTC", "ETH"),
    btc_symbol="BTC",
    usd_symbol="USDT",
    separator="-",
    base_first=True,
)

KUCOIN_PROFILE = ExchangeProfile(
    exchange=Exchange.KUCOIN,
    display_name="Kucoin",
    base_pairs=("USDT", "BTC", "ETH", "KCS"),
    btc_symbol="BTC",
    usd_symbol="USDT",
    separator="-",
)
