"""Trading pair value type."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Pair:
    """
    A trading instrument split into the traded symbol and its base (quote) currency.

    Attributes:
        symbol: Traded asset, e.g. ``"BTC"``
        base: Currency the pair is priced in, e.g. ``"USDT"``
        price: Last price in units of ``base``
    """
    symbol: str
    base: str
    price: float
