"""Market data models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Candlestick:
    """One fixed-interval OHLCV bucket."""
    open_time: datetime
    open_price: float
    close_price: float
    high_price: float
    low_price: float
    volume: float
    number_of_trades: int
