"""
Account Models
==============

Canonical balance, order and trade records shared by every exchange adapter.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from exchange_core.identity import Exchange
from exchange_core.models.pair import Pair


class TradeType(Enum):
    """Side of an order or trade."""
    BUY = "buy"
    SELL = "sell"

    @classmethod
    def from_is_buy(cls, is_buy: bool) -> "TradeType":
        return cls.BUY if is_buy else cls.SELL

    @classmethod
    def from_side(cls, side: str) -> "TradeType":
        """Parse an exchange side string such as ``"BUY"`` or ``"sell"``."""
        try:
            return cls(side.lower())
        except (AttributeError, ValueError):
            raise ValueError(f"Unknown order side: {side!r}") from None


@dataclass(frozen=True)
class Asset:
    """
    Balance of one currency on one exchange.

    ``amount`` is the total holding (free + locked).
    """
    symbol: str
    amount: float
    locked: float
    exchange: Exchange

    def __post_init__(self):
        """Validate balance invariants."""
        if self.locked < 0:
            raise ValueError(f"Locked amount cannot be negative: {self.locked}")
        if self.amount < self.locked:
            raise ValueError(
                f"Amount {self.amount} is smaller than locked amount {self.locked}"
            )

    @property
    def free(self) -> float:
        return self.amount - self.locked


@dataclass(frozen=True)
class Order:
    """
    A buy/sell instruction.

    The same shape is used for resting orders, historical orders and trade
    history viewed as orders.
    """
    id: str
    symbol: str
    order_type: TradeType
    qty: float
    price: float


@dataclass(frozen=True)
class Trade:
    """An executed fill, always resolved to a concrete pair."""
    id: str
    time: datetime
    pair: Pair
    trade_type: TradeType
    qty: float
    price: float
