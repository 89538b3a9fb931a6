"""
Exchange Identity
=================

Enumerated tag naming which exchange a value came from or an adapter targets.
Identities are read from configuration at startup, compared by value and
never mutated.
"""

from enum import Enum

from exchange_core.utils.exceptions import ValidationError


class Exchange(Enum):
    """Supported exchange identities."""
    UNKNOWN = "-"
    BITTREX = "bittrex"
    BINANCE = "binance"
    KUCOIN = "kucoin"

    @classmethod
    def from_string(cls, name: str) -> "Exchange":
        """
        Parse a configured exchange name.

        Matching is case-sensitive. ``"unknown"`` and ``"-"`` both map to
        ``UNKNOWN``.

        Raises:
            ValidationError: If the name is not a known exchange
        """
        if name == "unknown":
            return cls.UNKNOWN
        try:
            return cls(name)
        except ValueError:
            raise ValidationError(
                f"Unknown exchange '{name}'",
                field_name="exchange",
                field_value=name,
                validation_rule=f"one of {[e.value for e in cls] + ['unknown']}"
            ) from None

    def __str__(self) -> str:
        return self.value
