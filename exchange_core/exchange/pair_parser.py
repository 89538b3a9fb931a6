"""
Pair Parser
===========

Splits exchange-native pair strings into (symbol, base) using an ordered list
of the exchange's known base currencies, and formats them back.

Bases are tried in list order and the first match wins, so a base must never
be listed after a shorter base it ends with (``"TUSD"`` has to come before
``"USD"``, otherwise ``"BTCTUSD"`` splits into ``BTCT``/``USD``).
``ExchangeProfile`` enforces that ordering with ``check_base_order``.

Layouts:
    concatenated, symbol first   BTCUSDT   (Binance)
    separated, symbol first      BTC-USDT  (Kucoin)
    separated, base first        USDT-BTC  (Bittrex)
"""

from typing import Sequence, Tuple

from exchange_core.utils.exceptions import BasePairNotFoundError


def split_symbol_and_base(pair: str, bases: Sequence[str], separator: str = "",
                          base_first: bool = False, exchange: str = "-") -> Tuple[str, str]:
    """
    Split a raw pair string into ``(symbol, base)``.

    Args:
        pair (str): Exchange-native pair string, e.g. ``"BTCUSDT"``
        bases (Sequence[str]): Known base currencies, most specific first
        separator (str): String joining symbol and base (empty when concatenated)
        base_first (bool): True when the exchange writes the base before the symbol
        exchange (str): Exchange name reported in errors

    Returns:
        Tuple[str, str]: The symbol and the first matching base

    Raises:
        BasePairNotFoundError: If no base matches
    """
    for base in bases:
        if base_first:
            prefix = base + separator
            if pair.startswith(prefix):
                return pair[len(prefix):], base
        else:
            suffix = separator + base
            if pair.endswith(suffix):
                return pair[:len(pair) - len(suffix)], base

    raise BasePairNotFoundError(pair, exchange=exchange)


def format_pair(symbol: str, base: str, separator: str = "", base_first: bool = False) -> str:
    """Inverse of ``split_symbol_and_base``."""
    if base_first:
        return f"{base}{separator}{symbol}"
    return f"{symbol}{separator}{base}"


def check_base_order(bases: Sequence[str], separator: str = "", base_first: bool = False) -> None:
    """
    Reject base lists where an earlier entry would shadow a later one.

    Raises:
        ValueError: If some base is listed after a base that matches every
            pair string it matches
    """
    for i, earlier in enumerate(bases):
        for later in bases[i + 1:]:
            if base_first:
                shadowed = (later + separator).startswith(earlier + separator)
            else:
                shadowed = (separator + later).endswith(separator + earlier)
            if shadowed:
                raise ValueError(
                    f"Base '{later}' is listed after '{earlier}' and can never match; "
                    f"order base currencies from most to least specific"
                )
