"""Bittrex exchange (pairs written base first, e.g. ``USDT-BTC``)."""

from .placeholder_exchange import PlaceholderExchange
from .profile import BITTREX_PROFILE


class BittrexExchange(PlaceholderExchange):
    profile = BITTREX_PROFILE
