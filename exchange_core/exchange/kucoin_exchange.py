"""Kucoin exchange (pairs written symbol first with a dash, e.g. ``BTC-USDT``)."""

from .placeholder_exchange import PlaceholderExchange
from .profile import KUCOIN_PROFILE


class KucoinExchange(PlaceholderExchange):
    profile = KUCOIN_PROFILE
