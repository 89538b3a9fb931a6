"""
Unit Tests for Pair Parsing
===========================

Covers splitting native pair strings into symbol and base, formatting them
back for every pair layout, and base ordering validation of profiles.
"""

import pytest

from exchange_core.identity import Exchange
from exchange_core.exchange.pair_parser import (
    split_symbol_and_base, format_pair, check_base_order
)
from exchange_core.exchange.profile import (
    ExchangeProfile, BINANCE_PROFILE, BITTREX_PROFILE, KUCOIN_PROFILE
)
from exchange_core.utils.exceptions import BasePairNotFoundError, ErrorKind

from tests import MockBinanceClient


class TestSplitSymbolAndBase:
    """Test cases for split_symbol_and_base."""

    @pytest.mark.parametrize("pair,expected", [
        ("BTCUSDT", ("BTC", "USDT")),
        ("ETHBTC", ("ETH", "BTC")),
        ("USDTBTC", ("USDT", "BTC")),
        ("XRPUSDT", ("XRP", "USDT")),
    ])
    def test_concatenated_pairs(self, pair, expected):
        assert split_symbol_and_base(pair, ["USDT", "BTC"]) == expected

    def test_first_matching_base_wins(self):
        """Bases are tried in order, not by longest match."""
        assert split_symbol_and_base("ABCUSDT", ["USDT", "DT"]) == ("ABC", "USDT")
        assert split_symbol_and_base("ABCUSDT", ["DT", "USDT"]) == ("ABCUS", "DT")

    def test_no_matching_base_raises(self):
        with pytest.raises(BasePairNotFoundError) as exc_info:
            split_symbol_and_base("ETHBUSD", ["USDT", "BTC"], exchange="binance")

        error = exc_info.value
        assert error.kind == ErrorKind.BASE_PAIR_NOT_FOUND
        assert error.pair == "ETHBUSD"
        assert error.exchange == "binance"
        assert "ETHBUSD" in str(error)

    def test_base_alone_gives_empty_symbol(self):
        assert split_symbol_and_base("USDT", ["USDT", "BTC"]) == ("", "USDT")

    def test_empty_string_raises(self):
        with pytest.raises(BasePairNotFoundError):
            split_symbol_and_base("", ["USDT", "BTC"])

    def test_matching_is_case_sensitive(self):
        with pytest.raises(BasePairNotFoundError):
            split_symbol_and_base("btcusdt", ["USDT", "BTC"])

    def test_separated_symbol_first(self):
        assert split_symbol_and_base("BTC-USDT", ["USDT", "BTC"], separator="-") == ("BTC", "USDT")

    def test_separated_base_first(self):
        result = split_symbol_and_base("BTC-LTC", ["USDT", "BTC"], separator="-", base_first=True)
        assert result == ("LTC", "BTC")

    def test_separator_required(self):
        with pytest.raises(BasePairNotFoundError):
            split_symbol_and_base("BTCUSDT", ["USDT"], separator="-")


class TestFormatPair:
    """Test cases for format_pair."""

    def test_concatenated(self):
        assert format_pair("BTC", "USDT") == "BTCUSDT"

    def test_separated(self):
        assert format_pair("BTC", "USDT", separator="-") == "BTC-USDT"

    def test_base_first(self):
        assert format_pair("LTC", "BTC", separator="-", base_first=True) == "BTC-LTC"

    @pytest.mark.parametrize("profile,native", [
        (BINANCE_PROFILE, "ETHBTC"),
        (BITTREX_PROFILE, "BTC-ETH"),
        (KUCOIN_PROFILE, "ETH-BTC"),
    ])
    def test_profile_layouts_are_reversible(self, profile, native):
        symbol, base = profile.split(native)

        assert (symbol, base) == ("ETH", "BTC")
        assert profile.format(symbol, base) == native

    @pytest.mark.parametrize("native", [
        ticker['symbol'] for ticker in MockBinanceClient().tickers_response
    ])
    def test_ticker_symbols_round_trip(self, native):
        if any(native.endswith(base) for base in BINANCE_PROFILE.base_pairs):
            assert BINANCE_PROFILE.format(*BINANCE_PROFILE.split(native)) == native
        else:
            with pytest.raises(BasePairNotFoundError):
                BINANCE_PROFILE.split(native)

    @pytest.mark.parametrize("profile,base", [
        (profile, base)
        for profile in (BINANCE_PROFILE, BITTREX_PROFILE, KUCOIN_PROFILE)
        for base in profile.base_pairs
    ])
    def test_every_base_round_trips(self, profile, base):
        native = profile.format("XRP", base)

        assert profile.split(native) == ("XRP", base)
        assert profile.format(*profile.split(native)) == native


class TestBaseOrder:
    """Test cases for base currency ordering."""

    def test_specific_before_general_is_accepted(self):
        check_base_order(["TUSD", "USD"])

    def test_shadowed_base_is_rejected(self):
        with pytest.raises(ValueError, match="TUSD"):
            check_base_order(["USD", "TUSD"])

    def test_base_first_checks_prefixes(self):
        check_base_order(["USD", "TUSD"], separator="-", base_first=True)
        with pytest.raises(ValueError):
            check_base_order(["USD", "USDT"], separator="", base_first=True)

    def test_separator_prevents_shadowing(self):
        check_base_order(["USD", "TUSD"], separator="-")

    def test_profile_rejects_shadowing_order(self):
        with pytest.raises(ValueError):
            ExchangeProfile(exchange=Exchange.BINANCE, display_name="Broken",
                            base_pairs=("USD", "TUSD"))

    def test_profile_requires_bases(self):
        with pytest.raises(ValueError):
            ExchangeProfile(exchange=Exchange.BINANCE, display_name="Empty", base_pairs=())


class TestExchangeProfile:
    """Test cases for the built-in profiles."""

    def test_binance_profile(self):
        assert BINANCE_PROFILE.exchange == Exchange.BINANCE
        assert BINANCE_PROFILE.base_pairs == ("USDT", "BTC")
        assert BINANCE_PROFILE.btc_symbol == "BTC"
        assert BINANCE_PROFILE.usd_symbol == "USDT"

    def test_split_error_names_exchange(self):
        with pytest.raises(BasePairNotFoundError) as exc_info:
            KUCOIN_PROFILE.split("BTC-DAI")
        assert exc_info.value.exchange == "kucoin"

    @pytest.mark.parametrize("symbol,expected", [
        ("USDT", True), ("USD", True), ("TUSD", True), ("BTC", False),
    ])
    def test_is_stablecoin(self, symbol, expected):
        assert BINANCE_PROFILE.is_stablecoin(symbol) is expected

    def test_is_btc(self):
        assert BINANCE_PROFILE.is_btc("XBT")
        assert BINANCE_PROFILE.is_btc("BTC")
        assert not BINANCE_PROFILE.is_btc("ETH")

    def test_profiles_are_immutable(self):
        with pytest.raises(AttributeError):
            BINANCE_PROFILE.usd_symbol = "USD"
