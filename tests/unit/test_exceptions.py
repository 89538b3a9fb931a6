"""Unit tests for exception classes and helpers."""

import logging
from unittest.mock import Mock

import pytest

from exchange_core.utils.exceptions import (
    ErrorKind,
    ExchangeHubException,
    ExchangeError,
    ConfigurationError,
    ValidationError,
    NetworkError,
    BasePairNotFoundError,
    UnsupportedOperationError,
    GenericExchangeError,
    StreamError,
    handle_exception_with_logging,
    create_exception_from_api_error,
    is_recoverable_error
)


class TestExceptionHierarchy:
    """Test cases for exception classes."""

    @pytest.mark.parametrize("error,kind", [
        (NetworkError("timeout", exchange="binance"), ErrorKind.NETWORK),
        (BasePairNotFoundError("ETHBUSD", exchange="binance"), ErrorKind.BASE_PAIR_NOT_FOUND),
        (UnsupportedOperationError("stop_loss", exchange="binance"), ErrorKind.UNSUPPORTED),
        (GenericExchangeError("bad payload", exchange="binance"), ErrorKind.GENERIC),
    ])
    def test_exchange_errors_carry_kind(self, error, kind):
        assert isinstance(error, ExchangeError)
        assert isinstance(error, ExchangeHubException)
        assert error.kind == kind
        assert error.details['kind'] == kind.value
        assert error.details['exchange'] == "binance"

    def test_unsupported_message(self):
        error = UnsupportedOperationError("stop_loss", exchange="binance")

        assert error.operation == "stop_loss"
        assert str(error) == "[UNSUPPORTED] stop_loss is not supported on binance"

    def test_network_error_details(self):
        error = NetworkError("rate limited", exchange="binance", status_code=429,
                             api_error_code="-1003")

        assert error.error_code == "NETWORK_ERROR"
        assert error.details['status_code'] == 429
        assert error.details['api_error_code'] == "-1003"

    def test_to_dict(self):
        error = ConfigurationError("bad value", config_key="EXCHANGE", config_value="kraken")
        data = error.to_dict()

        assert data['exception_type'] == "ConfigurationError"
        assert data['error_code'] == "CONFIG_ERROR"
        assert data['details'] == {'config_key': "EXCHANGE", 'config_value': "kraken"}

    def test_stream_error_channel(self):
        error = StreamError("closed", exchange="binance", channel="btcusdt@aggTrade")

        assert error.channel == "btcusdt@aggTrade"
        assert not isinstance(error, ExchangeError)


class TestExceptionHelpers:
    """Test cases for exception utility functions."""

    def test_create_exception_from_api_error(self):
        error = create_exception_from_api_error({'code': -1121, 'msg': "Invalid symbol."})

        assert isinstance(error, NetworkError)
        assert error.message == "Invalid symbol."
        assert error.api_error_code == "-1121"
        assert error.exchange == "binance"

    def test_api_error_keeps_status_code(self):
        error = create_exception_from_api_error({'code': -1003, 'msg': "Too many requests."},
                                                exchange="kucoin", status_code=429)

        assert error.status_code == 429
        assert error.exchange == "kucoin"
        assert is_recoverable_error(error)

    @pytest.mark.parametrize("error,expected", [
        (NetworkError("rate limited", status_code=429), True),
        (NetworkError("banned", status_code=418), True),
        (NetworkError("server", status_code=503), True),
        (NetworkError("connection reset"), True),
        (NetworkError("bad request", status_code=400), False),
        (ConnectionError("reset"), True),
        (TimeoutError(), True),
        (UnsupportedOperationError("stop_loss"), False),
        (BasePairNotFoundError("ETHBUSD"), False),
        (ValidationError("bad"), False),
        (RuntimeError("boom"), False),
    ])
    def test_is_recoverable_error(self, error, expected):
        assert is_recoverable_error(error) is expected

    def test_handle_exception_with_logging(self):
        logger = Mock(spec=logging.Logger)

        handle_exception_with_logging(logger, GenericExchangeError("bad", exchange="binance"),
                                      "Converting order")
        handle_exception_with_logging(logger, KeyError("price"), "Converting order")

        assert logger.error.call_count == 2
        assert "GENERIC_ERROR" in logger.error.call_args_list[0][0][0]
        assert "KeyError" in logger.error.call_args_list[1][0][0]
