"""
Custom Exception Classes
========================

This module defines all custom exception classes used throughout the exchange hub.
Every exchange operation either returns its value or raises one of the
``ExchangeError`` subclasses below, so callers can branch on the failure
kind (for example skip an exchange that does not support stop-loss orders)
instead of aborting a multi-exchange operation.
"""

from enum import Enum
from typing import Optional, Any, Dict


class ErrorKind(Enum):
    """Failure kinds an exchange operation can report."""
    NETWORK = "network"
    BASE_PAIR_NOT_FOUND = "base_pair_not_found"
    UNSUPPORTED = "unsupported"
    GENERIC = "generic"


class ExchangeHubException(Exception):
    """
    Base exception class for all exchange hub related errors.

    All other custom exceptions should inherit from this class.
    """

    def __init__(self, message: str, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exchange hub exception.

        Args:
            message (str): Human-readable error message
            error_code (Optional[str]): Machine-readable error code
            details (Optional[Dict[str, Any]]): Additional error details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the exception."""
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary format.

        Returns:
            Dict[str, Any]: Exception data as dictionary
        """
        return {
            'exception_type': self.__class__.__name__,
            'message': self.message,
            'error_code': self.error_code,
            'details': self.details
        }


class ConfigurationError(ExchangeHubException):
    """
    Exception raised for configuration-related errors.

    This includes:
    - Missing required configuration parameters
    - Invalid configuration values
    - Unknown exchange names
    """

    def __init__(self, message: str, config_key: Optional[str] = None,
                 config_value: Optional[Any] = None):
        """
        Initialize configuration error.

        Args:
            message (str): Error message
            config_key (Optional[str]): Configuration key that caused the error
            config_value (Optional[Any]): Invalid configuration value
        """
        details = {}
        if config_key:
            details['config_key'] = config_key
        if config_value is not None:
            details['config_value'] = str(config_value)

        super().__init__(message, "CONFIG_ERROR", details)
        self.config_key = config_key
        self.config_value = config_value


class ValidationError(ExchangeHubException):
    """Exception raised when a value fails validation."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 field_value: Optional[Any] = None,
                 validation_rule: Optional[str] = None):
        details = {}
        if field_name:
            details['field_name'] = field_name
        if field_value is not None:
            details['field_value'] = str(field_value)
        if validation_rule:
            details['validation_rule'] = validation_rule

        super().__init__(message, "VALIDATION_ERROR", details)
        self.field_name = field_name
        self.field_value = field_value
        self.validation_rule = validation_rule


class ExchangeError(ExchangeHubException):
    """
    Base class for failures reported by an exchange operation.

    Attributes:
        kind (ErrorKind): Failure kind callers can branch on
        exchange (str): Name of the exchange that reported the failure
    """

    kind = ErrorKind.GENERIC

    def __init__(self, message: str, exchange: str = "-",
                 error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        details = dict(details or {})
        details['exchange'] = exchange
        details['kind'] = self.kind.value

        super().__init__(message, error_code or "EXCHANGE_ERROR", details)
        self.exchange = exchange


class NetworkError(ExchangeError):
    """
    Exception raised when a call to the external exchange client fails.

    This includes:
    - API errors returned by the exchange
    - Transport failures and timeouts
    - Invalid API responses
    """

    kind = ErrorKind.NETWORK

    def __init__(self, message: str, exchange: str = "-",
                 status_code: Optional[int] = None,
                 api_error_code: Optional[str] = None):
        """
        Initialize network error.

        Args:
            message (str): Error message
            exchange (str): Name of the exchange
            status_code (Optional[int]): HTTP status code if applicable
            api_error_code (Optional[str]): Exchange-specific error code
        """
        details = {}
        if status_code:
            details['status_code'] = status_code
        if api_error_code:
            details['api_error_code'] = api_error_code

        super().__init__(message, exchange, "NETWORK_ERROR", details)
        self.status_code = status_code
        self.api_error_code = api_error_code


class BasePairNotFoundError(ExchangeError):
    """Exception raised when a pair string ends in none of the exchange's base currencies."""

    kind = ErrorKind.BASE_PAIR_NOT_FOUND

    def __init__(self, pair: str, exchange: str = "-"):
        super().__init__(f"Base pair not found for '{pair}'", exchange,
                         "BASE_PAIR_NOT_FOUND", {'pair': pair})
        self.pair = pair


class UnsupportedOperationError(ExchangeError):
    """Exception raised when an exchange does not implement an operation."""

    kind = ErrorKind.UNSUPPORTED

    def __init__(self, operation: str, exchange: str = "-"):
        super().__init__(f"{operation} is not supported on {exchange}", exchange,
                         "UNSUPPORTED", {'operation': operation})
        self.operation = operation


class GenericExchangeError(ExchangeError):
    """
    Catch-all exchange failure.

    Raised when an exchange response cannot be normalized, for example a
    numeric field that does not parse.
    """

    kind = ErrorKind.GENERIC

    def __init__(self, message: str, exchange: str = "-",
                 field_name: Optional[str] = None,
                 field_value: Optional[Any] = None):
        details = {}
        if field_name:
            details['field_name'] = field_name
        if field_value is not None:
            details['field_value'] = str(field_value)

        super().__init__(message, exchange, "GENERIC_ERROR", details)
        self.field_name = field_name
        self.field_value = field_value


class StreamError(ExchangeHubException):
    """
    Exception raised when a market data stream cannot be opened.

    A failed initial connection is fatal for the listener and is not retried.
    """

    def __init__(self, message: str, exchange: str = "-",
                 channel: Optional[str] = None):
        details = {'exchange': exchange}
        if channel:
            details['channel'] = channel

        super().__init__(message, "STREAM_ERROR", details)
        self.exchange = exchange
        self.channel = channel


# Utility functions for exception handling

def handle_exception_with_logging(logger, exception: Exception, context: str = "") -> None:
    """
    Handle exception with proper logging.

    Args:
        logger: Logger instance
        exception (Exception): Exception to handle
        context (str): Additional context information
    """
    if isinstance(exception, ExchangeHubException):
        error_dict = exception.to_dict()
        logger.error(f"❌ {context} - {error_dict}")
    else:
        logger.error(f"❌ {context} - Unexpected error: {type(exception).__name__}: {exception}")


def create_exception_from_api_error(api_response: Dict[str, Any], exchange: str = "binance",
                                    status_code: Optional[int] = None) -> NetworkError:
    """
    Create a NetworkError from an API error response.

    Args:
        api_response (Dict[str, Any]): API error response
        exchange (str): Exchange name
        status_code (Optional[int]): HTTP status code of the response

    Returns:
        NetworkError: Formatted exception
    """
    message = api_response.get('msg', 'Unknown API error')
    api_code = api_response.get('code')

    return NetworkError(
        message=message,
        exchange=exchange,
        status_code=status_code,
        api_error_code=str(api_code) if api_code else None
    )


def is_recoverable_error(exception: Exception) -> bool:
    """
    Determine if an error is worth retrying by the caller.

    Args:
        exception (Exception): Exception to analyze

    Returns:
        bool: True if error is recoverable
    """
    if isinstance(exception, NetworkError):
        # Rate limiting is recoverable
        if exception.status_code in [429, 418]:
            return True
        # Server errors might be temporary
        if exception.status_code and 500 <= exception.status_code < 600:
            return True
        # Transport failures carry no status code
        return exception.status_code is None

    if isinstance(exception, (ConnectionError, TimeoutError)):
        return True

    # Retrying cannot change the outcome of these
    if isinstance(exception, (UnsupportedOperationError, BasePairNotFoundError,
                              GenericExchangeError, ConfigurationError,
                              ValidationError)):
        return False

    return False
