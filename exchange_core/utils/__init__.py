"""
Core Utilities Module
====================

Utility functions and classes used throughout the exchange hub.
"""

from .exceptions import (
    ErrorKind,
    ExchangeHubException,
    ConfigurationError,
    ValidationError,
    ExchangeError,
    NetworkError,
    BasePairNotFoundError,
    UnsupportedOperationError,
    GenericExchangeError,
    StreamError
)

__all__ = [
    'ErrorKind',
    'ExchangeHubException',
    'ConfigurationError',
    'ValidationError',
    'ExchangeError',
    'NetworkError',
    'BasePairNotFoundError',
    'UnsupportedOperationError',
    'GenericExchangeError',
    'StreamError'
]
