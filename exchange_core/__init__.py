"""
Exchange Core
=============

Unified access to cryptocurrency exchanges: domain models, the exchange
capability contract with its adapters, pair parsing and market streams.
"""

__version__ = "1.0.0"

__all__ = []
