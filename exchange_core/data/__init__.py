"""
Data Module
===========

Hand-off of normalized exchange data to pandas consumers.
"""

from .data_processor import (
    candles_to_dataframe,
    trades_to_dataframe,
    assets_to_dataframe,
    detect_candle_gaps
)

__all__ = [
    'candles_to_dataframe',
    'trades_to_dataframe',
    'assets_to_dataframe',
    'detect_candle_gaps'
]
