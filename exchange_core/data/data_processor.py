"""
Data Processor Module
====================

Converts normalized exchange sequences into pandas DataFrames for indicator
and reporting consumers, and checks candlestick series for missing buckets.

Row order is preserved: candlesticks stay in the exchange's chronological
order and are not re-sorted here.
"""

from datetime import datetime
from typing import Iterable, List, Tuple

import pandas as pd

from exchange_core.models import Asset, Candlestick, Trade

CANDLE_COLUMNS = ['open_time', 'open', 'high', 'low', 'close', 'volume', 'trades']
TRADE_COLUMNS = ['time', 'id', 'symbol', 'base', 'side', 'qty', 'price']
ASSET_COLUMNS = ['symbol', 'amount', 'free', 'locked', 'exchange']

INTERVAL_DELTAS = {
    '1m': pd.Timedelta(minutes=1),
    '3m': pd.Timedelta(minutes=3),
    '5m': pd.Timedelta(minutes=5),
    '15m': pd.Timedelta(minutes=15),
    '30m': pd.Timedelta(minutes=30),
    '1h': pd.Timedelta(hours=1),
    '2h': pd.Timedelta(hours=2),
    '4h': pd.Timedelta(hours=4),
    '6h': pd.Timedelta(hours=6),
    '8h': pd.Timedelta(hours=8),
    '12h': pd.Timedelta(hours=12),
    '1d': pd.Timedelta(days=1),
    '3d': pd.Timedelta(days=3),
    '1w': pd.Timedelta(weeks=1),
}


def candles_to_dataframe(candles: Iterable[Candlestick]) -> pd.DataFrame:
    """
    Convert candlesticks to an OHLCV DataFrame indexed by open time.

    Args:
        candles (Iterable[Candlestick]): Candlesticks from ``chart_data``

    Returns:
        pd.DataFrame: Columns open, high, low, close, volume, trades
    """
    rows = [
        {
            'open_time': candle.open_time,
            'open': candle.open_price,
            'high': candle.high_price,
            'low': candle.low_price,
            'close': candle.close_price,
            'volume': candle.volume,
            'trades': candle.number_of_trades
        }
        for candle in candles
    ]

    if not rows:
        return pd.DataFrame(columns=CANDLE_COLUMNS).set_index('open_time')

    df = pd.DataFrame(rows)
    df['open_time'] = pd.to_datetime(df['open_time'], utc=True)
    df.set_index('open_time', inplace=True)
    return df


def trades_to_dataframe(trades: Iterable[Trade]) -> pd.DataFrame:
    """Convert pair-resolved trades to a DataFrame indexed by trade time."""
    rows = [
        {
            'time': trade.time,
            'id': trade.id,
            'symbol': trade.pair.symbol,
            'base': trade.pair.base,
            'side': trade.trade_type.value,
            'qty': trade.qty,
            'price': trade.price
        }
        for trade in trades
    ]

    if not rows:
        return pd.DataFrame(columns=TRADE_COLUMNS).set_index('time')

    df = pd.DataFrame(rows)
    df['time'] = pd.to_datetime(df['time'], utc=True)
    df.set_index('time', inplace=True)
    return df


def assets_to_dataframe(assets: Iterable[Asset]) -> pd.DataFrame:
    """One row per balance."""
    rows = [
        {
            'symbol': asset.symbol,
            'amount': asset.amount,
            'free': asset.free,
            'locked': asset.locked,
            'exchange': str(asset.exchange)
        }
        for asset in assets
    ]
    return pd.DataFrame(rows, columns=ASSET_COLUMNS)


def detect_candle_gaps(df: pd.DataFrame, interval: str) -> List[Tuple[datetime, datetime]]:
    """
    Find missing buckets in a candlestick DataFrame.

    Args:
        df (pd.DataFrame): Output of ``candles_to_dataframe``
        interval (str): Candle interval the data was requested with

    Returns:
        List[Tuple[datetime, datetime]]: Open times on either side of each gap
    """
    if len(df) < 2:
        return []

    expected = INTERVAL_DELTAS.get(interval)
    if expected is None:
        return []  # Unknown interval

    gaps = []
    timestamps = df.index

    for i in range(1, len(timestamps)):
        if timestamps[i] - timestamps[i - 1] > expected * 1.5:  # Allow 50% tolerance
            gaps.append((timestamps[i - 1].to_pydatetime(), timestamps[i].to_pydatetime()))

    return gaps
