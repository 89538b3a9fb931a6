"""
Market Stream Events
====================

Normalized events produced from raw Binance stream payloads.

Binance Formats:

    Aggregate trade (<symbol>@aggTrade):
        {"e": "aggTrade", "E": 1672515782136, "s": "BNBBTC", "a": 12345,
         "p": "0.001", "q": "100", "f": 100, "l": 105, "T": 1672515782136,
         "m": true, "M": true}

    Diff depth (<symbol>@depth):
        {"e": "depthUpdate", "E": 1672515782136, "s": "BNBBTC",
         "U": 157, "u": 160, "b": [["0.0024", "10"]], "a": [["0.0026", "100"]]}

    Partial book depth (<symbol>@depth<levels>), no event type or symbol:
        {"lastUpdateId": 160, "bids": [["0.0024", "10"]], "asks": [["0.0026", "100"]]}
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple, Union

from exchange_core.utils.exceptions import GenericExchangeError
from exchange_core.utils.time_utils import utc_datetime_from_millis

PriceLevel = Tuple[float, float]


@dataclass(frozen=True)
class AggregatedTradeEvent:
    """Trades aggregated at one price by one taker order."""
    symbol: str
    price: float
    qty: float
    trade_time: datetime
    buyer_is_maker: bool


@dataclass(frozen=True)
class DepthUpdateEvent:
    """Incremental order book update."""
    symbol: str
    first_update_id: int
    final_update_id: int
    bids: Tuple[PriceLevel, ...]
    asks: Tuple[PriceLevel, ...]


@dataclass(frozen=True)
class PartialOrderBookEvent:
    """Top-of-book snapshot."""
    symbol: str
    last_update_id: int
    bids: Tuple[PriceLevel, ...]
    asks: Tuple[PriceLevel, ...]


MarketEvent = Union[AggregatedTradeEvent, DepthUpdateEvent, PartialOrderBookEvent]


def _number(value: Any, field_name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise GenericExchangeError(f"Invalid numeric value for '{field_name}': {value!r}",
                                   exchange="binance", field_name=field_name,
                                   field_value=value) from None


def _levels(raw_levels: List[List[str]], side: str) -> Tuple[PriceLevel, ...]:
    return tuple((_number(price, side), _number(qty, side)) for price, qty, *_ in raw_levels)


def normalize_market_event(payload: Dict[str, Any], symbol: str) -> Optional[MarketEvent]:
    """
    Convert a raw Binance stream payload to an event.

    Args:
        payload: Decoded message data (the ``data`` part of multiplexed messages)
        symbol: Subscribed symbol, used for payloads that do not carry one

    Returns:
        Optional[MarketEvent]: The event, or None for payloads of unknown shape

    Raises:
        GenericExchangeError: If a numeric field does not parse
    """
    event_type = payload.get('e')

    if event_type == 'aggTrade':
        return AggregatedTradeEvent(
            symbol=payload['s'],
            price=_number(payload['p'], 'price'),
            qty=_number(payload['q'], 'qty'),
            trade_time=utc_datetime_from_millis(payload['T']),
            buyer_is_maker=bool(payload['m'])
        )

    if event_type == 'depthUpdate':
        return DepthUpdateEvent(
            symbol=payload['s'],
            first_update_id=int(payload['U']),
            final_update_id=int(payload['u']),
            bids=_levels(payload.get('b', []), 'bids'),
            asks=_levels(payload.get('a', []), 'asks')
        )

    if event_type is None and 'lastUpdateId' in payload:
        return PartialOrderBookEvent(
            symbol=symbol.upper(),
            last_update_id=int(payload['lastUpdateId']),
            bids=_levels(payload.get('bids', []), 'bids'),
            asks=_levels(payload.get('asks', []), 'asks')
        )

    return None
