"""
Binance Trade Listener
======================

Long-lived subscription to one symbol's Binance trade feed.

The listener opens a single socket on ``<symbol>@aggTrade`` through
python-binance's ``ThreadedWebsocketManager`` and blocks until the socket
closes, reports an error, or the cancellation event is set. Every payload is
normalized into a ``MarketEvent``, put on the outbound queue and passed to
the handler. A socket that cannot be opened is a fatal ``StreamError``; the
listener never reconnects on its own.

Usage:
    listener = BinanceTradeListener("btcusdt", handler=LoggingStreamHandler())
    listener = BinanceTradeListener.from_settings()   # STREAM_SYMBOL, STREAM_QUEUE_SIZE
    listener.start()            # runs on its own thread
    event = listener.get_event(timeout=5)
    listener.stop()
"""

import logging
import queue
import threading
from typing import Any, Callable, Dict, Optional

from binance import ThreadedWebsocketManager

from exchange_core.utils.exceptions import (
    ExchangeHubException, StreamError, handle_exception_with_logging
)
from .events import (
    AggregatedTradeEvent, DepthUpdateEvent, MarketEvent, PartialOrderBookEvent,
    normalize_market_event
)

AGG_TRADE_SUFFIX = "@aggTrade"


class StreamHandler:
    """Receives stream events. Every callback is a no-op unless overridden."""

    def on_aggregated_trade(self, event: AggregatedTradeEvent) -> None:
        pass

    def on_depth_update(self, event: DepthUpdateEvent) -> None:
        pass

    def on_partial_order_book(self, event: PartialOrderBookEvent) -> None:
        pass

    def dispatch(self, event: MarketEvent) -> None:
        if isinstance(event, AggregatedTradeEvent):
            self.on_aggregated_trade(event)
        elif isinstance(event, DepthUpdateEvent):
            self.on_depth_update(event)
        elif isinstance(event, PartialOrderBookEvent):
            self.on_partial_order_book(event)


class LoggingStreamHandler(StreamHandler):
    """Logs every trade; order book events are ignored."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def on_aggregated_trade(self, event: AggregatedTradeEvent) -> None:
        self.logger.info(f"- Symbol: {event.symbol}, price: {event.price}, qty: {event.qty}")


class BinanceTradeListener:
    """
    Cancellable Binance aggregate trade subscription.

    Attributes:
        symbol: Subscribed symbol (lowercase)
        channel: Stream name, ``<symbol>@aggTrade``
        events: Queue receiving every normalized event
    """

    def __init__(self, symbol: str, handler: Optional[StreamHandler] = None,
                 queue_size: int = 1000,
                 socket_manager_factory: Callable[[], Any] = ThreadedWebsocketManager,
                 poll_interval: float = 0.5):
        """
        Initialize the listener.

        Args:
            symbol (str): Trading symbol, e.g. 'btcusdt'
            handler (Optional[StreamHandler]): Receives events as they arrive
            queue_size (int): Capacity of the event queue (0 for unbounded)
            socket_manager_factory: Builds the websocket manager
            poll_interval (float): Seconds between liveness checks of the socket
        """
        self.logger = logging.getLogger(__name__)
        self.symbol = symbol.lower()
        self.channel = f"{self.symbol}{AGG_TRADE_SUFFIX}"
        self.handler = handler
        self.events: "queue.Queue[MarketEvent]" = queue.Queue(maxsize=queue_size)

        self._socket_manager_factory = socket_manager_factory
        self._poll_interval = poll_interval
        self._stop_event = threading.Event()
        self._ready = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.error: Optional[Exception] = None
        self.dropped_events = 0

    @classmethod
    def from_settings(cls, settings=None, handler: Optional[StreamHandler] = None,
                      **kwargs) -> "BinanceTradeListener":
        """
        Create a listener for the stream configured in the settings.

        Args:
            settings: Settings object (loaded with ``get_settings()`` when None)
            handler (Optional[StreamHandler]): Receives events as they arrive
        """
        if settings is None:
            from exchange_config.settings import get_settings
            settings = get_settings()

        return cls(settings.streaming.symbol, handler=handler,
                   queue_size=settings.streaming.queue_size, **kwargs)

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run(self, stop_event: Optional[threading.Event] = None) -> None:
        """
        Open the socket and block until it closes or ``stop_event`` is set.

        Raises:
            StreamError: If the socket cannot be opened
        """
        if stop_event is not None:
            self._stop_event = stop_event

        self.logger.info(f"🔌 Attempting to connect to Binance with symbol: {self.symbol}")
        manager = self._socket_manager_factory()
        try:
            try:
                manager.start()
                manager.start_multiplex_socket(callback=self.handle_message,
                                               streams=[self.channel])
            except Exception as e:
                self.error = StreamError(f"Failed to open {self.channel}: {e}",
                                         exchange="binance", channel=self.channel)
                raise self.error from e
            finally:
                self._ready.set()

            self.logger.info(f"✅ Subscribed to {self.channel}")
            while not self._stop_event.wait(self._poll_interval):
                if not manager.is_alive():
                    self.logger.warning(f"⚠️ Socket for {self.channel} closed")
                    break
        finally:
            manager.stop()
            self.logger.info(f"🔌 Listener for {self.channel} stopped")

    def start(self, timeout: float = 10.0) -> None:
        """
        Run the listener on a dedicated thread.

        Waits until the subscription is opened so a failed connect surfaces
        to the caller.

        Raises:
            StreamError: If the socket cannot be opened
        """
        if self.is_running:
            return

        self._stop_event = threading.Event()
        self._ready.clear()
        self.error = None
        self._thread = threading.Thread(target=self._run_in_thread,
                                        name=f"stream-{self.channel}", daemon=True)
        self._thread.start()

        if not self._ready.wait(timeout):
            self.stop()
            raise StreamError(f"Timed out opening {self.channel}",
                              exchange="binance", channel=self.channel)
        if self.error is not None:
            raise self.error

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        """Signal cancellation and wait for the listener thread to finish."""
        self._stop_event.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)

    def get_event(self, timeout: Optional[float] = None) -> MarketEvent:
        """
        Next event from the queue.

        Raises:
            queue.Empty: If no event arrives within ``timeout``
        """
        return self.events.get(timeout=timeout)

    def handle_message(self, message: Dict[str, Any]) -> None:
        """Normalize one raw socket message and publish the resulting event."""
        payload = message.get('data', message)

        if payload.get('e') == 'error':
            self.logger.error(f"❌ Stream error on {self.channel}: {payload.get('m')}")
            self._stop_event.set()
            return

        try:
            event = normalize_market_event(payload, self.symbol)
        except (ExchangeHubException, KeyError, TypeError, ValueError) as e:
            handle_exception_with_logging(self.logger, e, f"Dropping malformed message on {self.channel}")
            return

        if event is None:
            self.logger.debug(f"Ignoring unknown payload on {self.channel}: {payload}")
            return

        try:
            self.events.put_nowait(event)
        except queue.Full:
            self.dropped_events += 1
            self.logger.warning(f"⚠️ Event queue full, dropped event ({self.dropped_events} total)")

        if self.handler is not None:
            # Raising into the socket callback would kill the receive task
            try:
                self.handler.dispatch(event)
            except Exception as e:
                handle_exception_with_logging(self.logger, e, f"Stream handler failed on {self.channel}")

    def _run_in_thread(self) -> None:
        try:
            self.run()
        except StreamError:
            # Stored on self.error and re-raised by start()
            pass
