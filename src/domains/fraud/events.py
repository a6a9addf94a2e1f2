"""Bounded fraud event queue with synchronous listener notification."""

import threading
from collections import deque
from collections.abc import Callable
from typing import Protocol

import structlog

from .config import default_config
from .error_sink import ErrorSink
from .errors import ListenerFailure, ValidationFailure
from .models import FraudEvent

logger = structlog.get_logger()

NOTIFY_CONTEXT = "EventBus.notifyListeners"
PUBLISH_CONTEXT = "EventBus.publish"


class FraudEventListener(Protocol):
    def on_fraud_event_detected(self, event: FraudEvent) -> None: ...


Listener = FraudEventListener | Callable[[FraudEvent], None]


class EventBus:
    """FIFO queue of the most recent fraud events plus registered listeners.

    Listeners run on the publishing thread, in registration order, after the
    bus lock has been released. A failing listener is reported to the error
    sink and does not stop the remaining ones.
    """

    def __init__(self, capacity: int | None = None, error_sink: ErrorSink | None = None) -> None:
        if capacity is None:
            capacity = default_config.events.capacity
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self._capacity = capacity
        self._error_sink = error_sink if error_sink is not None else ErrorSink()
        self._queue: deque[FraudEvent] = deque()
        # dict keys keep insertion order and give set semantics
        self._listeners: dict[Listener, None] = {}
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def error_sink(self) -> ErrorSink:
        return self._error_sink

    def publish(self, event: FraudEvent) -> None:
        if not isinstance(event, FraudEvent):
            self._error_sink.handle_exception(
                ValidationFailure(f"expected FraudEvent, got {type(event).__name__}"),
                PUBLISH_CONTEXT,
            )
            return

        try:
            with self._lock:
                if len(self._queue) >= self._capacity:
                    evicted = self._queue.popleft()
                    logger.debug("fraud_event_evicted", transaction_id=evicted.transaction_id)
                self._queue.append(event)
                listeners = list(self._listeners)

            logger.info(
                "fraud_event_published",
                transaction_id=event.transaction_id,
                event_type=event.event_type,
                risk_score=event.risk_score,
                listener_count=len(listeners),
            )
        except Exception as exc:
            self._error_sink.handle_exception(exc, PUBLISH_CONTEXT)
            return

        self._notify(event, listeners)

    def add_listener(self, listener: Listener) -> None:
        """Register ``listener``; registering it again is a no-op."""
        with self._lock:
            self._listeners.setdefault(listener, None)

    def remove_listener(self, listener: Listener) -> None:
        with self._lock:
            self._listeners.pop(listener, None)

    def listeners(self) -> tuple[Listener, ...]:
        with self._lock:
            return tuple(self._listeners)

    def snapshot(self) -> tuple[FraudEvent, ...]:
        """Oldest-first copy of the queued events."""
        with self._lock:
            return tuple(self._queue)

    def clear(self) -> None:
        with self._lock:
            self._queue.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._queue)

    def _notify(self, event: FraudEvent, listeners: list[Listener]) -> None:
        for listener in listeners:
            try:
                if callable(listener):
                    listener(event)
                else:
                    listener.on_fraud_event_detected(event)
            except Exception as exc:
                logger.warning(
                    "listener_failed",
                    transaction_id=event.transaction_id,
                    listener=repr(listener),
                    error=str(exc),
                )
                failure = ListenerFailure(f"{listener!r} failed: {exc}")
                failure.__cause__ = exc
                self._error_sink.handle_exception(failure, NOTIFY_CONTEXT)
