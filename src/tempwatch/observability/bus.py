"""EventBus: typed publish/subscribe with per-handler failure isolation.

One blinker Signal per event class. Handlers receive the event object.
publish() calls every current handler in turn; a handler that raises is
logged and skipped, so it can't stop delivery to the others or unwind
into the publisher.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from blinker import Signal

from tempwatch.observability.logging import get_logger

E = TypeVar("E")

Handler = Callable[[Any], None]


def _get_logger():
    return get_logger("tempwatch.bus")


@dataclass(frozen=True)
class Subscription:
    """Handle returned by EventBus.subscribe()."""

    bus: EventBus
    event_type: type
    handler: Handler

    def unsubscribe(self) -> None:
        self.bus.unsubscribe(self.event_type, self.handler)


class EventBus:
    """Per-instance event namespace. Separate buses never see each other's events."""

    def __init__(self) -> None:
        self._signals: dict[type, Signal] = {}

    def _signal(self, event_type: type) -> Signal:
        signal = self._signals.get(event_type)
        if signal is None:
            signal = Signal(f"{event_type.__module__}.{event_type.__qualname__}")
            self._signals[event_type] = signal
        return signal

    def subscribe(self, event_type: type[E], handler: Callable[[E], None]) -> Subscription:
        """Register handler for event_type. Idempotent per (type, handler)."""
        if not callable(handler):
            raise TypeError(f"Handler must be callable, got {handler!r}")
        # weak=False: lambdas and closures would otherwise vanish immediately
        self._signal(event_type).connect(handler, weak=False)
        return Subscription(self, event_type, handler)

    def unsubscribe(self, event_type: type, handler: Handler) -> None:
        signal = self._signals.get(event_type)
        if signal is not None:
            signal.disconnect(handler)

    def has_subscribers(self, event_type: type) -> bool:
        signal = self._signals.get(event_type)
        return signal is not None and bool(signal.receivers)

    def publish(self, event: Any) -> int:
        """Deliver event to every handler of its exact type.

        Returns the number of handlers that completed without raising.
        """
        signal = self._signals.get(type(event))
        if signal is None or not signal.receivers:
            return 0

        delivered = 0
        # Snapshot: handlers may unsubscribe themselves mid-delivery
        for handler in list(signal.receivers_for(event)):
            try:
                handler(event)
            except Exception as exc:
                _get_logger().warning(
                    "bus.handler.failed",
                    event_type=type(event).__name__,
                    handler=getattr(handler, "__qualname__", repr(handler)),
                    error=repr(exc),
                )
                continue
            delivered += 1
        return delivered

    def clear(self) -> None:
        self._signals.clear()
