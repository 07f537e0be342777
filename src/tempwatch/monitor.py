"""ThresholdMonitor: directional, debounced threshold alerts over a sample stream.

Each ingested sample shifts the (previous, current) pair and every
threshold is evaluated in insertion order:

    armed and in_band(current) and crossed(previous, current)
        -> fire one ThresholdCrossed, disarm
    disarmed and not in_band(current)
        -> re-arm (ThresholdRearmed)
    anything else
        -> no change

Noise confined to the tolerance band can't re-fire a threshold: the
sample has to leave the band before the next crossing counts.

Readiness is monitor-private, one flag per held threshold (by position),
so equal or shared Threshold values never alias each other's state.

Delivery is synchronous. Observers subscribed on ``monitor.bus`` have all
been called by the time ingest_sample() returns, which gives alerts the
same total order as the samples. Every event also goes to the global
observability emitter (logs, JSONL, alert sinks) when it is configured.

Not safe for overlapping calls: with an async source, callers must await
one poll() before starting the next.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, TypeVar

from tempwatch.errors import InvalidConfiguration, InvalidSample, NoThresholdsDefined
from tempwatch.observability import emit
from tempwatch.observability.bus import EventBus, Subscription
from tempwatch.observability.events import (
    SampleIngested,
    SampleRejected,
    ThresholdCrossed,
    ThresholdRearmed,
    now_iso,
)
from tempwatch.sources import SampleSource, aread_sample, read_sample
from tempwatch.threshold import Threshold, is_finite_number
from tempwatch.units import celsius_to_fahrenheit

E = TypeVar("E")


@dataclass
class _ThresholdState:
    threshold: Threshold
    armed: bool = True


class ThresholdMonitor:
    """Holds the sample history and thresholds; raises crossing events.

    Usage:
        monitor = ThresholdMonitor(source, [Threshold(0, 0.5, "both")])
        monitor.subscribe(ThresholdCrossed, lambda e: print(e.value))
        monitor.check()            # sync source
        await monitor.poll()       # sync or async source
        monitor.ingest_sample(21.5)  # push a reading directly
    """

    def __init__(
        self,
        source: SampleSource | None = None,
        thresholds: Iterable[Threshold] = (),
        bus: EventBus | None = None,
    ) -> None:
        if source is not None and not callable(source):
            raise InvalidConfiguration("Sample source must be callable.")
        self._source = source
        self._bus = bus or EventBus()
        self._states: list[_ThresholdState] = []
        self._previous: float | None = None
        self._current: float | None = None
        for threshold in list(thresholds):
            self.add_threshold(threshold)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def source(self) -> SampleSource | None:
        return self._source

    @property
    def bus(self) -> EventBus:
        return self._bus

    @property
    def previous_sample(self) -> float | None:
        return self._previous

    @property
    def current_sample(self) -> float | None:
        return self._current

    @property
    def thresholds(self) -> tuple[Threshold, ...]:
        return tuple(s.threshold for s in self._states)

    def is_armed(self, key: Threshold | int) -> bool:
        """Readiness of a held threshold, by object identity or by position.

        Each add_threshold() call gets its own state, so an object added
        twice has two entries. Looking it up by object returns the first;
        pass its position in ``thresholds`` to reach the others.
        """
        return self._state_for(key).armed

    def _state_for(self, key: Threshold | int) -> _ThresholdState:
        if isinstance(key, int) and not isinstance(key, bool):
            if 0 <= key < len(self._states):
                return self._states[key]
            raise KeyError(f"No threshold at position {key}")
        for state in self._states:
            if state.threshold is key:
                return state
        raise KeyError(f"Threshold {key} is not held by this monitor")

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def add_threshold(self, threshold: Threshold) -> Threshold:
        """Append a threshold (evaluated after existing ones). Starts armed."""
        if not isinstance(threshold, Threshold):
            raise InvalidConfiguration(
                "Invalid threshold format. Must be an instance of Threshold."
            )
        self._states.append(_ThresholdState(threshold))
        return threshold

    def subscribe(self, event_type: type[E], handler: Callable[[E], None]) -> Subscription:
        """Observe events from this monitor. Call .unsubscribe() on the result to stop."""
        return self._bus.subscribe(event_type, handler)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def ingest_sample(self, value: Any) -> float:
        """Accept one reading, evaluate every threshold, deliver events.

        Raises NoThresholdsDefined or InvalidSample without touching any
        state; the caller may simply move on to the next reading.
        """
        if not self._states:
            raise NoThresholdsDefined()
        if not is_finite_number(value):
            emit(SampleRejected(value=repr(value), reason="not a finite real number",
                                timestamp=now_iso()))
            raise InvalidSample(value)

        previous = self._current
        self._previous = previous
        self._current = value

        events: list[Any] = []
        for state in self._states:
            event = self._evaluate(state, previous, value)
            if event is not None:
                events.append(event)
        events.append(SampleIngested(
            value=value,
            value_fahrenheit=celsius_to_fahrenheit(value),
            previous=previous,
            timestamp=now_iso(),
        ))

        for event in events:
            self._publish(event)
        return value

    def _evaluate(
        self, state: _ThresholdState, previous: float | None, current: float
    ) -> ThresholdCrossed | ThresholdRearmed | None:
        threshold = state.threshold
        # No direction to judge before a second sample exists
        if previous is None:
            return None

        in_band = threshold.in_band(current)
        if state.armed and in_band and threshold.crossed(previous, current):
            state.armed = False
            return create_alert_event(threshold, current)
        if not state.armed and not in_band:
            state.armed = True
            return ThresholdRearmed(threshold=threshold, value=current, timestamp=now_iso())
        return None

    def _publish(self, event: Any) -> None:
        self._bus.publish(event)
        emit(event)

    # ------------------------------------------------------------------
    # Polling the source
    # ------------------------------------------------------------------

    def _require_source(self) -> SampleSource:
        if self._source is None:
            raise InvalidConfiguration("Monitor has no sample source; use ingest_sample().")
        return self._source

    def check(self) -> float:
        """Read one sample from a synchronous source and ingest it.

        Thresholds are checked before the source is read, so a
        misconfigured monitor never consumes (and loses) a reading.
        """
        source = self._require_source()
        if not self._states:
            raise NoThresholdsDefined()
        return self.ingest_sample(read_sample(source))

    async def poll(self) -> float:
        """Like check(), awaiting the source if it is asynchronous.

        The only suspension point is the source read; evaluation and
        delivery then run to completion without yielding.
        """
        source = self._require_source()
        if not self._states:
            raise NoThresholdsDefined()
        value = await aread_sample(source)
        return self.ingest_sample(value)


def create_alert_event(threshold: Threshold, value: float) -> ThresholdCrossed:
    return ThresholdCrossed(
        threshold=threshold,
        value=value,
        value_fahrenheit=celsius_to_fahrenheit(value),
        direction=threshold.direction,
        timestamp=now_iso(),
    )
