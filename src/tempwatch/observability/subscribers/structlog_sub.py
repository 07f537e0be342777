"""Routes every event to a structured log line via the configured formatter.

Always-on subscriber, registered by emitter.configure().
"""

from __future__ import annotations

from tempwatch.observability.bus import EventBus
from tempwatch.observability.events import (
    SampleIngested,
    SampleRejected,
    ThresholdCrossed,
    ThresholdRearmed,
)
from tempwatch.observability.logging import get_logger


def _get_logger():
    """Lazy logger: reflects the active formatter, not import-time state."""
    return get_logger("tempwatch.events")


def register_structlog_subscriber(bus: EventBus) -> None:
    def _log_crossed(event: ThresholdCrossed) -> None:
        _get_logger().info(
            "threshold.crossed",
            target=event.threshold.target,
            margin=event.threshold.margin,
            direction=event.direction.value,
            value=event.value,
            value_fahrenheit=event.value_fahrenheit,
        )

    def _log_rearmed(event: ThresholdRearmed) -> None:
        _get_logger().debug(
            "threshold.rearmed",
            target=event.threshold.target,
            direction=event.threshold.direction.value,
            value=event.value,
        )

    def _log_ingested(event: SampleIngested) -> None:
        _get_logger().debug(
            "sample.ingested",
            value=event.value,
            value_fahrenheit=event.value_fahrenheit,
            previous=event.previous,
        )

    def _log_rejected(event: SampleRejected) -> None:
        _get_logger().warning("sample.rejected", value=event.value, reason=event.reason)

    bus.subscribe(ThresholdCrossed, _log_crossed)
    bus.subscribe(ThresholdRearmed, _log_rearmed)
    bus.subscribe(SampleIngested, _log_ingested)
    bus.subscribe(SampleRejected, _log_rejected)
