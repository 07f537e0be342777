"""Alert subscriber: forwards ThresholdCrossed events to an AlertSink.

Defaults to NoOpAlertSink; TEMPWATCH_ALERTS_ENABLED=1 switches to
LogAlertSink (structured warning).
"""

from __future__ import annotations

from tempwatch.observability.alerts.base import AlertSink
from tempwatch.observability.alerts.log_sink import LogAlertSink
from tempwatch.observability.alerts.noop_sink import NoOpAlertSink
from tempwatch.observability.bus import EventBus
from tempwatch.observability.config import ObservabilityConfig
from tempwatch.observability.events import ThresholdCrossed


def register_alert_subscriber(
    bus: EventBus, config: ObservabilityConfig, sink: AlertSink | None = None
) -> AlertSink:
    if sink is None:
        sink = LogAlertSink() if config.alert_enabled else NoOpAlertSink()

    bus.subscribe(ThresholdCrossed, sink.fire)
    return sink
