"""Alert sinks: where ThresholdCrossed notifications end up."""

from tempwatch.observability.alerts.base import AlertSink
from tempwatch.observability.alerts.log_sink import LogAlertSink
from tempwatch.observability.alerts.noop_sink import NoOpAlertSink

__all__ = ["AlertSink", "LogAlertSink", "NoOpAlertSink"]
