"""No-op alert sink: default when alerting is disabled."""

from __future__ import annotations

from tempwatch.observability.events import ThresholdCrossed


class NoOpAlertSink:
    def fire(self, event: ThresholdCrossed) -> None:
        pass
