"""Log alert sink: fires alerts as structured warnings."""

from __future__ import annotations

from tempwatch.observability.events import ThresholdCrossed
from tempwatch.observability.logging import get_logger


class LogAlertSink:
    """Default when TEMPWATCH_ALERTS_ENABLED is on."""

    def fire(self, event: ThresholdCrossed) -> None:
        get_logger("tempwatch.alerts").warning(
            "alert.fired",
            target=event.threshold.target,
            margin=event.threshold.margin,
            direction=event.direction.value,
            value=event.value,
            value_fahrenheit=round(event.value_fahrenheit, 2),
        )
