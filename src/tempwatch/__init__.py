"""tempwatch: directional, debounced temperature threshold alerts."""

from tempwatch.errors import (
    InvalidConfiguration,
    InvalidSample,
    NoThresholdsDefined,
    NoValidReading,
    SourceError,
    SourceExhausted,
    TempwatchError,
)
from tempwatch.threshold import Direction, Threshold
from tempwatch.units import celsius_to_fahrenheit, fahrenheit_to_celsius
from tempwatch.monitor import ThresholdMonitor, create_alert_event
from tempwatch.observability.events import (
    SampleIngested,
    SampleRejected,
    ThresholdCrossed,
    ThresholdRearmed,
)
from tempwatch.sources import HwmonSource, ReplaySource, RetryingSource

__all__ = [
    "Direction",
    "Threshold",
    "ThresholdMonitor",
    "create_alert_event",
    "ThresholdCrossed",
    "ThresholdRearmed",
    "SampleIngested",
    "SampleRejected",
    "ReplaySource",
    "HwmonSource",
    "RetryingSource",
    "celsius_to_fahrenheit",
    "fahrenheit_to_celsius",
    "TempwatchError",
    "InvalidConfiguration",
    "InvalidSample",
    "NoThresholdsDefined",
    "SourceError",
    "NoValidReading",
    "SourceExhausted",
]
