"""Error kinds raised by tempwatch.

All errors are reported synchronously to the immediate caller. None are
swallowed inside the monitor.
"""

from __future__ import annotations

from typing import Any


class TempwatchError(Exception):
    """Base class for every tempwatch error."""


class InvalidConfiguration(TempwatchError, ValueError):
    """Bad threshold, monitor, or config-file arguments. Not retryable."""


class InvalidSample(TempwatchError, ValueError):
    """A reading that is not a finite real number.

    The reading is discarded and monitor state is untouched, so the caller
    can carry on with the next reading from its source.
    """

    def __init__(self, value: Any, reason: str = "not a finite real number") -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid sample {value!r}: {reason}")


class NoThresholdsDefined(TempwatchError, RuntimeError):
    """Evaluation attempted with zero configured thresholds."""

    def __init__(self) -> None:
        super().__init__("No thresholds defined")


class SourceError(TempwatchError):
    """The sample source raised or could not produce a usable reading."""


class NoValidReading(SourceError):
    """A retrying source gave up after every attempt returned garbage."""

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(f"No valid temperature reading after {attempts} attempts")


class SourceExhausted(SourceError):
    """A non-cycling replay source has no readings left."""
