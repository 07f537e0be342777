"""Sample sources: where raw temperature readings come from.

A source is any zero-argument callable returning a reading in Celsius,
or an awaitable of one. The monitor never retries; retry policy lives
here in RetryingSource.

Sources:
    ReplaySource   fixed sequence, cycling (demo and tests)
    HwmonSource    Linux /sys/class/hwmon temp*_input file
    RetryingSource wraps any source, retries garbage readings
"""

from __future__ import annotations

import glob
import inspect
import os
from collections.abc import Awaitable, Callable, Iterable
from pathlib import Path
from typing import Any

from tempwatch.errors import NoValidReading, SourceError, SourceExhausted
from tempwatch.threshold import is_finite_number

SampleSource = Callable[[], "float | Awaitable[float]"]

# Oscillates around the freezing point; the None exercises retries
FREEZING_POINT_READINGS: tuple[Any, ...] = (
    1.5, None, 1.0, 0.5, 0.0, -0.5, 0.0, -0.5, 0.0, 0.5, 0.0,
)
BOILING_POINT_READINGS: tuple[float, ...] = (
    90, 95, 99, 100, 100.5, 100, 99, 100, 110, 100,
)

HWMON_ROOT = "/sys/class/hwmon"


def read_sample(source: SampleSource) -> Any:
    """Call a synchronous source. Source exceptions become SourceError."""
    try:
        value = source()
    except SourceError:
        raise
    except Exception as e:
        raise SourceError(f"Temperature source error: {e}") from e
    if inspect.isawaitable(value):
        if inspect.iscoroutine(value):
            value.close()
        raise SourceError("Source returned an awaitable; use the async poll path")
    return value


async def aread_sample(source: SampleSource) -> Any:
    """Call a sync or async source, awaiting the result if needed.

    Sources exposing an ``aread()`` coroutine (RetryingSource) use it.
    """
    aread = getattr(source, "aread", None)
    try:
        value = aread() if callable(aread) else source()
        if inspect.isawaitable(value):
            value = await value
    except SourceError:
        raise
    except Exception as e:
        raise SourceError(f"Temperature source error: {e}") from e
    return value


class ReplaySource:
    """Replays a fixed sequence of readings.

    With cycle=True (default) wraps around forever; otherwise raises
    SourceExhausted once the sequence is used up.
    """

    def __init__(self, readings: Iterable[Any], cycle: bool = True) -> None:
        self._readings = list(readings)
        if not self._readings:
            raise ValueError("ReplaySource needs at least one reading")
        self._cycle = cycle
        self._index = 0

    @property
    def position(self) -> int:
        return self._index

    def __call__(self) -> Any:
        if self._index >= len(self._readings):
            if not self._cycle:
                raise SourceExhausted(
                    f"Replay source exhausted after {len(self._readings)} readings"
                )
            self._index = 0
        value = self._readings[self._index]
        self._index += 1
        return value


class HwmonSource:
    """Reads one Linux hwmon temperature input.

    The kernel always reports millidegrees Celsius.
    """

    def __init__(self, path: str | Path, label: str | None = None) -> None:
        self.path = Path(path)
        self.label = label or self.path.name

    def __call__(self) -> float:
        raw = self.path.read_text(encoding="utf-8").strip()
        return float(raw) / 1000.0

    def __repr__(self) -> str:
        return f"HwmonSource({str(self.path)!r}, label={self.label!r})"


def discover_sensors(root: str = HWMON_ROOT) -> list[dict[str, str]]:
    """List every hwmon temperature input as {"path", "label"}."""
    sensors: list[dict[str, str]] = []
    for hwmon in sorted(glob.glob(os.path.join(root, "hwmon*"))):
        base_name = _read_text(os.path.join(hwmon, "name"))
        for temp_input in sorted(glob.glob(os.path.join(hwmon, "temp*_input"))):
            label = _read_text(temp_input[: -len("_input")] + "_label")
            sensors.append({
                "path": temp_input,
                "label": label or base_name or os.path.basename(temp_input),
            })
    return sensors


def _read_text(path: str) -> str | None:
    try:
        with open(path, encoding="utf-8") as f:
            return f.read().strip() or None
    except OSError:
        return None


class RetryingSource:
    """Retries a source until it yields a finite number.

    Garbage readings (None, NaN, strings) count as failed attempts; after
    max_retries of them NoValidReading is raised. An exception from the
    wrapped source is not retried: it surfaces as SourceError at once.
    """

    def __init__(self, source: SampleSource, max_retries: int = 5) -> None:
        if max_retries < 1:
            raise ValueError("max_retries must be >= 1")
        self.source = source
        self.max_retries = max_retries

    def __call__(self) -> float:
        for _ in range(self.max_retries):
            value = read_sample(self.source)
            if is_finite_number(value):
                return value
        raise NoValidReading(self.max_retries)

    async def aread(self) -> float:
        for _ in range(self.max_retries):
            value = await aread_sample(self.source)
            if is_finite_number(value):
                return value
        raise NoValidReading(self.max_retries)
