"""Monitor configuration: YAML file + env var overrides.

Priority: env var > YAML file > default.
YAML file default: ~/.tempwatch/monitor.yaml

    thresholds:
      - {target: 0, margin: 0.5, direction: both}
      - {target: 100, margin: 0.5, direction: up}
    readings: [1.5, 1.0, 0.5, 0.0]   # replay source (demo)
    sensor_path: /sys/class/hwmon/hwmon0/temp1_input
    poll_interval: 1.0
    max_retries: 5

Env: TEMPWATCH_POLL_INTERVAL, TEMPWATCH_MAX_RETRIES, TEMPWATCH_SENSOR_PATH.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from tempwatch.errors import InvalidConfiguration
from tempwatch.monitor import ThresholdMonitor
from tempwatch.sources import (
    FREEZING_POINT_READINGS,
    HwmonSource,
    ReplaySource,
    RetryingSource,
    SampleSource,
)
from tempwatch.threshold import Threshold

_DEFAULT_PATH = Path("~/.tempwatch/monitor.yaml").expanduser()


def _parse_number(name: str, raw: Any, cast: type) -> Any:
    try:
        return cast(raw)
    except (TypeError, ValueError) as err:
        raise InvalidConfiguration(f"{name}={raw!r} is not a valid {cast.__name__}") from err


@dataclass
class MonitorConfig:
    thresholds: list[Threshold] = field(default_factory=list)
    # Replay source readings; ignored when sensor_path is set
    readings: list[Any] = field(default_factory=list)
    sensor_path: str | None = None
    poll_interval: float = 1.0
    max_retries: int = 5

    def __post_init__(self) -> None:
        if self.poll_interval < 0:
            raise InvalidConfiguration("poll_interval must be >= 0")
        if self.max_retries < 1:
            raise InvalidConfiguration("max_retries must be >= 1")

    @classmethod
    def load(cls, path: Path | None = None) -> MonitorConfig:
        """Load from YAML, then override with env vars.

        An explicit path that doesn't exist is an error; the default path
        is optional.
        """
        file_path = path or _DEFAULT_PATH
        raw: dict[str, Any] = {}
        if file_path.exists():
            try:
                loaded = yaml.safe_load(file_path.read_text(encoding="utf-8")) or {}
            except yaml.YAMLError as err:
                raise InvalidConfiguration(f"Invalid YAML in {file_path}: {err}") from err
            if not isinstance(loaded, dict):
                raise InvalidConfiguration(f"{file_path} must contain a mapping")
            raw = loaded
        elif path is not None:
            raise InvalidConfiguration(f"Config file not found: {path}")

        return cls.from_dict(raw, env=os.environ)

    @classmethod
    def from_dict(cls, raw: dict[str, Any], env: Any = None) -> MonitorConfig:
        env = env if env is not None else {}

        entries = raw.get("thresholds") or []
        if not isinstance(entries, list):
            raise InvalidConfiguration("'thresholds' must be a list")
        thresholds = [Threshold.from_dict(entry) for entry in entries]

        readings = raw.get("readings") or []
        if not isinstance(readings, list):
            raise InvalidConfiguration("'readings' must be a list")

        poll_interval = raw.get("poll_interval", 1.0)
        if "TEMPWATCH_POLL_INTERVAL" in env:
            poll_interval = env["TEMPWATCH_POLL_INTERVAL"]
        max_retries = raw.get("max_retries", 5)
        if "TEMPWATCH_MAX_RETRIES" in env:
            max_retries = env["TEMPWATCH_MAX_RETRIES"]
        sensor_path = env.get("TEMPWATCH_SENSOR_PATH") or raw.get("sensor_path")

        return cls(
            thresholds=thresholds,
            readings=readings,
            sensor_path=str(sensor_path) if sensor_path else None,
            poll_interval=_parse_number("poll_interval", poll_interval, float),
            max_retries=_parse_number("max_retries", max_retries, int),
        )

    def build_source(self) -> RetryingSource:
        """Configured source (hwmon > replay > freezing-point demo), with retries."""
        source: SampleSource
        if self.sensor_path:
            source = HwmonSource(self.sensor_path)
        elif self.readings:
            source = ReplaySource(self.readings)
        else:
            source = ReplaySource(FREEZING_POINT_READINGS)
        return RetryingSource(source, max_retries=self.max_retries)

    def build_monitor(self) -> ThresholdMonitor:
        return ThresholdMonitor(self.build_source(), self.thresholds)

    def to_dict(self) -> dict[str, Any]:
        return {
            "thresholds": [t.to_dict() for t in self.thresholds],
            "readings": list(self.readings),
            "sensor_path": self.sensor_path,
            "poll_interval": self.poll_interval,
            "max_retries": self.max_retries,
        }
