"""Typed event dataclasses for tempwatch.

All events are frozen (immutable) dataclasses. The monitor publishes
these; it doesn't know about logs, files, or alert sinks. Subscribers
handle routing.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from typing import Any

from tempwatch.threshold import Direction, Threshold


def now_iso() -> str:
    return datetime.now(UTC).isoformat()


# ---------------------------------------------------------------------------
# Threshold transitions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ThresholdCrossed:
    """Alert payload: a threshold was entered in its configured direction."""

    threshold: Threshold
    value: float  # Celsius
    value_fahrenheit: float
    direction: Direction
    timestamp: str


@dataclass(frozen=True)
class ThresholdRearmed:
    """A disarmed threshold saw a sample outside its band."""

    threshold: Threshold
    value: float
    timestamp: str


# ---------------------------------------------------------------------------
# Samples
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SampleIngested:
    value: float
    value_fahrenheit: float
    previous: float | None
    timestamp: str


@dataclass(frozen=True)
class SampleRejected:
    value: str  # repr() of whatever the source produced
    reason: str
    timestamp: str


ALL_EVENTS: tuple[type, ...] = (
    ThresholdCrossed,
    ThresholdRearmed,
    SampleIngested,
    SampleRejected,
)


def event_to_dict(event: Any) -> dict[str, Any]:
    """Flatten an event for JSON output, tagged with its type name."""
    return {"event": type(event).__name__, **asdict(event)}
