"""Threshold: an alert point with a tolerance band and a crossing direction.

A Threshold is a pure value. Whether it is currently armed (ready to fire)
is tracked by the ThresholdMonitor that holds it, so the same Threshold can
be handed to several monitors without their readiness interfering.

Band and direction predicates:

    in_band(x)   target - margin <= x <= target + margin
    UP           previous < target and current >= target
    DOWN         previous > target and current <= target
    BOTH         UP or DOWN
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from numbers import Real
from typing import Any

from tempwatch.errors import InvalidConfiguration


class Direction(StrEnum):
    """Required approach direction for a qualifying crossing."""

    UP = "up"
    DOWN = "down"
    BOTH = "both"


def is_finite_number(value: Any) -> bool:
    """True for finite ints/floats. Bools are not temperatures."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints too large for a float
        return False


def _coerce_direction(direction: Direction | str) -> Direction:
    if isinstance(direction, Direction):
        return direction
    if isinstance(direction, str):
        try:
            return Direction(direction.strip().lower())
        except ValueError:
            pass
    valid = ", ".join(d.value for d in Direction)
    raise InvalidConfiguration(f"Invalid direction {direction!r}: must be one of {valid}.")


@dataclass(frozen=True)
class Threshold:
    """Alert point in degrees Celsius."""

    target: float
    margin: float = 0.5
    direction: Direction = Direction.BOTH

    def __post_init__(self) -> None:
        if not is_finite_number(self.target):
            raise InvalidConfiguration(
                f"Invalid target temperature {self.target!r}: must be a finite number."
            )
        if not is_finite_number(self.margin):
            raise InvalidConfiguration(
                f"Invalid margin {self.margin!r}: must be a finite number."
            )
        if self.margin < 0:
            raise InvalidConfiguration(f"Invalid margin {self.margin!r}: must be >= 0.")
        # frozen: normalize through object.__setattr__
        object.__setattr__(self, "target", float(self.target))
        object.__setattr__(self, "margin", float(self.margin))
        object.__setattr__(self, "direction", _coerce_direction(self.direction))

    @property
    def lower(self) -> float:
        return self.target - self.margin

    @property
    def upper(self) -> float:
        return self.target + self.margin

    def in_band(self, value: float) -> bool:
        return self.lower <= value <= self.upper

    def crossed(self, previous: float | None, current: float) -> bool:
        """Directional predicate between two consecutive samples.

        Always False without a previous sample: there is no direction yet.
        """
        if previous is None:
            return False
        rising = previous < self.target <= current
        falling = previous > self.target >= current
        if self.direction is Direction.UP:
            return rising
        if self.direction is Direction.DOWN:
            return falling
        return rising or falling

    def to_dict(self) -> dict[str, Any]:
        return {
            "target": self.target,
            "margin": self.margin,
            "direction": self.direction.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Threshold:
        if not isinstance(data, dict) or "target" not in data:
            raise InvalidConfiguration(f"Threshold entry needs a 'target': {data!r}")
        return cls(
            target=data["target"],
            margin=data.get("margin", 0.5),
            direction=data.get("direction", Direction.BOTH),
        )

    def __str__(self) -> str:
        return f"{self.target}°C ±{self.margin} ({self.direction.value})"
