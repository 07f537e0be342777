"""Parsing helpers for CLI option values."""

from __future__ import annotations

from typing import Any

from tempwatch.threshold import Threshold

_MISSING = {"", "none", "null"}


def parse_threshold(spec: str) -> Threshold:
    """Parse TARGET[:MARGIN[:DIRECTION]], e.g. "0", "100:0.5", "-5:1:down".

    Raises InvalidConfiguration (via Threshold) for bad numbers or direction.
    """
    parts = [p.strip() for p in spec.split(":")]
    if not 1 <= len(parts) <= 3:
        raise ValueError(f"Bad threshold {spec!r}: expected TARGET[:MARGIN[:DIRECTION]]")
    values: dict[str, Any] = {"target": _number(parts[0], spec)}
    if len(parts) > 1 and parts[1]:
        values["margin"] = _number(parts[1], spec)
    if len(parts) > 2 and parts[2]:
        values["direction"] = parts[2]
    return Threshold(**values)


def _number(text: str, spec: str) -> float:
    try:
        return float(text)
    except ValueError as err:
        raise ValueError(f"Bad threshold {spec!r}: {text!r} is not a number") from err


def parse_readings(text: str) -> list[Any]:
    """Split a comma-separated list of readings.

    Unparseable tokens are kept as text and blanks/none/null become None,
    so they reach the monitor (or retrying source) as the garbage they are.
    """
    readings: list[Any] = []
    for token in text.split(","):
        token = token.strip()
        if token.lower() in _MISSING:
            readings.append(None)
            continue
        try:
            readings.append(float(token))
        except ValueError:
            readings.append(token)
    return readings
