"""Tests for Threshold: validation, band, directional predicate."""

from __future__ import annotations

import math
from dataclasses import FrozenInstanceError

import pytest

from tempwatch.errors import InvalidConfiguration
from tempwatch.threshold import Direction, Threshold, is_finite_number


class TestConstruction:
    def test_fields(self, freezing):
        assert freezing.target == 0
        assert freezing.margin == 0.5
        assert freezing.direction is Direction.BOTH

    def test_defaults(self):
        t = Threshold(10)
        assert t.margin == 0.5
        assert t.direction is Direction.BOTH

    def test_direction_string_is_normalized(self):
        assert Threshold(0, 1, "UP").direction is Direction.UP
        assert Threshold(0, 1, " down ").direction is Direction.DOWN
        assert Threshold(0, 1, Direction.BOTH).direction is Direction.BOTH

    def test_numbers_stored_as_float(self):
        t = Threshold(100, 1, "up")
        assert isinstance(t.target, float)
        assert isinstance(t.margin, float)

    def test_frozen(self, freezing):
        with pytest.raises(FrozenInstanceError):
            freezing.target = 5  # type: ignore[misc]

    def test_zero_margin_allowed(self):
        assert Threshold(0, 0, "up").margin == 0

    @pytest.mark.parametrize("target", ["0", None, math.nan, math.inf, True, [0], 10**400])
    def test_bad_target(self, target):
        with pytest.raises(InvalidConfiguration, match="target"):
            Threshold(target, 0.5, "both")

    @pytest.mark.parametrize("margin", ["0.5", None, math.nan, -math.inf, False, 10**400])
    def test_bad_margin(self, margin):
        with pytest.raises(InvalidConfiguration, match="margin"):
            Threshold(0, margin, "both")

    def test_negative_margin(self):
        with pytest.raises(InvalidConfiguration, match=">= 0"):
            Threshold(0, -0.1, "both")

    @pytest.mark.parametrize("direction", ["sideways", "", None, 1])
    def test_bad_direction(self, direction):
        with pytest.raises(InvalidConfiguration, match="up, down, both"):
            Threshold(0, 0.5, direction)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            Threshold(0, -1)


class TestBand:
    def test_band_is_closed(self):
        t = Threshold(10, 0.5, "both")
        assert t.in_band(9.5)
        assert t.in_band(10.5)
        assert t.in_band(10.4)
        assert not t.in_band(9.4)
        assert not t.in_band(10.51)

    def test_zero_margin_band_is_the_target(self):
        t = Threshold(10, 0, "both")
        assert t.in_band(10)
        assert not t.in_band(10.001)


class TestCrossed:
    def test_no_previous_never_crosses(self):
        for direction in Direction:
            assert not Threshold(0, 0.5, direction).crossed(None, 0.0)

    def test_up(self):
        t = Threshold(10, 0.5, "up")
        assert t.crossed(9, 10)
        assert t.crossed(9.9, 10.2)
        assert not t.crossed(10, 10.2)  # already at target
        assert not t.crossed(11, 10)  # falling

    def test_down(self):
        t = Threshold(10, 0.5, "down")
        assert t.crossed(11, 10)
        assert t.crossed(10.1, 9.8)
        assert not t.crossed(10, 9.8)
        assert not t.crossed(9, 10)

    def test_both_requires_a_real_crossing(self):
        t = Threshold(0, 0.5, "both")
        assert t.crossed(-1, 0.4)
        assert t.crossed(1, -0.4)
        # In-band wobble on one side of the target is not a crossing
        assert not t.crossed(0.4, 0.3)
        assert not t.crossed(-0.2, -0.4)


class TestSerialization:
    def test_round_trip(self):
        t = Threshold(100, 0.5, "up")
        assert t.to_dict() == {"target": 100.0, "margin": 0.5, "direction": "up"}
        assert Threshold.from_dict(t.to_dict()) == t

    def test_from_dict_defaults(self):
        t = Threshold.from_dict({"target": 5})
        assert t.margin == 0.5
        assert t.direction is Direction.BOTH

    def test_from_dict_requires_target(self):
        with pytest.raises(InvalidConfiguration, match="target"):
            Threshold.from_dict({"margin": 1})

    def test_str(self):
        assert str(Threshold(0, 0.5, "both")) == "0.0°C ±0.5 (both)"


class TestIsFiniteNumber:
    @pytest.mark.parametrize("value", [0, -3, 2.5, 1e300])
    def test_accepts(self, value):
        assert is_finite_number(value)

    @pytest.mark.parametrize(
        "value", [None, "1", math.nan, math.inf, True, object(), 10**400, -(10**400)]
    )
    def test_rejects(self, value):
        assert not is_finite_number(value)
