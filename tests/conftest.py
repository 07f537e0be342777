"""Shared fixtures: isolate the global observability emitter per test."""

from __future__ import annotations

import pytest

from tempwatch.threshold import Threshold


@pytest.fixture(autouse=True)
def _reset_observability():
    from tempwatch.observability.emitter import reset

    reset()
    yield
    reset()


@pytest.fixture()
def freezing() -> Threshold:
    return Threshold(0, 0.5, "both")
