"""AlertSink protocol."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from tempwatch.observability.events import ThresholdCrossed


@runtime_checkable
class AlertSink(Protocol):
    """Where alert notifications go."""

    def fire(self, event: ThresholdCrossed) -> None: ...
