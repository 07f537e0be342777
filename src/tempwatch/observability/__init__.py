"""tempwatch observability: events routed to logs, JSONL files, and alert sinks.

Public API:
    emit(event)     - Fire-and-forget event emission (no-op if not configured)
    configure(cfg)  - Initialize logging + subscribers (call once at startup)
    reset()         - Reset for testing
    get_logger(name)
"""

from tempwatch.observability.bus import EventBus, Subscription
from tempwatch.observability.config import ObservabilityConfig
from tempwatch.observability.emitter import configure, emit, get_bus, is_configured, reset
from tempwatch.observability.events import (
    ALL_EVENTS,
    SampleIngested,
    SampleRejected,
    ThresholdCrossed,
    ThresholdRearmed,
)
from tempwatch.observability.logging import get_logger, setup_logging, shutdown_logging

__all__ = [
    "emit",
    "configure",
    "get_bus",
    "is_configured",
    "reset",
    "EventBus",
    "Subscription",
    "ObservabilityConfig",
    "get_logger",
    "setup_logging",
    "shutdown_logging",
    "ALL_EVENTS",
    "ThresholdCrossed",
    "ThresholdRearmed",
    "SampleIngested",
    "SampleRejected",
]
