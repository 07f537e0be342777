"""Singleton emitter: configure once, emit everywhere.

The global emit() function is the only API modules need.
It's a no-op when not configured (zero overhead in tests).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from tempwatch.observability.bus import EventBus

if TYPE_CHECKING:
    from tempwatch.observability.config import ObservabilityConfig

_bus: EventBus | None = None
_configured: bool = False


def emit(event: Any) -> None:
    """Fire-and-forget event emission. No-op if not configured."""
    if _bus is not None:
        _bus.publish(event)


def configure(config: ObservabilityConfig | None = None) -> EventBus:
    """Initialize the global bus and register subscribers.

    Called once at startup (CLI entry, test setup).
    Idempotent -- second call returns the existing bus.
    """
    global _bus, _configured

    if _configured and _bus is not None:
        return _bus

    from tempwatch.observability.config import ObservabilityConfig

    cfg = config or ObservabilityConfig()

    # Logging first so subscribers log through the configured formatter
    from tempwatch.observability.logging import setup_logging

    setup_logging(cfg)

    bus = EventBus()

    from tempwatch.observability.subscribers.structlog_sub import (
        register_structlog_subscriber,
    )

    register_structlog_subscriber(bus)

    # The jsonl log destination already writes to log_path; don't double up
    if cfg.log_path and cfg.log_destination != "jsonl":
        from tempwatch.observability.subscribers.jsonl import register_jsonl_subscriber

        register_jsonl_subscriber(bus, cfg.log_path)

    from tempwatch.observability.subscribers.alert import register_alert_subscriber

    register_alert_subscriber(bus, cfg)

    _bus = bus
    _configured = True
    return bus


def get_bus() -> EventBus | None:
    return _bus


def is_configured() -> bool:
    return _configured


def reset() -> None:
    """Reset for testing."""
    global _bus, _configured

    from tempwatch.observability.logging import shutdown_logging

    shutdown_logging()

    if _bus is not None:
        _bus.clear()
    _bus = None
    _configured = False
