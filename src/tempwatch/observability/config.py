"""Observability configuration, env-var driven.

All settings have safe defaults. Zero config required for basic
structured logging.

Logging architecture:
    formatter (how records are structured) × destination (where they go)

    Formatter: TEMPWATCH_LOG_FORMATTER=structlog (default) | stdlib
    Destination: TEMPWATCH_LOG_DESTINATION=stderr (default) | jsonl
    Renderer: TEMPWATCH_LOG_FORMAT=json (default) | console
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

_TRUTHY = ("1", "true", "on", "yes")


@dataclass
class ObservabilityConfig:
    """Observability configuration, env-var driven."""

    # --- Logging: formatter × destination ---
    log_formatter: str = field(
        default_factory=lambda: os.environ.get("TEMPWATCH_LOG_FORMATTER", "structlog")
    )  # "structlog" | "stdlib"

    log_destination: str = field(
        default_factory=lambda: os.environ.get("TEMPWATCH_LOG_DESTINATION", "stderr")
    )  # "stderr" | "jsonl"

    log_level: str = field(
        default_factory=lambda: os.environ.get("TEMPWATCH_LOG_LEVEL", "INFO")
    )

    log_format: str = field(
        default_factory=lambda: os.environ.get("TEMPWATCH_LOG_FORMAT", "json")
    )  # "json" | "console" (dev-friendly renderer)

    # JSONL file destination (also used as event sink path)
    log_path: str | None = field(
        default_factory=lambda: os.environ.get("TEMPWATCH_LOG_PATH")
    )

    # --- Alerting ---
    alert_enabled: bool = field(
        default_factory=lambda: os.environ.get("TEMPWATCH_ALERTS_ENABLED", "").lower()
        in _TRUTHY
    )
