"""Structured logging for tempwatch.

ObservabilityConfig picks one of each:

    log_formatter    structlog (default) | stdlib
    log_destination  stderr (default) | jsonl (appends to log_path)
    log_format       json (default) | console

setup_logging() attaches a single handler to the root logger, so
plain logging.getLogger() callers share the same output. Loggers from
get_logger() take key=value fields either way:

    get_logger("tempwatch.events").info("threshold.crossed", target=0.0, value=0.4)
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from tempwatch.observability.config import ObservabilityConfig

FORMATTERS = ("structlog", "stdlib")
DESTINATIONS = ("stderr", "jsonl")

_DEFAULT_LOG_FILE = "tempwatch.jsonl"

# Set by setup_logging(); None means get_logger() falls back to stdlib
_active_formatter: str | None = None


def _structlog_formatter(log_format: str) -> logging.Formatter:
    import structlog

    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if log_format == "console":
        renderer: Any = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # setup_logging() may run again with another renderer
        cache_logger_on_first_use=False,
    )
    return structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )


def _stdlib_formatter(log_format: str) -> logging.Formatter:
    if log_format == "console":
        return logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    return JsonLineFormatter()


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record; fields from FieldLogger are merged in."""

    def format(self, record: logging.LogRecord) -> str:
        line: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%SZ"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": record.getMessage(),
        }
        line.update(getattr(record, "fields", {}))
        if record.exc_info and record.exc_info[1]:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, default=str)


class FieldLogger:
    """stdlib logger taking structlog-style fields: info("event", key=value)."""

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def _log(self, level: int, event: str, fields: dict[str, Any]) -> None:
        if not self._logger.isEnabledFor(level):
            return
        exc_info = fields.pop("exc_info", None)
        if exc_info is True:
            exc_info = sys.exc_info()
        self._logger.log(level, event, exc_info=exc_info or None, extra={"fields": fields})

    def debug(self, event: str, **fields: Any) -> None:
        self._log(logging.DEBUG, event, fields)

    def info(self, event: str, **fields: Any) -> None:
        self._log(logging.INFO, event, fields)

    def warning(self, event: str, **fields: Any) -> None:
        self._log(logging.WARNING, event, fields)

    def error(self, event: str, **fields: Any) -> None:
        self._log(logging.ERROR, event, fields)

    def exception(self, event: str, **fields: Any) -> None:
        fields.setdefault("exc_info", True)
        self._log(logging.ERROR, event, fields)


def _open_handler(config: ObservabilityConfig) -> logging.Handler:
    if config.log_destination == "jsonl":
        path = Path(config.log_path or _DEFAULT_LOG_FILE)
        path.parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(str(path), mode="a", encoding="utf-8")
    return logging.StreamHandler(sys.stderr)


def _detach_handlers(root: logging.Logger) -> None:
    # Only our own handler; pytest caplog and friends stay attached
    for handler in list(root.handlers):
        if getattr(handler, "_tempwatch_managed", False):
            root.removeHandler(handler)
            handler.close()


def setup_logging(config: ObservabilityConfig) -> None:
    """Attach the configured formatter/destination pair to the root logger."""
    global _active_formatter

    if config.log_formatter not in FORMATTERS:
        raise ValueError(
            f"Unknown log formatter: {config.log_formatter!r}. Available: {list(FORMATTERS)}."
        )
    if config.log_destination not in DESTINATIONS:
        raise ValueError(
            f"Unknown log destination: {config.log_destination!r}. "
            f"Available: {list(DESTINATIONS)}."
        )

    if config.log_formatter == "structlog":
        formatter = _structlog_formatter(config.log_format)
    else:
        formatter = _stdlib_formatter(config.log_format)

    handler = _open_handler(config)
    handler.setFormatter(formatter)
    handler._tempwatch_managed = True  # type: ignore[attr-defined]

    root = logging.getLogger()
    _detach_handlers(root)
    root.addHandler(handler)
    root.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))

    _active_formatter = config.log_formatter


def get_logger(name: str = "") -> Any:
    """Logger for the active formatter; a FieldLogger before setup_logging()."""
    if _active_formatter == "structlog":
        import structlog

        return structlog.get_logger(name)
    return FieldLogger(logging.getLogger(name))


def shutdown_logging() -> None:
    """Close and detach the handler installed by setup_logging()."""
    global _active_formatter

    _detach_handlers(logging.getLogger())
    _active_formatter = None
