"""JSONL subscriber: writes every event to a JSONL file."""

from __future__ import annotations

from pathlib import Path

from tempwatch.observability.bus import EventBus
from tempwatch.observability.events import ALL_EVENTS, event_to_dict
from tempwatch.observability.sinks.jsonl_sink import JsonlSink


def register_jsonl_subscriber(bus: EventBus, path: str) -> JsonlSink:
    """Register a catch-all subscriber that writes every event to JSONL."""
    sink = JsonlSink(Path(path))

    def _write_jsonl(event: object) -> None:
        sink.write(event_to_dict(event))

    for event_type in ALL_EVENTS:
        bus.subscribe(event_type, _write_jsonl)
    return sink
